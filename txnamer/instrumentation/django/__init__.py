"""Django instrumentation for the transaction namer."""

from .instrumentation import DjangoInstrumentation
from .middleware import TransactionNamingMiddleware

__all__ = ["DjangoInstrumentation", "TransactionNamingMiddleware"]
