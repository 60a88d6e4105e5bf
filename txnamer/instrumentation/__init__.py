"""Framework instrumentations for the transaction namer."""

from .base import InstrumentationBase
from .handlers import resolve_view_handler
from .registry import install_hooks, register_patch

__all__ = [
    "InstrumentationBase",
    "resolve_view_handler",
    "register_patch",
    "install_hooks",
]
