from .instrumentation import FlaskInstrumentation

__all__ = ["FlaskInstrumentation"]
