from __future__ import annotations

import functools
import logging
from types import ModuleType
from typing import Any, override

from ..base import InstrumentationBase
from ..registry import retry_patch

logger = logging.getLogger(__name__)

MIDDLEWARE_PATH = "txnamer.instrumentation.django.middleware.TransactionNamingMiddleware"

# Session identity needs request.session (and usually request.user) to be set
# before the naming middleware runs.
PRECEDING_MIDDLEWARE = (
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
)

DEFERRED_MARKER = "__txnamer_deferred__"

_middleware_injected = False


class DjangoInstrumentation(InstrumentationBase):
    """Django instrumentation via middleware injection.

    Settings are read lazily by Django. When this runs before they are
    configured (e.g. ``initialize()`` in ``wsgi.py`` ahead of ``django.setup()``),
    injection is deferred until ``django.setup`` has run.
    """

    def __init__(self, enabled: bool = True):
        super().__init__(
            name="DjangoInstrumentation",
            module_name="django",
            enabled=enabled,
        )

    @override
    def patch(self, module: ModuleType) -> bool:
        """Patch Django by injecting middleware."""
        if _middleware_injected:
            logger.debug("Middleware already injected, skipping")
            return True

        try:
            from django.conf import settings

            if not settings.configured:
                logger.debug("Django settings not configured yet, deferring middleware injection to django.setup")
                self._defer_until_setup(module)
                return False

            return self._inject_middleware(settings)

        except ImportError as e:
            logger.warning(f"Could not import Django settings: {e}")
        except Exception as e:
            logger.error(f"Failed to inject middleware: {e}", exc_info=True)
        return False

    def _inject_middleware(self, settings: Any) -> bool:
        global _middleware_injected

        current_middleware = list(getattr(settings, "MIDDLEWARE", None) or [])

        if MIDDLEWARE_PATH in current_middleware:
            logger.debug("TransactionNamingMiddleware already in settings, skipping injection")
            _middleware_injected = True
            return True

        position = self._insert_position(current_middleware)
        current_middleware.insert(position, MIDDLEWARE_PATH)
        settings.MIDDLEWARE = current_middleware

        _middleware_injected = True
        logger.debug(f"Injected TransactionNamingMiddleware at position {position} in MIDDLEWARE")
        return True

    def _defer_until_setup(self, module: ModuleType) -> None:
        original_setup = getattr(module, "setup", None)
        if original_setup is None or getattr(original_setup, DEFERRED_MARKER, False):
            return

        @functools.wraps(original_setup)
        def setup_then_inject(*args: Any, **kwargs: Any) -> Any:
            result = original_setup(*args, **kwargs)
            retry_patch(module.__name__)
            return result

        setattr(setup_then_inject, DEFERRED_MARKER, True)
        module.setup = setup_then_inject  # type: ignore[attr-defined]

    def _insert_position(self, middleware: list[str]) -> int:
        """Index right after the last session/auth middleware, or 0 if neither is installed."""
        position = 0
        for index, path in enumerate(middleware):
            if path in PRECEDING_MIDDLEWARE:
                position = index + 1
        return position
