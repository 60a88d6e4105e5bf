from __future__ import annotations

import logging
from types import ModuleType
from typing import TYPE_CHECKING, Any, Callable, override

from ...core.namer_sdk import TransactionNamer
from ...core.types import RequestCycle, RequestHandler, UnrecognizedRequestHandler
from ..base import InstrumentationBase
from ..handlers import resolve_view_handler

if TYPE_CHECKING:
    from flask import Flask, Request
    from flask.typing import ResponseReturnValue

    from ...core.config import NamerConfig

logger = logging.getLogger(__name__)

CYCLE_ATTRIBUTE = "_txnamer_cycle"
STATIC_ENDPOINT = "static"


class FlaskInstrumentation(InstrumentationBase):
    def __init__(self, enabled: bool = True):
        super().__init__(
            name="FlaskInstrumentation",
            module_name="flask",
            enabled=enabled,
        )

    @override
    def patch(self, module: ModuleType) -> bool:
        """Patch Flask to report each request's lifecycle to the listener"""
        flask_class = getattr(module, "Flask", None)
        if not flask_class:
            logger.warning("Flask.Flask class not found")
            return False

        original_full_dispatch_request: Callable[[Flask], Any] = flask_class.full_dispatch_request

        # Runs inside the request context, after URL matching and session opening
        def instrumented_full_dispatch_request(self: Flask) -> Any:
            return _dispatch_request(self, original_full_dispatch_request)

        flask_class.full_dispatch_request = instrumented_full_dispatch_request  # type: ignore
        logger.debug("Flask instrumentation applied")
        return True


def _dispatch_request(app: Flask, original_full_dispatch_request: Callable[[Flask], Any]) -> ResponseReturnValue:
    """Handle a single Flask request with listener callbacks around the original dispatch"""
    namer = TransactionNamer.get_instance()
    listener = namer.listener
    if listener is None:
        return original_full_dispatch_request(app)

    from flask import g, request, session

    cycle = RequestCycle(session=session._get_current_object())  # pyright: ignore[reportAttributeAccessIssue]
    cycle.set_metadata("path", request.path)
    setattr(g, CYCLE_ATTRIBUTE, cycle)

    listener.on_begin_request(cycle)
    listener.on_request_handler_resolved(cycle, _resolve_handler(app, request, cycle, namer.config))

    try:
        return original_full_dispatch_request(app)
    except Exception as e:
        listener.on_exception(cycle, e)
        raise


def _resolve_handler(app: Flask, request: Request, cycle: RequestCycle, config: NamerConfig) -> RequestHandler:
    if request.routing_exception is not None or request.url_rule is None:
        return UnrecognizedRequestHandler(description=f"unresolved {cycle.get_metadata('path')}")

    endpoint = request.url_rule.endpoint
    # Blueprint static endpoints are "<blueprint>.static"
    if endpoint == STATIC_ENDPOINT or endpoint.endswith(f".{STATIC_ENDPOINT}"):
        return UnrecognizedRequestHandler(description=endpoint)

    view = app.view_functions.get(endpoint)
    if view is None:
        return UnrecognizedRequestHandler(description=endpoint)

    component = request.args.get(config.component_parameter)
    return resolve_view_handler(view, component, config.ignored_view_prefixes)
