"""Django middleware driving the request cycle listener."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from ...core.types import RequestCycle, UnrecognizedRequestHandler
from ..handlers import resolve_view_handler

if TYPE_CHECKING:
    from django.http import HttpRequest, HttpResponse

    from ...core.listener import MonitoringRequestCycleListener
    from ...core.namer_sdk import TransactionNamer

logger = logging.getLogger(__name__)

CYCLE_ATTRIBUTE = "_txnamer_cycle"


def _get_namer() -> TransactionNamer:
    from ...core.namer_sdk import TransactionNamer

    return TransactionNamer.get_instance()


def _get_cycle(request: HttpRequest) -> RequestCycle | None:
    return getattr(request, CYCLE_ATTRIBUTE, None)


class TransactionNamingMiddleware:
    """Django middleware that names APM transactions after the resolved view.

    Maps Django's request handling onto the listener callbacks:

    - ``__call__``: begin request, with ``request.session`` as the session
    - ``process_view``: handler resolved
    - ``process_exception``: uncaught exception

    Must run after SessionMiddleware for session identity to be available.

    Args:
        get_response: The next middleware or view in the Django chain
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]):
        self.get_response = get_response

    def _listener(self) -> MonitoringRequestCycleListener | None:
        return _get_namer().listener

    def __call__(self, request: HttpRequest) -> HttpResponse:
        listener = self._listener()
        if listener is None:
            return self.get_response(request)

        cycle = RequestCycle(session=getattr(request, "session", None))
        cycle.set_metadata("path", request.path)
        setattr(request, CYCLE_ATTRIBUTE, cycle)

        listener.on_begin_request(cycle)

        response = self.get_response(request)

        # No view was resolved (e.g. 404 from the URL resolver)
        if cycle.first_handler:
            listener.on_request_handler_resolved(
                cycle, UnrecognizedRequestHandler(description=f"unresolved {cycle.get_metadata('path')}")
            )

        return response

    def process_view(
        self,
        request: HttpRequest,
        view_func: Callable,
        view_args: tuple,
        view_kwargs: dict,
    ) -> None:
        """Called just before Django calls the view.

        Args:
            request: Django HttpRequest object
            view_func: The view function about to be called
            view_args: Positional arguments for the view
            view_kwargs: Keyword arguments for the view
        """
        listener = self._listener()
        cycle = _get_cycle(request)
        if listener is None or cycle is None:
            return None

        config = _get_namer().config
        component = request.GET.get(config.component_parameter)
        handler = resolve_view_handler(view_func, component, config.ignored_view_prefixes)
        listener.on_request_handler_resolved(cycle, handler)
        return None

    def process_exception(self, request: HttpRequest, exception: Exception) -> None:
        """Report the exception and let Django's default handling build the response."""
        listener = self._listener()
        cycle = _get_cycle(request)
        if listener is None or cycle is None:
            return None

        return listener.on_exception(cycle, exception)
