"""OpenTelemetry agent: reports onto the current span."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, override

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

from .base import MonitoringAgent

if TYPE_CHECKING:
    from opentelemetry.trace import Span

logger = logging.getLogger(__name__)


class TxnSpanAttributes:
    """Span attribute keys written by the OpenTelemetry agent."""

    USER_NAME = "enduser.id"
    ACCOUNT_NAME = "txnamer.account_name"
    TRANSACTION_NAME = "txnamer.transaction_name"
    TRANSACTION_CATEGORY = "txnamer.transaction_category"
    IGNORED = "txnamer.ignored"


class OpenTelemetryAgent(MonitoringAgent):
    """
    Maps the agent API onto the span that is current when a call is made.

    The server span is normally started by an OpenTelemetry framework
    instrumentation. OpenTelemetry cannot drop a span that has already
    started, so an ignored transaction is only marked with an attribute that
    samplers and exporters can filter on.
    """

    def __repr__(self) -> str:
        return "OpenTelemetryAgent()"

    @property
    @override
    def name(self) -> str:
        return "opentelemetry"

    def _current_span(self) -> Span | None:
        span = trace.get_current_span()
        if not span.is_recording():
            logger.debug("No recording span, skipping agent call")
            return None
        return span

    @override
    def set_user_name(self, user_name: str) -> None:
        span = self._current_span()
        if span:
            span.set_attribute(TxnSpanAttributes.USER_NAME, user_name)

    @override
    def set_account_name(self, account_name: str) -> None:
        span = self._current_span()
        if span:
            span.set_attribute(TxnSpanAttributes.ACCOUNT_NAME, account_name)

    @override
    def set_transaction_name(self, category: str | None, name: str) -> None:
        span = self._current_span()
        if not span:
            return
        span.update_name(name)
        span.set_attribute(TxnSpanAttributes.TRANSACTION_NAME, name)
        if category:
            span.set_attribute(TxnSpanAttributes.TRANSACTION_CATEGORY, category)

    @override
    def ignore_transaction(self) -> None:
        span = self._current_span()
        if span:
            span.set_attribute(TxnSpanAttributes.IGNORED, True)

    @override
    def notice_error(self, error: BaseException) -> None:
        span = self._current_span()
        if not span:
            return
        span.record_exception(error)
        span.set_status(Status(StatusCode.ERROR, f"{type(error).__name__}: {error}"))
