"""New Relic agent: delegates to the ``newrelic.agent`` module API."""

from __future__ import annotations

import logging
from typing import override

from .base import MonitoringAgent

logger = logging.getLogger(__name__)

ACCOUNT_ATTRIBUTE = "account"


class NewRelicAgent(MonitoringAgent):
    """
    Reports through the New Relic Python agent.

    The ``newrelic`` package is an optional dependency and is imported when
    the agent is created. Install it with: pip install txnamer[newrelic]
    """

    def __init__(self) -> None:
        import newrelic.agent

        self._api = newrelic.agent
        logger.debug("NewRelicAgent initialized")

    def __repr__(self) -> str:
        return "NewRelicAgent()"

    @property
    @override
    def name(self) -> str:
        return "newrelic"

    @override
    def set_user_name(self, user_name: str) -> None:
        self._api.set_user_id(user_name)

    @override
    def set_account_name(self, account_name: str) -> None:
        self._api.add_custom_attribute(ACCOUNT_ATTRIBUTE, account_name)

    @override
    def set_transaction_name(self, category: str | None, name: str) -> None:
        self._api.set_transaction_name(name, group=category)

    @override
    def ignore_transaction(self) -> None:
        self._api.ignore_transaction()

    @override
    def notice_error(self, error: BaseException) -> None:
        self._api.notice_error(error=(type(error), error, error.__traceback__))
