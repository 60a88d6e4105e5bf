"""In-memory agent for testing and development."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, override

from .base import MonitoringAgent


@dataclass(frozen=True)
class AgentCall:
    method: str
    args: tuple[Any, ...] = ()


class InMemoryAgent(MonitoringAgent):
    """
    Records agent calls in memory - useful for testing and development.

    Provides helper methods to query calls by method name.
    """

    def __init__(self) -> None:
        self._calls: list[AgentCall] = []

    def __repr__(self) -> str:
        return f"InMemoryAgent(calls={len(self._calls)})"

    @property
    @override
    def name(self) -> str:
        return "memory"

    @override
    def set_user_name(self, user_name: str) -> None:
        self._calls.append(AgentCall("set_user_name", (user_name,)))

    @override
    def set_account_name(self, account_name: str) -> None:
        self._calls.append(AgentCall("set_account_name", (account_name,)))

    @override
    def set_transaction_name(self, category: str | None, name: str) -> None:
        self._calls.append(AgentCall("set_transaction_name", (category, name)))

    @override
    def ignore_transaction(self) -> None:
        self._calls.append(AgentCall("ignore_transaction"))

    @override
    def notice_error(self, error: BaseException) -> None:
        self._calls.append(AgentCall("notice_error", (error,)))

    def get_all_calls(self) -> list[AgentCall]:
        return list(self._calls)

    def get_calls(self, method: str) -> list[AgentCall]:
        """Get recorded calls of one agent method."""
        return [call for call in self._calls if call.method == method]

    @property
    def transaction_names(self) -> list[str]:
        return [call.args[1] for call in self.get_calls("set_transaction_name")]

    def clear(self) -> None:
        self._calls.clear()
