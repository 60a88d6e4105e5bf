"""Base interface for APM agents the request cycle listener reports to."""

from __future__ import annotations

from abc import ABC, abstractmethod


class MonitoringAgent(ABC):
    """
    Narrow view of an APM agent API.

    Every method acts on the transaction the agent considers current for the
    calling thread. Implementations may raise; the listener guards each call.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Short name used in log messages."""

    @abstractmethod
    def set_user_name(self, user_name: str) -> None: ...

    @abstractmethod
    def set_account_name(self, account_name: str) -> None: ...

    @abstractmethod
    def set_transaction_name(self, category: str | None, name: str) -> None:
        """Name the current transaction. A None category keeps the agent's default group."""

    @abstractmethod
    def ignore_transaction(self) -> None: ...

    @abstractmethod
    def notice_error(self, error: BaseException) -> None: ...
