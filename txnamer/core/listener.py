"""Request cycle listener that reports naming and errors to an APM agent."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

from .naming import transaction_name
from .types import RequestCycle, RequestHandler, session_identity

if TYPE_CHECKING:
    from ..agents.base import MonitoringAgent

logger = logging.getLogger(__name__)


class MonitoringRequestCycleListener:
    """Integrate a web framework's request cycle with an APM agent.

    Request cycle events are handled as follows:

    - At request start, user and account names are copied from the session
      when it provides them (see ``SessionIdentity``).
    - When the first handler of a request is resolved, the transaction is
      named after the page class with ``package_prefix`` removed and dots
      replaced by slashes. Component requests append a slash and the
      component path, with ``:`` replaced by slashes. Requests for anything
      else are ignored by the agent.
    - Uncaught exceptions are reported to the agent.

    Agent calls never raise into the framework.

    Args:
        package_prefix: Prefix stripped from page class names
        agent: The APM agent to report to
    """

    def __init__(self, package_prefix: str, agent: MonitoringAgent):
        self.package_prefix = package_prefix
        self.package_prefix_length = len(package_prefix)
        self.agent = agent

    def __repr__(self) -> str:
        return f"MonitoringRequestCycleListener(package_prefix={self.package_prefix!r}, agent={self.agent.name})"

    def on_begin_request(self, cycle: RequestCycle) -> None:
        cycle.first_handler = True
        identity = self._call_agent(lambda: session_identity(cycle.session), "session_identity")
        if identity is None:
            return
        self._call_agent(lambda: self.agent.set_user_name(identity.get_user_name()), "set_user_name")
        self._call_agent(lambda: self.agent.set_account_name(identity.get_account_name()), "set_account_name")

    def on_request_handler_resolved(self, cycle: RequestCycle, handler: RequestHandler) -> None:
        if not cycle.first_handler:
            return
        cycle.first_handler = False

        name = transaction_name(handler, self.package_prefix, self.package_prefix_length)
        if name is None:
            logger.debug(f"Ignoring transaction for handler {handler!r}")
            self._call_agent(self.agent.ignore_transaction, "ignore_transaction")
            return

        logger.debug(f"Naming transaction {name}")
        self._call_agent(lambda: self.agent.set_transaction_name(None, name), "set_transaction_name")

    def on_exception(self, cycle: RequestCycle, error: BaseException) -> None:
        """Report an uncaught exception.

        Returns:
            None, so the framework's default error handling proceeds
        """
        self._call_agent(lambda: self.agent.notice_error(error), "notice_error")
        return None

    def _call_agent(self, call: Callable[[], Any], method: str) -> Any:
        try:
            return call()
        except Exception as e:
            logger.warning(f"{method} failed while reporting to APM agent '{self.agent.name}': {e}", exc_info=True)
            return None
