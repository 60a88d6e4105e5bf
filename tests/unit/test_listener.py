"""Tests for MonitoringRequestCycleListener lifecycle callbacks."""

import unittest

from txnamer.agents import InMemoryAgent
from txnamer.core.listener import MonitoringRequestCycleListener
from txnamer.core.types import (
    ComponentRequestHandler,
    PageClassRequestHandler,
    RequestCycle,
    UnrecognizedRequestHandler,
)
from tests.utils import FailingAgent, IdentitySession, PlainSession

PREFIX = "com.acme.web.pages."


class TestRequestCycle(unittest.TestCase):
    def test_starts_without_pending_handler(self):
        self.assertFalse(RequestCycle().first_handler)

    def test_metadata(self):
        cycle = RequestCycle()
        cycle.set_metadata("path", "/orders")
        self.assertEqual(cycle.get_metadata("path"), "/orders")
        self.assertIsNone(cycle.get_metadata("missing"))
        self.assertEqual(cycle.get_metadata("missing", "default"), "default")


class TestOnBeginRequest(unittest.TestCase):
    """Test identity propagation at request start."""

    def setUp(self):
        self.agent = InMemoryAgent()
        self.listener = MonitoringRequestCycleListener(PREFIX, self.agent)

    def test_marks_first_handler_pending(self):
        cycle = RequestCycle()
        self.listener.on_begin_request(cycle)
        self.assertTrue(cycle.first_handler)

    def test_propagates_identity_from_session(self):
        cycle = RequestCycle(session=IdentitySession(user_name="alice", account_name="acme"))
        self.listener.on_begin_request(cycle)

        self.assertEqual([c.args for c in self.agent.get_calls("set_user_name")], [("alice",)])
        self.assertEqual([c.args for c in self.agent.get_calls("set_account_name")], [("acme",)])

    def test_names_are_passed_verbatim(self):
        cycle = RequestCycle(session=IdentitySession(user_name="  Bob O'Neil ", account_name=""))
        self.listener.on_begin_request(cycle)

        self.assertEqual(self.agent.get_calls("set_user_name")[0].args, ("  Bob O'Neil ",))
        self.assertEqual(self.agent.get_calls("set_account_name")[0].args, ("",))

    def test_session_without_capability_makes_no_calls(self):
        cycle = RequestCycle(session=PlainSession(user="alice"))
        self.listener.on_begin_request(cycle)
        self.assertEqual(self.agent.get_all_calls(), [])

    def test_missing_session_makes_no_calls(self):
        cycle = RequestCycle(session=None)
        self.listener.on_begin_request(cycle)
        self.assertEqual(self.agent.get_all_calls(), [])
        self.assertTrue(cycle.first_handler)


class TestOnRequestHandlerResolved(unittest.TestCase):
    """Test transaction naming on handler resolution."""

    def setUp(self):
        self.agent = InMemoryAgent()
        self.listener = MonitoringRequestCycleListener(PREFIX, self.agent)
        self.cycle = RequestCycle()
        self.listener.on_begin_request(self.cycle)

    def test_names_component_request(self):
        handler = ComponentRequestHandler(
            page_class="com.acme.web.pages.dashboard.HomePage",
            component_path="form:submitButton",
        )
        self.listener.on_request_handler_resolved(self.cycle, handler)

        calls = self.agent.get_calls("set_transaction_name")
        self.assertEqual(len(calls), 1)
        self.assertEqual(calls[0].args, (None, "/dashboard/HomePage/form/submitButton"))

    def test_names_page_class_request(self):
        handler = PageClassRequestHandler(page_class="com.acme.web.pages.LoginPage")
        self.listener.on_request_handler_resolved(self.cycle, handler)
        self.assertEqual(self.agent.transaction_names, ["/LoginPage"])

    def test_non_matching_prefix_is_not_stripped(self):
        listener = MonitoringRequestCycleListener("com.other.", self.agent)
        cycle = RequestCycle()
        listener.on_begin_request(cycle)
        listener.on_request_handler_resolved(cycle, PageClassRequestHandler(page_class="com.acme.Page"))
        self.assertEqual(self.agent.transaction_names, ["/com/acme/Page"])

    def test_unrecognized_handler_ignores_transaction(self):
        self.listener.on_request_handler_resolved(self.cycle, UnrecognizedRequestHandler("resource"))

        self.assertEqual(len(self.agent.get_calls("ignore_transaction")), 1)
        self.assertEqual(self.agent.get_calls("set_transaction_name"), [])

    def test_only_first_handler_is_named(self):
        first = PageClassRequestHandler(page_class="com.acme.web.pages.LoginPage")
        second = PageClassRequestHandler(page_class="com.acme.web.pages.HomePage")

        self.listener.on_request_handler_resolved(self.cycle, first)
        self.listener.on_request_handler_resolved(self.cycle, second)
        self.listener.on_request_handler_resolved(self.cycle, UnrecognizedRequestHandler())

        self.assertEqual(self.agent.transaction_names, ["/LoginPage"])
        self.assertEqual(self.agent.get_calls("ignore_transaction"), [])
        self.assertFalse(self.cycle.first_handler)

    def test_handler_before_begin_request_is_ignored(self):
        cycle = RequestCycle()
        self.listener.on_request_handler_resolved(cycle, PageClassRequestHandler("com.acme.web.pages.LoginPage"))
        self.assertEqual(self.agent.get_all_calls(), [])

    def test_cycles_are_independent(self):
        other = RequestCycle()
        self.listener.on_begin_request(other)

        self.listener.on_request_handler_resolved(self.cycle, PageClassRequestHandler("com.acme.web.pages.A"))
        self.listener.on_request_handler_resolved(other, PageClassRequestHandler("com.acme.web.pages.B"))

        self.assertEqual(self.agent.transaction_names, ["/A", "/B"])


class TestOnException(unittest.TestCase):
    """Test exception reporting."""

    def setUp(self):
        self.agent = InMemoryAgent()
        self.listener = MonitoringRequestCycleListener(PREFIX, self.agent)

    def test_reports_error_and_returns_none(self):
        error = ValueError("boom")
        result = self.listener.on_exception(RequestCycle(), error)

        self.assertIsNone(result)
        calls = self.agent.get_calls("notice_error")
        self.assertEqual(len(calls), 1)
        self.assertIs(calls[0].args[0], error)


class TestAgentFailures(unittest.TestCase):
    """A failing agent must never raise into the framework."""

    def setUp(self):
        self.agent = FailingAgent()
        self.listener = MonitoringRequestCycleListener(PREFIX, self.agent)

    def test_begin_request_swallows_agent_errors(self):
        cycle = RequestCycle(session=IdentitySession())
        with self.assertLogs("txnamer.core.listener", level="WARNING"):
            self.listener.on_begin_request(cycle)
        self.assertEqual(self.agent.attempts, ["set_user_name", "set_account_name"])
        self.assertTrue(cycle.first_handler)

    def test_handler_resolved_swallows_agent_errors(self):
        cycle = RequestCycle()
        self.listener.on_begin_request(cycle)
        with self.assertLogs("txnamer.core.listener", level="WARNING"):
            self.listener.on_request_handler_resolved(cycle, PageClassRequestHandler("com.acme.web.pages.X"))
        self.assertFalse(cycle.first_handler)

    def test_ignore_swallows_agent_errors(self):
        cycle = RequestCycle()
        self.listener.on_begin_request(cycle)
        with self.assertLogs("txnamer.core.listener", level="WARNING"):
            self.listener.on_request_handler_resolved(cycle, UnrecognizedRequestHandler())
        self.assertEqual(self.agent.attempts, ["ignore_transaction"])

    def test_exception_swallows_agent_errors(self):
        with self.assertLogs("txnamer.core.listener", level="WARNING"):
            result = self.listener.on_exception(RequestCycle(), KeyError("missing"))
        self.assertIsNone(result)

    def test_session_errors_are_swallowed(self):
        class BrokenSession:
            def get_user_name(self):
                raise LookupError("no user")

            def get_account_name(self):
                return "acme"

        agent = InMemoryAgent()
        listener = MonitoringRequestCycleListener(PREFIX, agent)
        with self.assertLogs("txnamer.core.listener", level="WARNING"):
            listener.on_begin_request(RequestCycle(session=BrokenSession()))
        self.assertEqual([c.method for c in agent.get_all_calls()], ["set_account_name"])

    def test_session_attribute_lookup_errors_are_swallowed(self):
        class ExplodingSession:
            def __getattr__(self, name):
                raise RuntimeError(f"session backend unavailable for {name}")

        agent = InMemoryAgent()
        listener = MonitoringRequestCycleListener(PREFIX, agent)
        cycle = RequestCycle(session=ExplodingSession())
        with self.assertLogs("txnamer.core.listener", level="WARNING"):
            listener.on_begin_request(cycle)

        self.assertTrue(cycle.first_handler)
        self.assertEqual(agent.get_all_calls(), [])


if __name__ == "__main__":
    unittest.main()
