"""APM agents for the transaction namer."""

from __future__ import annotations

from .base import MonitoringAgent
from .memory import AgentCall, InMemoryAgent
from .opentelemetry import OpenTelemetryAgent, TxnSpanAttributes

AGENT_NAMES = ("opentelemetry", "newrelic", "memory")


def create_agent(name: str) -> MonitoringAgent:
    """Create an agent by its configured name.

    Raises:
        ValueError: If the name is not one of AGENT_NAMES
    """
    normalized = name.strip().lower()
    if normalized == "opentelemetry":
        return OpenTelemetryAgent()
    if normalized == "newrelic":
        from .newrelic import NewRelicAgent

        return NewRelicAgent()
    if normalized == "memory":
        return InMemoryAgent()
    raise ValueError(f"Unknown agent '{name}', expected one of: {', '.join(AGENT_NAMES)}")


__all__ = [
    # Base
    "MonitoringAgent",
    # Agents
    "OpenTelemetryAgent",
    "InMemoryAgent",
    "AgentCall",
    "TxnSpanAttributes",
    # Helpers
    "AGENT_NAMES",
    "create_agent",
]
