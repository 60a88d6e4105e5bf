"""Name APM transactions after the page and component a web request resolves to."""

from .agents import (
    AgentCall,
    InMemoryAgent,
    MonitoringAgent,
    OpenTelemetryAgent,
    create_agent,
)
from .core import (
    ComponentRequestHandler,
    MonitoringRequestCycleListener,
    NamerConfig,
    NamerFileConfig,
    PageClassRequestHandler,
    RequestCycle,
    RequestHandler,
    SessionIdentity,
    TransactionNamer,
    UnrecognizedRequestHandler,
    component_path,
    find_project_root,
    load_namer_config,
    page_class_path,
    session_identity,
    transaction_name,
)
from .core.logger import LogLevel, get_log_level, set_log_level

__version__ = "0.1.0"

__all__ = [
    # Core
    "TransactionNamer",
    "MonitoringRequestCycleListener",
    "RequestCycle",
    "RequestHandler",
    "ComponentRequestHandler",
    "PageClassRequestHandler",
    "UnrecognizedRequestHandler",
    "SessionIdentity",
    "session_identity",
    # Naming
    "page_class_path",
    "component_path",
    "transaction_name",
    # Config
    "NamerConfig",
    "NamerFileConfig",
    "load_namer_config",
    "find_project_root",
    # Logger
    "LogLevel",
    "set_log_level",
    "get_log_level",
    # Agents
    "MonitoringAgent",
    "OpenTelemetryAgent",
    "InMemoryAgent",
    "AgentCall",
    "create_agent",
]
