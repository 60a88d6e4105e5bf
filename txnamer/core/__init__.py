"""Core module for the transaction namer."""

from .config import NamerConfig, NamerFileConfig, find_project_root, load_namer_config
from .listener import MonitoringRequestCycleListener
from .namer_sdk import TransactionNamer
from .naming import component_path, page_class_path, qualified_name, transaction_name
from .types import (
    ComponentRequestHandler,
    PageClassRequestHandler,
    RequestCycle,
    RequestHandler,
    SessionIdentity,
    UnrecognizedRequestHandler,
    session_identity,
)

__all__ = [
    # Main SDK
    "TransactionNamer",
    "MonitoringRequestCycleListener",
    # Config
    "NamerConfig",
    "NamerFileConfig",
    "load_namer_config",
    "find_project_root",
    # Types
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
    "qualified_name",
    "transaction_name",
]
