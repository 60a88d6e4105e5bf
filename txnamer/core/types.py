"""Core types for the transaction namer: request cycle, handlers and session identity."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, Union


@dataclass
class RequestCycle:
    """Per-request state threaded through the lifecycle callbacks.

    Created by a framework instrumentation at the start of each request and
    passed by reference to every callback for that request.
    """

    session: Any = None
    first_handler: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)

    def set_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = value

    def get_metadata(self, key: str, default: Any = None) -> Any:
        return self.metadata.get(key, default)


class SessionIdentity(Protocol):
    """Session capability exposing the names reported to the APM agent."""

    def get_user_name(self) -> str: ...

    def get_account_name(self) -> str: ...


def session_identity(session: Any) -> SessionIdentity | None:
    """Return the session as a SessionIdentity, or None if it lacks the capability."""
    if session is None:
        return None
    get_user_name = getattr(session, "get_user_name", None)
    get_account_name = getattr(session, "get_account_name", None)
    if callable(get_user_name) and callable(get_account_name):
        return session
    return None


@dataclass(frozen=True)
class ComponentRequestHandler:
    """Request targets a component, addressed by a ``:`` separated path within its page."""

    page_class: Any
    component_path: str


@dataclass(frozen=True)
class PageClassRequestHandler:
    """Request targets a page class (or view callable) as a whole."""

    page_class: Any


@dataclass(frozen=True)
class UnrecognizedRequestHandler:
    """Anything else: static files, resources, unresolved routes."""

    description: str = ""


RequestHandler = Union[ComponentRequestHandler, PageClassRequestHandler, UnrecognizedRequestHandler]
