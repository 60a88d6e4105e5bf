"""Translate a framework's resolved view into a request handler."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from ..core.naming import qualified_name
from ..core.types import (
    ComponentRequestHandler,
    PageClassRequestHandler,
    RequestHandler,
    UnrecognizedRequestHandler,
)


def resolve_view_handler(
    view: Any,
    component: str | None = None,
    ignored_prefixes: Iterable[str] = (),
) -> RequestHandler:
    """Classify a resolved view.

    Class-based views (Django and Flask both set ``view_class`` on the view
    function returned by ``as_view``) are named after the class; function
    views after the function.

    Args:
        view: The view callable the framework will dispatch to
        component: ``:`` separated component path requested within the page, if any
        ignored_prefixes: Qualified name prefixes of views that are not pages

    Returns:
        The request handler variant for this view
    """
    target = getattr(view, "view_class", None) or view
    name = qualified_name(target)
    if name is None:
        return UnrecognizedRequestHandler(description=repr(view))
    if any(name.startswith(prefix) for prefix in ignored_prefixes):
        return UnrecognizedRequestHandler(description=name)
    if component:
        return ComponentRequestHandler(page_class=target, component_path=component)
    return PageClassRequestHandler(page_class=target)
