"""Transaction name derivation.

Page classes are named by their fully qualified Python name with the
configured package prefix removed and dots turned into slashes. Component
paths use ``:`` as separator and are turned into slash paths as well.

The prefix test is a plain ``str.startswith``: a prefix of ``"app.pages"``
also strips the start of ``"app.pagesextra.View"``. Configure prefixes with
a trailing dot to avoid cutting a package name in half.
"""

from __future__ import annotations

from typing import Any

from .types import (
    ComponentRequestHandler,
    PageClassRequestHandler,
    RequestHandler,
)


def qualified_name(obj: Any) -> str | None:
    """Fully qualified ``module.QualName`` of a class or callable, or None."""
    module = getattr(obj, "__module__", None)
    qualname = getattr(obj, "__qualname__", None)
    if not isinstance(module, str) or not isinstance(qualname, str):
        return None
    return f"{module}.{qualname}"


def page_class_path(class_name: str, package_prefix: str, package_prefix_length: int | None = None) -> str:
    if package_prefix_length is None:
        package_prefix_length = len(package_prefix)
    if class_name.startswith(package_prefix):
        name_without_prefix = class_name[package_prefix_length:]
    else:
        name_without_prefix = class_name
    return name_without_prefix.replace(".", "/")


def component_path(path: str) -> str:
    return path.replace(":", "/")


def _page_name(page_class: Any) -> str:
    if isinstance(page_class, str):
        return page_class
    return qualified_name(page_class) or ""


def transaction_name(
    handler: RequestHandler,
    package_prefix: str,
    package_prefix_length: int | None = None,
) -> str | None:
    """Transaction name for a resolved handler, or None when it should be ignored.

    Args:
        handler: The resolved request handler
        package_prefix: Prefix stripped from page class names
        package_prefix_length: Characters stripped on a prefix match, defaults to len(package_prefix)

    Returns:
        ``/page/path`` or ``/page/path/component/path``, None for unrecognized handlers
    """
    match handler:
        case ComponentRequestHandler(page_class=page, component_path=path):
            page_path = page_class_path(_page_name(page), package_prefix, package_prefix_length)
            return "/" + page_path + "/" + component_path(path)
        case PageClassRequestHandler(page_class=page):
            return "/" + page_class_path(_page_name(page), package_prefix, package_prefix_length)
        case _:
            return None
