"""Import hooks that patch framework modules when they are imported.

A patch function returns True once it has been applied. A patch that returns
False (for example because the framework is not configured yet) leaves the
module unmarked, so it runs again on the next ``install_hooks`` or
``retry_patch`` call.
"""

import importlib.abc
import importlib.machinery
import logging
import sys
from collections.abc import Sequence
from types import ModuleType
from typing import Callable, override

logger = logging.getLogger(__name__)

PatchFn = Callable[[ModuleType], bool]

PATCHED_MARKER = "__txnamer_patched__"

_registry: dict[str, PatchFn] = {}
_finder_installed = False


def register_patch(module_name: str, patch_fn: PatchFn) -> None:
    _registry[module_name] = patch_fn


def install_hooks() -> None:
    """Patch registered modules that are already imported and hook future imports."""
    _install_finder()
    for name, module in list(sys.modules.items()):
        patch_fn = _registry.get(name)
        if patch_fn is not None and module is not None:
            _apply_patch(module, patch_fn)


def retry_patch(module_name: str) -> bool:
    """Run the registered patch for an imported module whose earlier attempt was deferred.

    Returns:
        True if the module is patched after the call
    """
    module = sys.modules.get(module_name)
    patch_fn = _registry.get(module_name)
    if module is None or patch_fn is None:
        return False
    return _apply_patch(module, patch_fn)


def is_patched(module: ModuleType) -> bool:
    return bool(getattr(module, PATCHED_MARKER, False))


class _PatchOnExecLoader(importlib.abc.Loader):
    """Delegates to the real loader and patches the module once it has executed."""

    def __init__(self, loader: importlib.abc.Loader, module_name: str) -> None:
        self._loader = loader
        self._module_name = module_name

    @override
    def create_module(self, spec: importlib.machinery.ModuleSpec):
        create = getattr(self._loader, "create_module", None)
        return create(spec) if callable(create) else None

    @override
    def exec_module(self, module: ModuleType) -> None:
        self._loader.exec_module(module)
        # Looked up at exec time so a patch registered after find_spec still applies
        patch_fn = _registry.get(self._module_name)
        if patch_fn is not None:
            _apply_patch(module, patch_fn)


class _RegisteredModuleFinder(importlib.abc.MetaPathFinder):
    @override
    def find_spec(
        self,
        fullname: str,
        path: Sequence[str] | None,
        target: ModuleType | None = None,
    ):
        if fullname not in _registry:
            return None

        spec = importlib.machinery.PathFinder.find_spec(fullname, path)
        if spec is None or spec.loader is None:
            return None

        spec.loader = _PatchOnExecLoader(spec.loader, fullname)
        return spec


def _install_finder() -> None:
    global _finder_installed
    if _finder_installed:
        return

    sys.meta_path.insert(0, _RegisteredModuleFinder())
    _finder_installed = True


def _apply_patch(module: ModuleType, patch_fn: PatchFn) -> bool:
    if is_patched(module):
        return True

    if not patch_fn(module):
        logger.debug(f"Patch for {module.__name__} deferred")
        return False

    setattr(module, PATCHED_MARKER, True)
    logger.debug(f"Patched module {module.__name__}")
    return True
