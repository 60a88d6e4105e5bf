"""Base class for framework instrumentations."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from types import ModuleType

from .registry import install_hooks, register_patch

logger = logging.getLogger(__name__)


class InstrumentationBase(ABC):
    """Registers ``patch`` for a framework module and installs the import hooks.

    The module is patched right away when it is already imported, otherwise
    when it is first imported. A patch that returns False is retried the next
    time an instrumentation installs the hooks.
    """

    def __init__(self, name: str, module_name: str, enabled: bool = True):
        self.name = name
        self.module_name = module_name
        self.enabled = enabled

        if not enabled:
            logger.debug(f"{name} disabled, not registering patch for {module_name}")
            return

        register_patch(module_name, self.patch)
        install_hooks()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(module={self.module_name}, enabled={self.enabled})"

    @abstractmethod
    def patch(self, module: ModuleType) -> bool:
        """Patch the framework module.

        Returns:
            True once applied; False to leave the module unpatched and retry later
        """
