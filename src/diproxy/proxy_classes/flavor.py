from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from diproxy.proxy import LazyServiceProxy


class FlavorInterface(ABC):
    """Capability of a flavor provider service."""

    @abstractmethod
    def get(self, rebuild: bool = False) -> Any:  # noqa: FBT001, FBT002
        """Return the flavor, rebuilding it when ``rebuild`` is true."""


class FlavorProxy(LazyServiceProxy[FlavorInterface], FlavorInterface):
    """Provides a lazy proxy for a ``FlavorInterface`` service."""

    def get(self, rebuild: bool = False) -> Any:  # noqa: FBT001, FBT002
        """Forward to the real flavor service, resolving it on first use."""
        return self._lazy_load_itself().get(rebuild)
