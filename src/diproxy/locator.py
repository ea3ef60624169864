from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ServiceLocator(Protocol):
    """Protocol for anything that maps service ids to service objects."""

    def resolve(self, service_id: str) -> Any:
        """Resolve the given service id and return the service object."""
