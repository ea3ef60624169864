from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, TypeAlias

ServiceFactory: TypeAlias = Callable[..., Any]
"""A callable that builds a service from its resolved arguments."""


class Lifetime(Enum):
    """Define cache behavior for service instances."""

    TRANSIENT = auto()
    """Disable caching and call the factory for every resolution."""

    SHARED = auto()
    """Build the service once and reuse it for the container lifetime."""


@dataclass(kw_only=True, slots=True)
class ServiceSpec:
    """Describe how a single service id is produced and cached.

    Exactly one of ``instance`` or ``factory`` is expected. A lazy service is
    stored as a shared factory building its proxy.
    """

    service_id: str
    """The id this service is registered under."""

    instance: Any = None
    """A pre-built service, if applicable."""
    factory: ServiceFactory | None = None
    """A callable building the service, if applicable."""
    arguments: tuple[str, ...] = ()
    """Service ids resolved and passed positionally to ``factory``."""
    lifetime: Lifetime = Lifetime.SHARED
    """Cache behavior for factory-built services."""

    @property
    def is_instance(self) -> bool:
        return self.factory is None


class ServiceRegistrations:
    """Store service specs indexed by service id.

    Registration ids are unique: adding a spec for an existing id replaces the
    previous spec.
    """

    def __init__(self) -> None:
        self._registrations: dict[str, ServiceSpec] = {}

    def add(self, spec: ServiceSpec) -> None:
        """Add a service specification, replacing any spec with the same id."""
        self._registrations[spec.service_id] = spec

    def find(self, service_id: str) -> ServiceSpec | None:
        """Get a service specification by id, if it exists."""
        return self._registrations.get(service_id)

    def ids(self) -> list[str]:
        """Get all registered service ids in registration order."""
        return list(self._registrations)

    def __contains__(self, service_id: object) -> bool:
        return service_id in self._registrations
