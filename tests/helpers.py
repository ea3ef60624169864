from __future__ import annotations

import threading
from typing import Any

from diproxy import FlavorInterface
from diproxy.exceptions import DIProxyServiceNotFoundError


class StubFlavor(FlavorInterface):
    """Flavor service returning a marker for the ``rebuild`` flag."""

    def get(self, rebuild: bool = False) -> str:  # noqa: FBT001, FBT002
        return "rebuilt" if rebuild else "cached"


class CountingLocator:
    """Locator test double that counts ``resolve`` calls.

    Ids listed in ``missing`` raise ``DIProxyServiceNotFoundError`` until they
    are removed from the set.
    """

    def __init__(self, services: dict[str, Any] | None = None) -> None:
        self.services: dict[str, Any] = services if services is not None else {}
        self.missing: set[str] = set()
        self.calls: list[str] = []
        self._calls_lock = threading.Lock()

    def resolve(self, service_id: str) -> Any:
        with self._calls_lock:
            self.calls.append(service_id)
        if service_id in self.missing or service_id not in self.services:
            raise DIProxyServiceNotFoundError(service_id)
        return self.services[service_id]
