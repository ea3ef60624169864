from __future__ import annotations

from typing import Any, Generic, TypeVar

from typing_extensions import Self

from diproxy.exceptions import DIProxyInvalidRegistrationError, DIProxyLocatorNotSetError
from diproxy.lock_mode import LockMode
from diproxy.locator import ServiceLocator
from diproxy.resolution_stack import ResolutionLock

T = TypeVar("T")

_UNRESOLVED: Any = object()


class LazyServiceProxy(Generic[T]):
    """Stand in for a service and resolve it from a locator on first use.

    Subclasses implement the service's interface by forwarding each method to
    ``self._lazy_load_itself()``. The proxy resolves its service id at most
    once: a successful resolution is cached for the proxy's lifetime, a failed
    one leaves the proxy unresolved so the next call retries.

    Serializing a proxy (``pickle``, ``copy``) keeps only the service id and
    lock mode. The restored proxy is unresolved and has no locator until
    ``bind`` is called.

    Examples:
        .. code-block:: python

            class MailerProxy(LazyServiceProxy[Mailer], Mailer):
                def send(self, message: str) -> None:
                    return self._lazy_load_itself().send(message)


            mailer = MailerProxy(container, "mailer")

    """

    def __init__(
        self,
        locator: ServiceLocator,
        service_id: str,
        *,
        lock_mode: LockMode = LockMode.THREAD,
    ) -> None:
        """Initialize an unresolved proxy. Nothing is resolved here.

        Args:
            locator: Locator used to resolve ``service_id`` on first use.
            service_id: Id of the original proxied service.
            lock_mode: ``LockMode.THREAD`` makes concurrent first use resolve
                once; ``LockMode.NONE`` skips locking.

        Raises:
            DIProxyInvalidRegistrationError: If ``service_id`` is empty.

        """
        if not isinstance(service_id, str) or not service_id:
            msg = f"Proxy service id must be a non-empty string, got {service_id!r}."
            raise DIProxyInvalidRegistrationError(msg)

        self._locator: ServiceLocator | None = locator
        self._service_id = service_id
        self._lock_mode = lock_mode
        self._service: T = _UNRESOLVED
        self._lock = ResolutionLock(self._service_id)

    @property
    def service_id(self) -> str:
        """Id of the original proxied service."""
        return self._service_id

    @property
    def is_resolved(self) -> bool:
        """Whether the real service has been resolved and cached."""
        return self._service is not _UNRESOLVED

    def bind(self, locator: ServiceLocator) -> Self:
        """Bind the proxy to a locator and reset it to the unresolved state."""
        with self._lock:
            self._locator = locator
            self._service = _UNRESOLVED
        return self

    def _lazy_load_itself(self) -> T:
        """Lazy loads the real service from the locator."""
        service = self._service
        if service is not _UNRESOLVED:
            return service

        if self._lock_mode is LockMode.NONE:
            return self._load()

        with self._lock:
            service = self._service
            if service is not _UNRESOLVED:
                return service
            return self._load()

    def _load(self) -> T:
        if self._locator is None:
            msg = (
                f"Proxy for service {self._service_id!r} has no locator. "
                "Call proxy.bind(locator) after deserializing it."
            )
            raise DIProxyLocatorNotSetError(msg)

        service = self._locator.resolve(self._service_id)
        self._service = service
        return service

    def __getstate__(self) -> dict[str, Any]:
        return {
            "_service_id": self._service_id,
            "_lock_mode": self._lock_mode,
        }

    def __setstate__(self, state: dict[str, Any]) -> None:
        self._locator = None
        self._service_id = state["_service_id"]
        self._lock_mode = state["_lock_mode"]
        self._service = _UNRESOLVED
        self._lock = ResolutionLock(self._service_id)

    def __repr__(self) -> str:
        state = "resolved" if self.is_resolved else "unresolved"
        return f"<{type(self).__name__} service_id={self._service_id!r} {state}>"
