from __future__ import annotations

import functools
import logging
import threading
from collections.abc import Callable, Iterable
from typing import Any, TypeVar, cast

from diproxy.exceptions import (
    DIProxyError,
    DIProxyInvalidRegistrationError,
    DIProxyServiceConstructionError,
    DIProxyServiceNotFoundError,
)
from diproxy.lock_mode import LockMode
from diproxy.providers import Lifetime, ServiceFactory, ServiceRegistrations, ServiceSpec
from diproxy.proxy import LazyServiceProxy
from diproxy.resolution_stack import ResolutionLock, resolving

F = TypeVar("F", bound=Callable[..., Any])

logger = logging.getLogger(__name__)

ORIGINAL_SERVICE_PREFIX = "diproxy.proxy_original_service."
"""Prefix of the id the real service of a lazy registration is kept under."""

_MISSING: Any = object()


def original_service_id(service_id: str) -> str:
    """Return the id the real service behind a lazy ``service_id`` is stored under."""
    return f"{ORIGINAL_SERVICE_PREFIX}{service_id}"


class ServiceContainer:
    """Register services by string id and resolve them on demand.

    Services are either pre-built instances or factories. A factory receives
    the services named in its ``arguments`` positionally. Shared services are
    built once and cached; transient services are built on every ``resolve``.

    Registering a factory with ``lazy=True`` keeps the real factory under
    ``original_service_id(service_id)`` and makes ``service_id`` resolve to a
    proxy bound to this container. The real service is built only when a
    proxied method is first called.

    The container satisfies the ``ServiceLocator`` protocol, so it can back
    any ``LazyServiceProxy``.
    """

    def __init__(
        self,
        *,
        default_lifetime: Lifetime = Lifetime.SHARED,
        lock_mode: LockMode = LockMode.THREAD,
    ) -> None:
        """Initialize an empty container.

        Args:
            default_lifetime: Lifetime used by registrations that omit
                ``lifetime``.
            lock_mode: Locking strategy for shared instances and for proxies
                created by lazy registrations.

        Examples:
            .. code-block:: python

                container = ServiceContainer()

                single_threaded = ServiceContainer(lock_mode=LockMode.NONE)

        """
        self._default_lifetime = default_lifetime
        self._lock_mode = lock_mode
        self._registrations = ServiceRegistrations()
        self._shared: dict[str, Any] = {}
        self._locks: dict[str, ResolutionLock] = {}
        self._locks_guard = threading.Lock()

    # region Registration Methods
    def add_instance(self, service_id: str, instance: Any) -> None:
        """Register a pre-built service.

        Re-registering the same id overrides the previous registration.

        Args:
            service_id: Id to bind.
            instance: Service returned on resolution.

        """
        self._validate_service_id(service_id)
        self._shared.pop(service_id, None)
        self._registrations.add(ServiceSpec(service_id=service_id, instance=instance))
        logger.debug("Registered instance for service %r", service_id)

    def add_factory(  # noqa: PLR0913
        self,
        service_id: str,
        factory: ServiceFactory | None = None,
        *,
        arguments: Iterable[str] = (),
        lifetime: Lifetime | None = None,
        lazy: bool = False,
        proxy_class: type[LazyServiceProxy[Any]] | None = None,
    ) -> Callable[[F], F]:
        """Register a factory with direct and decorator forms.

        Args:
            service_id: Id to bind.
            factory: Callable building the service. Omit it to use the
                returned decorator instead.
            arguments: Service ids resolved and passed positionally to
                ``factory``.
            lifetime: Cache behavior. Defaults to the container default.
            lazy: Hand out ``proxy_class`` instances instead of the real
                service.
            proxy_class: ``LazyServiceProxy`` subclass implementing the
                service's interface. Required when ``lazy`` is true.

        Raises:
            DIProxyInvalidRegistrationError: If the id, factory, arguments or
                proxy class are invalid.

        Examples:
            .. code-block:: python

                container.add_factory("flavor", Flavor, lazy=True, proxy_class=FlavorProxy)


                @container.add_factory("mailer", arguments=["transport"])
                def build_mailer(transport: Transport) -> Mailer:
                    return Mailer(transport)

        """

        def decorator(decorated_factory: F) -> F:
            self.add_factory(
                service_id,
                decorated_factory,
                arguments=arguments,
                lifetime=lifetime,
                lazy=lazy,
                proxy_class=proxy_class,
            )
            return decorated_factory

        if factory is None:
            return decorator

        self._validate_service_id(service_id)
        if not callable(factory):
            msg = f"Factory for service {service_id!r} must be callable, got {factory!r}."
            raise DIProxyInvalidRegistrationError(msg)

        normalized_arguments = tuple(arguments)
        for argument in normalized_arguments:
            self._validate_service_id(argument)

        resolved_lifetime = lifetime if lifetime is not None else self._default_lifetime

        if not lazy:
            self._shared.pop(service_id, None)
            self._registrations.add(
                ServiceSpec(
                    service_id=service_id,
                    factory=factory,
                    arguments=normalized_arguments,
                    lifetime=resolved_lifetime,
                ),
            )
            logger.debug(
                "Registered factory for service %r (lifetime=%s)",
                service_id,
                resolved_lifetime.name,
            )
            return decorator

        if not (isinstance(proxy_class, type) and issubclass(proxy_class, LazyServiceProxy)):
            msg = (
                f"Lazy service {service_id!r} requires a LazyServiceProxy subclass "
                f"as proxy_class, got {proxy_class!r}."
            )
            raise DIProxyInvalidRegistrationError(msg)

        original_id = original_service_id(service_id)
        self.add_factory(
            original_id,
            factory,
            arguments=normalized_arguments,
            lifetime=resolved_lifetime,
        )
        self._shared.pop(service_id, None)
        self._registrations.add(
            ServiceSpec(
                service_id=service_id,
                factory=functools.partial(proxy_class, self, original_id, lock_mode=self._lock_mode),
                lifetime=Lifetime.SHARED,
            ),
        )
        logger.debug(
            "Registered lazy service %r with proxy %s",
            service_id,
            proxy_class.__qualname__,
        )
        return decorator

    # endregion Registration Methods

    # region Resolution Methods
    def has(self, service_id: str) -> bool:
        """Return whether ``service_id`` is registered."""
        return service_id in self._registrations

    def initialized(self, service_id: str) -> bool:
        """Return whether the shared instance for ``service_id`` has been built."""
        spec = self._registrations.find(service_id)
        if spec is None:
            return False
        return spec.is_instance or service_id in self._shared

    def service_ids(self) -> list[str]:
        """Return all registered ids, including original ids of lazy services."""
        return self._registrations.ids()

    def resolve(self, service_id: str) -> Any:
        """Resolve ``service_id`` and return the service.

        Args:
            service_id: Id to resolve.

        Raises:
            DIProxyServiceNotFoundError: If the id, or any id in the factory's
                ``arguments``, is not registered.
            DIProxyServiceConstructionError: If the factory raised. The factory
                exception is chained as ``__cause__``.
            DIProxyCircularDependencyError: If factory arguments form a cycle,
                or if concurrent first resolutions would wait on each other.

        """
        spec = self._registrations.find(service_id)
        if spec is None:
            raise DIProxyServiceNotFoundError(service_id)
        if spec.is_instance:
            return spec.instance

        with resolving(service_id):
            if spec.lifetime is Lifetime.TRANSIENT:
                return self._build(spec)

            service = self._shared.get(service_id, _MISSING)
            if service is not _MISSING:
                return service

            if self._lock_mode is LockMode.NONE:
                return self._build_shared(spec)

            with self._lock_for(service_id):
                service = self._shared.get(service_id, _MISSING)
                if service is not _MISSING:
                    return service
                return self._build_shared(spec)

    def reset(self) -> None:
        """Drop every cached shared service. Registrations are kept."""
        self._shared.clear()

    # endregion Resolution Methods

    def _build_shared(self, spec: ServiceSpec) -> Any:
        service = self._build(spec)
        self._shared[spec.service_id] = service
        return service

    def _build(self, spec: ServiceSpec) -> Any:
        arguments = [self.resolve(argument) for argument in spec.arguments]
        factory = cast("ServiceFactory", spec.factory)
        try:
            service = factory(*arguments)
        except DIProxyError:
            raise
        except Exception as exc:
            raise DIProxyServiceConstructionError(spec.service_id) from exc

        logger.debug("Constructed service %r", spec.service_id)
        return service

    def _lock_for(self, service_id: str) -> ResolutionLock:
        lock = self._locks.get(service_id)
        if lock is not None:
            return lock
        with self._locks_guard:
            return self._locks.setdefault(service_id, ResolutionLock(service_id))

    def _validate_service_id(self, service_id: Any) -> None:
        if not isinstance(service_id, str) or not service_id:
            msg = f"Service id must be a non-empty string, got {service_id!r}."
            raise DIProxyInvalidRegistrationError(msg)
