from __future__ import annotations


class DIProxyError(Exception):
    """Represent a base class for all diproxy-specific failures.

    Catch this type when you want to handle any diproxy error path without
    matching each concrete exception class individually.
    """


class DIProxyInvalidRegistrationError(DIProxyError):
    """Signal invalid registration or proxy construction input.

    Raised by ``ServiceContainer.add_instance``, ``ServiceContainer.add_factory``
    and ``LazyServiceProxy`` construction when arguments are invalid.

    Typical fixes include passing a non-empty service id, a callable factory,
    and a ``LazyServiceProxy`` subclass for lazy registrations.
    """


class DIProxyServiceNotFoundError(DIProxyError):
    """Signal that a service id has no registration.

    Raised by ``ServiceContainer.resolve`` for the requested id or for any id
    listed in a factory's ``arguments``. Proxies surface it on first use.
    """

    def __init__(self, service_id: str) -> None:
        self.service_id = service_id
        super().__init__(f"Service {service_id!r} is not registered.")


class DIProxyServiceConstructionError(DIProxyError):
    """Signal that a registered service factory failed.

    The original exception is available as ``__cause__``. A proxy whose first
    resolution fails this way stays unresolved and retries on the next call.
    """

    def __init__(self, service_id: str) -> None:
        self.service_id = service_id
        super().__init__(f"Service {service_id!r} could not be constructed.")


class DIProxyCircularDependencyError(DIProxyError):
    """Signal that factory arguments form a cycle.

    Typical fix is registering one of the services in the cycle as lazy so the
    dependent receives a proxy instead of the real service.
    """

    def __init__(self, service_id: str, chain: list[str]) -> None:
        self.service_id = service_id
        self.chain = chain
        path = " -> ".join([*chain, service_id])
        super().__init__(f"Circular dependency detected: {path}")


class DIProxyLocatorNotSetError(DIProxyError):
    """Signal use of a proxy that has no locator bound.

    Raised by proxies restored from a serialized form. Typical fix is calling
    ``proxy.bind(locator)`` after deserialization.
    """
