from diproxy.container import ORIGINAL_SERVICE_PREFIX, ServiceContainer, original_service_id
from diproxy.exceptions import (
    DIProxyCircularDependencyError,
    DIProxyError,
    DIProxyInvalidRegistrationError,
    DIProxyLocatorNotSetError,
    DIProxyServiceConstructionError,
    DIProxyServiceNotFoundError,
)
from diproxy.locator import ServiceLocator
from diproxy.lock_mode import LockMode
from diproxy.providers import Lifetime
from diproxy.proxy import LazyServiceProxy
from diproxy.proxy_classes import FlavorInterface, FlavorProxy

__all__ = [
    "ORIGINAL_SERVICE_PREFIX",
    "DIProxyCircularDependencyError",
    "DIProxyError",
    "DIProxyInvalidRegistrationError",
    "DIProxyLocatorNotSetError",
    "DIProxyServiceConstructionError",
    "DIProxyServiceNotFoundError",
    "FlavorInterface",
    "FlavorProxy",
    "LazyServiceProxy",
    "Lifetime",
    "LockMode",
    "ServiceContainer",
    "ServiceLocator",
    "original_service_id",
]
