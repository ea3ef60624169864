"""Shared pytest fixtures for diproxy tests."""

import pytest

from diproxy import ServiceContainer
from diproxy.lock_mode import LockMode
from tests.helpers import CountingLocator, StubFlavor


@pytest.fixture()
def flavor() -> StubFlavor:
    """Real flavor service behind proxies."""
    return StubFlavor()


@pytest.fixture()
def locator(flavor: StubFlavor) -> CountingLocator:
    """Locator knowing a single ``flavor`` service."""
    return CountingLocator({"flavor": flavor})


@pytest.fixture()
def container() -> ServiceContainer:
    """Default container with shared lifetime and thread locks."""
    return ServiceContainer()


@pytest.fixture()
def container_unlocked() -> ServiceContainer:
    """Container with locking disabled."""
    return ServiceContainer(lock_mode=LockMode.NONE)
