import diproxy
from diproxy import LazyServiceProxy, ServiceContainer, ServiceLocator
from tests.helpers import CountingLocator


def test_all_names_are_exported() -> None:
    for name in diproxy.__all__:
        assert hasattr(diproxy, name), name


def test_service_locator_is_structural() -> None:
    assert isinstance(ServiceContainer(), ServiceLocator)
    assert isinstance(CountingLocator(), ServiceLocator)
    assert not isinstance(object(), ServiceLocator)


def test_custom_proxy_subclass_forwards() -> None:
    class Greeter:
        def greet(self, name: str) -> str:
            return f"hello {name}"

    class GreeterProxy(LazyServiceProxy[Greeter], Greeter):
        def greet(self, name: str) -> str:
            return self._lazy_load_itself().greet(name)

    container = ServiceContainer()
    container.add_factory("greeter", Greeter, lazy=True, proxy_class=GreeterProxy)

    assert container.resolve("greeter").greet("world") == "hello world"
