"""Lazy services: hand out a proxy and build the real service on first use.

Register an expensive service as lazy, resolve it like any other service, and
see that construction is deferred until a proxied method is called.
"""

from __future__ import annotations

from diproxy import FlavorInterface, FlavorProxy, ServiceContainer


class Flavor(FlavorInterface):
    def __init__(self) -> None:
        print("building flavor")  # => building flavor
        self._flavor = "standard"

    def get(self, rebuild: bool = False) -> str:  # noqa: FBT001, FBT002
        if rebuild:
            self._flavor = "standard (rebuilt)"
        return self._flavor


def main() -> None:
    container = ServiceContainer()
    container.add_factory("flavor", Flavor, lazy=True, proxy_class=FlavorProxy)

    flavor = container.resolve("flavor")
    print(f"proxy={type(flavor).__name__} resolved={flavor.is_resolved}")
    # => proxy=FlavorProxy resolved=False

    print(f"flavor={flavor.get()}")  # => flavor=standard
    print(f"flavor={flavor.get(True)}")  # => flavor=standard (rebuilt)
    print(f"resolved={flavor.is_resolved}")  # => resolved=True


if __name__ == "__main__":
    main()
