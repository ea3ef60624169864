from diproxy.proxy_classes.flavor import FlavorInterface, FlavorProxy

__all__ = [
    "FlavorInterface",
    "FlavorProxy",
]
