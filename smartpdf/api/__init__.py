from . import compress, health

routers = [
    compress.router,
    health.router,
]

__all__ = [
    "routers",
]
