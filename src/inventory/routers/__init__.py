from .items import router as items_router

_routers = [items_router]

__all__ = ["get_routers"]


def get_routers():
    return _routers
