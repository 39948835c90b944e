"""HTTP layer: routers, dependencies and error handlers."""

from .endpoints import auth_router, records_router, reports_router, system_router

__all__ = [
    "auth_router",
    "records_router",
    "reports_router",
    "system_router",
]
