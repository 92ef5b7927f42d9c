from catalog.api.routes.v1.packages.endpoints import router

__all__ = ["router"]
