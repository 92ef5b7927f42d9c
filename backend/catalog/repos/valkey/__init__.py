from catalog.repos.valkey.cache_repo import ValkeyCacheRepository

__all__ = ["ValkeyCacheRepository"]
