from unmessy.infrastructure.cache.di import CacheProvider

__all__ = ["CacheProvider"]
