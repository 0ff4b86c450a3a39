"""Contextual bindings with ``when(...).needs(...).give(...)``.

A contextual binding applies only while building one dependant and wins over
a global binding for the same dependency. Primitive parameters are addressed
as ``"$name"``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from wirebox import Container


class Cache(ABC):
    @abstractmethod
    def kind(self) -> str: ...


class RedisCache(Cache):
    def kind(self) -> str:
        return "redis"


class MemoryCache(Cache):
    def kind(self) -> str:
        return "memory"


class CatalogService:
    def __init__(self, cache: Cache, page_size: int) -> None:
        self.cache = cache
        self.page_size = page_size


class SessionStore:
    def __init__(self, cache: Cache) -> None:
        self.cache = cache


def main() -> None:
    container = Container()
    container.bind(Cache, RedisCache)
    container.when(CatalogService).needs(Cache).give(MemoryCache)
    container.when(CatalogService).needs("$page_size").give(lambda c: 25 * 2)

    catalog = container.create(CatalogService)
    sessions = container.create(SessionStore)

    print(f"catalog_cache={catalog.cache.kind()}")  # => catalog_cache=memory
    print(f"session_cache={sessions.cache.kind()}")  # => session_cache=redis
    print(f"page_size={catalog.page_size}")  # => page_size=50


if __name__ == "__main__":
    main()
