"""Shared pytest fixtures for wirebox tests."""

import pytest

from wirebox.container import Container
from wirebox.lock_mode import LockMode
from wirebox.type_registry import TypeRegistry


@pytest.fixture()
def type_registry() -> TypeRegistry:
    """Fresh registry so cached descriptors do not leak between tests."""
    return TypeRegistry()


@pytest.fixture()
def container(type_registry: TypeRegistry) -> Container:
    """Default thread-safe container."""
    return Container(type_registry=type_registry)


@pytest.fixture()
def unlocked_container(type_registry: TypeRegistry) -> Container:
    """Container with locking disabled."""
    return Container(lock_mode=LockMode.NONE, type_registry=type_registry)
