from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeAlias, TypeVar, overload

from wirebox.type_registry import TypeName

if TYPE_CHECKING:
    from wirebox.bindings import DependantBindingSpec

T = TypeVar("T")


class IContainer(ABC):
    """Interface for container-like objects."""

    @overload
    @abstractmethod
    def create(self, name: type[T], /) -> T: ...

    @overload
    @abstractmethod
    def create(self, name: str, /) -> Any: ...

    @abstractmethod
    def create(self, name: TypeName, /) -> Any:
        """Return an instance of the named type with its constructor dependencies resolved."""

    @abstractmethod
    def bind(self, name: TypeName, implementation: TypeName | ContainerFactory) -> None:
        """Make ``name`` resolve to ``implementation``, replacing any previous creator."""

    @abstractmethod
    def singleton(self, name: TypeName, creator: ContainerFactory | None = None) -> None:
        """Make ``name`` resolve to one shared instance, built on first use."""

    @abstractmethod
    def when(self, name: TypeName) -> DependantBindingSpec:
        """Start a contextual binding for ``name`` as the dependant."""


ContainerFactory: TypeAlias = Callable[[IContainer], Any]
"""A callable receiving the container and returning the value to use."""
