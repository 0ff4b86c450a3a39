from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from contextlib import AbstractContextManager
from typing import Any, TypeAlias, TypeVar, overload

from wirebox.bindings import BindingBuilder, ContextualBindingStore, DependantBindingSpec
from wirebox.container_interface import ContainerFactory, IContainer
from wirebox.exceptions import (
    WireboxInvalidBindingError,
    WireboxUninstantiableTypeError,
    WireboxUnknownTypeError,
    WireboxUnresolvableParameterError,
)
from wirebox.lock_mode import LockMode
from wirebox.type_registry import (
    ConstructorDescriptor,
    ObjectType,
    ParameterDescriptor,
    TypeName,
    TypeRegistry,
    UnknownDeclaredType,
    cache_key,
    default_type_registry,
    is_runtime_class,
    lookup_keys,
    primitive_key,
    type_key,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

Creator: TypeAlias = Callable[[], Any]
"""A zero-argument function producing one instance of a named type."""


def _is_factory(value: object) -> bool:
    """Return whether a bound value is a function to call rather than a type or literal."""
    return callable(value) and not is_runtime_class(value)


class _SingletonCell:
    """Guarded lazy cell that runs its build function at most once."""

    __slots__ = ("_build", "_built", "_instance", "_key", "_lock")

    def __init__(self, key: str, build: Creator, lock: AbstractContextManager[Any]) -> None:
        self._key = key
        self._build = build
        self._lock = lock
        self._built = False
        self._instance: Any = None

    def get(self) -> Any:
        if self._built:
            return self._instance
        with self._lock:
            if not self._built:
                self._instance = self._build()
                self._built = True
                logger.debug("Built singleton instance of %s", self._key)
        return self._instance


class Container(IContainer):
    """Inversion-of-control container that autowires constructors.

    Every type name maps to one cached creator. Creators bound to a class apply
    to that class object only; creators bound to a type name apply to whichever
    class the name refers to, ahead of the autowired one.

    Unless bound otherwise, the creator for a class walks its constructor
    parameters, resolving class-annotated ones recursively and primitive ones
    from contextual bindings or defaults. Only the creator is cached; every call
    builds a fresh object graph, except for singletons.

    Args:
        lock_mode: ``LockMode.THREAD`` (default) guards caches and singleton
            cells for multi-threaded use; ``LockMode.NONE`` skips locking.
        type_registry: Constructor metadata cache. Defaults to the registry
            shared by all containers.

    Examples:
        .. code-block:: python

            container = Container()
            container.bind(Storage, S3Storage)
            container.when(Uploader).needs("$bucket").give("uploads")
            uploader = container.create(Uploader)

    """

    def __init__(
        self,
        *,
        lock_mode: LockMode = LockMode.THREAD,
        type_registry: TypeRegistry | None = None,
    ) -> None:
        self._lock_mode = lock_mode
        self._lock = lock_mode.new_lock()
        self._type_registry = type_registry or default_type_registry
        self._bound_creators: dict[TypeName, Creator] = {}
        self._autowired_creators: dict[type[Any], Creator] = {}
        self._bindings = ContextualBindingStore(lock_mode=lock_mode)
        self._binding_builder = BindingBuilder(self._bindings)

    @overload
    def create(self, name: type[T], /) -> T: ...

    @overload
    def create(self, name: str, /) -> Any: ...

    def create(self, name: TypeName, /) -> Any:
        """Return an instance of ``name``, building and caching its creator on first use.

        Raises:
            WireboxUnknownTypeError: ``name`` or a declared dependency type does not exist.
            WireboxUnresolvableParameterError: A primitive parameter has no binding
                and no default.
            WireboxUninstantiableTypeError: An abstract class or protocol has no binding.

        """
        creator = self._find_bound_creator(name)
        if creator is not None:
            return creator()

        cls = self._type_registry.resolve_type(name)
        if cls is not name:
            creator = self._find_bound_creator(cls)
        if creator is None:
            creator = self._autowired_creator(cls)
        return creator()

    def bind(self, name: TypeName, implementation: TypeName | ContainerFactory) -> None:
        """Resolve ``name`` through ``implementation`` from now on.

        A class or type name is delegated to ``create``; any other callable is
        invoked with the container on every resolution.
        """
        creator: Creator
        if is_runtime_class(implementation) or isinstance(implementation, str):
            creator = functools.partial(self.create, implementation)
        elif callable(implementation):
            creator = functools.partial(implementation, self)
        else:
            msg = (
                f"Cannot bind '{type_key(name)}' to {implementation!r}. Expected a class, "
                "a type name, or a callable taking the container."
            )
            raise WireboxInvalidBindingError(msg)

        self._set_creator(name, creator)
        logger.debug("Bound %s to %r", type_key(name), implementation)

    def singleton(self, name: TypeName, creator: ContainerFactory | None = None) -> None:
        """Resolve ``name`` to a single instance shared for the container's lifetime.

        Without ``creator`` the instance is built by the default constructor-walking
        creator, bypassing the creator cache that now holds the singleton itself.
        """
        key = type_key(name)
        build: Creator
        if creator is None:
            build = functools.partial(self._build_with_default_creator, name)
        else:
            build = functools.partial(creator, self)

        cell = _SingletonCell(key, build, self._lock_mode.new_lock())
        self._set_creator(name, cell.get)
        logger.debug("Registered singleton %s", key)

    def when(self, name: TypeName) -> DependantBindingSpec:
        """Start a contextual binding that only applies while building ``name``.

        Examples:
            .. code-block:: python

                container.when(Reports).needs(Storage).give(LocalStorage)
                container.when(Reports).needs("$page_size").give(50)

        """
        return self._binding_builder.for_dependant(name)

    def _set_creator(self, name: TypeName, creator: Creator) -> None:
        key = cache_key(name)
        with self._lock:
            self._bound_creators[key] = creator

    def _find_bound_creator(self, name: TypeName) -> Creator | None:
        for key in lookup_keys(name):
            creator = self._bound_creators.get(key)
            if creator is not None:
                return creator
        return None

    def _autowired_creator(self, cls: type[Any]) -> Creator:
        creator = self._autowired_creators.get(cls)
        if creator is None:
            creator = self._make_creator(cls)
            with self._lock:
                creator = self._autowired_creators.setdefault(cls, creator)
        return creator

    def _build_with_default_creator(self, name: TypeName) -> Any:
        return self._make_creator(name)()

    def _make_creator(self, name: TypeName) -> Creator:
        descriptor = self._type_registry.describe(name)
        if not descriptor.instantiable:
            raise WireboxUninstantiableTypeError(descriptor.key)

        logger.debug(
            "Built creator for %s with %d parameter(s)",
            descriptor.key,
            len(descriptor.parameters),
        )
        if not descriptor.parameters:
            return descriptor.type
        return functools.partial(self._construct, descriptor)

    def _construct(self, descriptor: ConstructorDescriptor) -> Any:
        args: list[Any] = []
        kwargs: dict[str, Any] = {}
        for parameter in descriptor.parameters:
            value = self._resolve_parameter(descriptor, parameter)
            if parameter.keyword_only:
                kwargs[parameter.name] = value
            else:
                args.append(value)
        return descriptor.type(*args, **kwargs)

    def _resolve_parameter(
        self,
        dependant: ConstructorDescriptor,
        parameter: ParameterDescriptor,
    ) -> Any:
        target = parameter.target
        if isinstance(target, UnknownDeclaredType):
            raise WireboxUnknownTypeError(
                target.name,
                f"declared for parameter '{parameter.name}' of '{dependant.key}' does not exist",
            )
        if isinstance(target, ObjectType):
            return self._resolve_object_parameter(dependant, target)
        return self._resolve_primitive_parameter(dependant, parameter)

    def _resolve_object_parameter(
        self,
        dependant: ConstructorDescriptor,
        target: ObjectType,
    ) -> Any:
        binding = self._bindings.get(dependant.type, target.type)
        if binding is None:
            return self.create(target.type)

        value = binding.value
        if is_runtime_class(value) or isinstance(value, str):
            return self.create(value)
        if callable(value):
            return value(self)
        return value

    def _resolve_primitive_parameter(
        self,
        dependant: ConstructorDescriptor,
        parameter: ParameterDescriptor,
    ) -> Any:
        binding = self._bindings.get(dependant.type, primitive_key(parameter.name))
        if binding is not None:
            return binding.value(self) if _is_factory(binding.value) else binding.value
        if parameter.has_default:
            return parameter.default
        raise WireboxUnresolvableParameterError(parameter.name, dependant.key)
