from __future__ import annotations

import datetime
import decimal
import enum
import importlib
import inspect
import logging
import pathlib
import types
import uuid
from dataclasses import dataclass
from inspect import Parameter
from typing import Annotated, Any, TypeAlias, get_args, get_origin, get_type_hints

from typing_extensions import Self, TypeIs, is_protocol

from wirebox.exceptions import WireboxUnknownTypeError
from wirebox.lock_mode import LockMode

logger = logging.getLogger(__name__)

TypeName: TypeAlias = type[Any] | str
"""A class object or its name. Names are dotted import paths or aliases used in bindings."""

PRIMITIVE_KEY_PREFIX = "$"
_BOUND_PARAMETER_KINDS = (Parameter.POSITIONAL_ONLY, Parameter.POSITIONAL_OR_KEYWORD)


def is_runtime_class(candidate: object) -> TypeIs[type[Any]]:
    """Return true when candidate is a runtime class safe for class-only operations."""
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def type_key(name: TypeName) -> str:
    """Normalize a class or a type name to its dotted string key.

    Classes map to ``"{module}.{qualname}"``; strings are returned unchanged.
    The key names classes in messages and matches entries registered by name.
    """
    if isinstance(name, str):
        return name
    if is_runtime_class(name):
        return f"{name.__module__}.{name.__qualname__}"
    raise WireboxUnknownTypeError(repr(name), "is not a class or a type name")


def cache_key(name: TypeName) -> TypeName:
    """Return the key an entry registered for ``name`` is stored under.

    Classes are keyed by identity and strings by value.
    """
    if isinstance(name, str) or is_runtime_class(name):
        return name
    raise WireboxUnknownTypeError(repr(name), "is not a class or a type name")


def lookup_keys(name: TypeName) -> tuple[TypeName, ...]:
    """Return the keys under which entries for ``name`` are looked up, in order.

    A class is looked up by identity first, then by its string key, so entries
    registered under a type name apply to the class while two distinct classes
    sharing a qualified name never share an entry.
    """
    key = cache_key(name)
    if isinstance(key, str):
        return (key,)
    return (key, type_key(key))


def primitive_key(parameter_name: str) -> str:
    """Return the contextual binding key for a primitive constructor parameter."""
    return f"{PRIMITIVE_KEY_PREFIX}{parameter_name}"


@dataclass(frozen=True, slots=True)
class ObjectType:
    """A parameter annotated with a class or interface the container can autowire."""

    key: str
    type: type[Any]


@dataclass(frozen=True, slots=True)
class PrimitiveType:
    """A parameter without a resolvable class annotation (scalars, unions, untyped)."""


@dataclass(frozen=True, slots=True)
class UnknownDeclaredType:
    """A parameter whose annotation names a class that does not exist."""

    name: str


ParameterTarget: TypeAlias = ObjectType | PrimitiveType | UnknownDeclaredType


@dataclass(frozen=True, slots=True)
class ParameterDescriptor:
    """Describes one constructor parameter, in declaration order."""

    name: str
    target: ParameterTarget
    has_default: bool
    default: Any = None
    keyword_only: bool = False


@dataclass(frozen=True, slots=True)
class ConstructorDescriptor:
    """Introspected constructor metadata for one class."""

    type: type[Any]
    key: str
    parameters: tuple[ParameterDescriptor, ...]
    instantiable: bool


@dataclass(frozen=True, slots=True)
class ObjectTypePolicy:
    """Decide which annotated classes are autowired and which count as primitive.

    Builtins, metaclasses and plain value types are never constructed from
    their own constructors, so parameters annotated with them are primitive.
    """

    value_types: tuple[type[Any], ...] = (
        pathlib.PurePath,
        datetime.datetime,
        datetime.date,
        datetime.time,
        datetime.timedelta,
        uuid.UUID,
        decimal.Decimal,
        enum.Enum,
    )

    def is_object_type(self, candidate: object) -> TypeIs[type[Any]]:
        if candidate is Any or not is_runtime_class(candidate):
            return False
        if candidate.__module__ == "builtins":
            return False
        if issubclass(candidate, type):
            return False
        return not issubclass(candidate, self.value_types)


class TypeRegistry:
    """Cache constructor metadata per class, populated lazily and never evicted.

    Args:
        lock_mode: Locking strategy for the shared caches.
        policy: Classification of annotations into object and primitive types.

    """

    def __init__(
        self,
        *,
        lock_mode: LockMode = LockMode.THREAD,
        policy: ObjectTypePolicy | None = None,
    ) -> None:
        self._policy = policy or ObjectTypePolicy()
        self._lock = lock_mode.new_lock()
        self._types_by_name: dict[str, type[Any]] = {}
        self._descriptors: dict[type[Any], ConstructorDescriptor] = {}

    def register(self, cls: type[Any]) -> Self:
        """Pre-seed the registry with a class so its name resolves without importing.

        Useful for classes that are not importable by dotted path, such as classes
        defined inside functions.
        """
        self.describe(cls)
        return self

    def resolve_type(self, name: TypeName) -> type[Any]:
        """Return the class a name refers to.

        Raises:
            WireboxUnknownTypeError: When ``name`` does not resolve to a class.

        """
        if is_runtime_class(name):
            return name

        key = type_key(name)
        cls = self._types_by_name.get(key)
        if cls is None:
            cls = _import_class(key)
            with self._lock:
                self._types_by_name.setdefault(key, cls)
        return cls

    def describe(self, name: TypeName) -> ConstructorDescriptor:
        """Return constructor metadata for the named class, from cache or introspection.

        Raises:
            WireboxUnknownTypeError: When ``name`` does not resolve to a class.

        """
        cls = self.resolve_type(name)
        descriptor = self._descriptors.get(cls)
        if descriptor is not None:
            return descriptor

        descriptor = self._introspect(cls)
        with self._lock:
            self._types_by_name[descriptor.key] = cls
            descriptor = self._descriptors.setdefault(cls, descriptor)
        return descriptor

    def _introspect(self, cls: type[Any]) -> ConstructorDescriptor:
        key = type_key(cls)
        parameters = tuple(self._describe_parameters(cls))
        logger.debug(
            "Described constructor of %s: %d parameter(s)",
            key,
            len(parameters),
        )
        return ConstructorDescriptor(
            type=cls,
            key=key,
            parameters=parameters,
            instantiable=not _is_interface(cls),
        )

    def _describe_parameters(self, cls: type[Any]) -> list[ParameterDescriptor]:
        init = cls.__init__
        if init is object.__init__:
            return []

        try:
            signature = inspect.signature(init)
        except (TypeError, ValueError):
            # Builtin-backed constructors expose no signature.
            return []

        parameters = list(signature.parameters.values())
        # __init__ read off the class is unbound; its first positional slot is the instance.
        if parameters and parameters[0].kind in _BOUND_PARAMETER_KINDS:
            parameters = parameters[1:]
        annotations = self._resolved_annotations(cls, init, parameters)

        return [
            ParameterDescriptor(
                name=parameter.name,
                target=self._classify(annotations.get(parameter.name, Parameter.empty)),
                has_default=parameter.default is not Parameter.empty,
                default=None if parameter.default is Parameter.empty else parameter.default,
                keyword_only=parameter.kind is Parameter.KEYWORD_ONLY,
            )
            for parameter in parameters
            if parameter.kind not in (Parameter.VAR_POSITIONAL, Parameter.VAR_KEYWORD)
        ]

    def _resolved_annotations(
        self,
        cls: type[Any],
        init: Any,
        parameters: list[Parameter],
    ) -> dict[str, Any]:
        localns = {cls.__name__: cls}
        try:
            return get_type_hints(init, localns=localns, include_extras=True)
        except (AttributeError, NameError, SyntaxError, TypeError) as error:
            logger.debug(
                "Falling back to per-parameter annotation evaluation for %s: %s",
                type_key(cls),
                error,
            )

        globalns = getattr(init, "__globals__", {})
        annotations: dict[str, Any] = {}
        for parameter in parameters:
            annotation = parameter.annotation
            if isinstance(annotation, str):
                annotation = _evaluate_forward_reference(annotation, globalns, localns)
            annotations[parameter.name] = annotation
        return annotations

    def _classify(self, annotation: Any) -> ParameterTarget:
        annotation = _unwrap_annotated(annotation)
        if annotation is Parameter.empty:
            return PrimitiveType()
        if isinstance(annotation, str):
            return UnknownDeclaredType(annotation)
        if self._policy.is_object_type(annotation):
            return ObjectType(key=type_key(annotation), type=annotation)
        return PrimitiveType()


def _unwrap_annotated(annotation: Any) -> Any:
    """Recursively unwrap Annotated[T, ...] into T."""
    if get_origin(annotation) is not Annotated:
        return annotation
    return _unwrap_annotated(get_args(annotation)[0])


def _evaluate_forward_reference(
    annotation: str,
    globalns: dict[str, Any],
    localns: dict[str, Any],
) -> Any:
    holder = types.SimpleNamespace(__annotations__={"annotation": annotation})
    try:
        hints = get_type_hints(
            holder,
            globalns=globalns,
            localns=localns,
            include_extras=True,
        )
    except (AttributeError, NameError, SyntaxError, TypeError):
        # Left as a string; classified as an unknown declared type.
        return annotation
    return hints["annotation"]


def _is_interface(cls: type[Any]) -> bool:
    return inspect.isabstract(cls) or is_protocol(cls)


def _import_class(name: str) -> type[Any]:
    parts = name.split(".")
    for split_at in range(len(parts) - 1, 0, -1):
        module_name = ".".join(parts[:split_at])
        try:
            target: Any = importlib.import_module(module_name)
        except ImportError as error:
            if not _is_missing_prefix(error, module_name):
                raise
            continue
        for attribute in parts[split_at:]:
            target = getattr(target, attribute, None)
            if target is None:
                raise WireboxUnknownTypeError(name)
        if not is_runtime_class(target):
            raise WireboxUnknownTypeError(name, "does not name a class")
        return target

    raise WireboxUnknownTypeError(name)


def _is_missing_prefix(error: ImportError, module_name: str) -> bool:
    """Return true when the import failed because module_name or a parent package is absent.

    Errors raised from inside a module that exists, such as its own broken
    imports, are not a missing prefix and must propagate.
    """
    missing = error.name
    if missing is None:
        return False
    return module_name == missing or module_name.startswith(f"{missing}.")


default_type_registry = TypeRegistry()
"""Registry shared by containers that are not given one explicitly."""
