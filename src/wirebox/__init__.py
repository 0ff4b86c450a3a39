from wirebox.bindings import (
    BindingBuilder,
    ContextualBinding,
    ContextualBindingStore,
    ContextualValueReceiver,
    DependantBindingSpec,
)
from wirebox.container import Container, Creator
from wirebox.container_context import (
    ContainerContext,
    container_context,
    get_instance,
    set_instance,
)
from wirebox.container_interface import ContainerFactory, IContainer
from wirebox.exceptions import (
    WireboxContainerNotInitializedError,
    WireboxError,
    WireboxInvalidBindingError,
    WireboxResolutionError,
    WireboxUninstantiableTypeError,
    WireboxUnknownTypeError,
    WireboxUnresolvableParameterError,
)
from wirebox.lock_mode import LockMode
from wirebox.type_registry import (
    ConstructorDescriptor,
    ObjectType,
    ParameterDescriptor,
    PrimitiveType,
    TypeRegistry,
    UnknownDeclaredType,
    default_type_registry,
    primitive_key,
    type_key,
)

__all__ = [
    "BindingBuilder",
    "ConstructorDescriptor",
    "Container",
    "ContainerContext",
    "ContainerFactory",
    "ContextualBinding",
    "ContextualBindingStore",
    "ContextualValueReceiver",
    "Creator",
    "DependantBindingSpec",
    "IContainer",
    "LockMode",
    "ObjectType",
    "ParameterDescriptor",
    "PrimitiveType",
    "TypeRegistry",
    "UnknownDeclaredType",
    "WireboxContainerNotInitializedError",
    "WireboxError",
    "WireboxInvalidBindingError",
    "WireboxResolutionError",
    "WireboxUninstantiableTypeError",
    "WireboxUnknownTypeError",
    "WireboxUnresolvableParameterError",
    "container_context",
    "default_type_registry",
    "get_instance",
    "primitive_key",
    "set_instance",
    "type_key",
]
