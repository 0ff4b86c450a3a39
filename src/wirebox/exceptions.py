from __future__ import annotations


class WireboxError(Exception):
    """Represent a base class for all wirebox-specific failures.

    Catch this type when you want to handle any wirebox error path without
    matching each concrete exception class individually.
    """


class WireboxResolutionError(WireboxError):
    """Signal that ``Container.create`` could not build the requested object graph.

    The first failure met while walking constructor parameters depth-first aborts
    the whole ``create`` call. Nothing that was built up to that point is returned
    or cached, except singletons that finished building before the failure.
    """


class WireboxUnknownTypeError(WireboxResolutionError):
    """Signal that a type name does not resolve to a class.

    Raised by ``TypeRegistry.describe`` for names that cannot be imported, and by
    ``Container.create`` when a constructor annotation names a class that does not
    exist in the constructor's module. Never recovered by primitive fallback.

    Typical fixes include importing the annotated name at module level, fixing a
    typo in a dotted path, or passing the class object instead of its name.
    """

    def __init__(self, name: str, reason: str = "does not exist") -> None:
        self.name = name
        super().__init__(f"Type '{name}' {reason}.")


class WireboxUnresolvableParameterError(WireboxResolutionError):
    """Signal that a primitive constructor parameter has nothing to fill it.

    Raised by ``Container.create`` for parameters without a resolvable class
    annotation (scalars, containers, unions, untyped parameters) that have neither
    a contextual binding nor a default value.

    Typical fix is ``container.when(Dependant).needs("$name").give(value)``.
    """

    def __init__(self, parameter: str, dependant: str) -> None:
        self.parameter = parameter
        self.dependant = dependant
        super().__init__(
            f"Could not resolve parameter '{parameter}' for dependant '{dependant}'. "
            "Bind it with when(...).needs(...).give(...) or give it a default value.",
        )


class WireboxUninstantiableTypeError(WireboxResolutionError):
    """Signal that an abstract class or protocol was requested without a binding.

    Typical fixes include ``container.bind(Interface, Implementation)`` or a
    contextual binding for the dependant that needs the interface.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"Type '{name}' is abstract and cannot be instantiated. Bind it to an implementation.",
        )


class WireboxInvalidBindingError(WireboxError):
    """Signal an implementation that ``Container.bind`` cannot turn into a creator.

    Implementations must be a class, a type name string, or a callable that takes
    the container as its only argument.
    """


class WireboxContainerNotInitializedError(WireboxError):
    """Signal use of ``container_context`` before a container is set.

    Typical fix is calling ``container_context.set_instance(container)`` during
    application startup.
    """
