from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from wirebox.lock_mode import LockMode
from wirebox.type_registry import TypeName, cache_key, lookup_keys, type_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ContextualBinding:
    """One override scoped to a dependant.

    ``value`` is a class, a type name, a literal, or a callable taking the container.
    """

    dependant: TypeName
    key: TypeName
    value: Any


class ContextualBindingStore:
    """Map ``(dependant, dependency key)`` pairs to contextual overrides.

    Dependant and dependency keys are classes or type names; primitive parameters
    use ``"$name"``. An entry made for a type name also applies to the class that
    name refers to, but an entry made for a class applies to that class only.
    The last write for a pair wins.
    """

    def __init__(self, *, lock_mode: LockMode = LockMode.THREAD) -> None:
        self._lock = lock_mode.new_lock()
        self._bindings: dict[TypeName, dict[TypeName, ContextualBinding]] = {}

    def set(self, dependant: TypeName, key: TypeName, value: Any) -> None:
        binding = ContextualBinding(
            dependant=cache_key(dependant),
            key=cache_key(key),
            value=value,
        )
        with self._lock:
            self._bindings.setdefault(binding.dependant, {})[binding.key] = binding
        logger.debug(
            "Contextual binding: when %s needs %s give %r",
            type_key(binding.dependant),
            type_key(binding.key),
            value,
        )

    def get(self, dependant: TypeName, key: TypeName) -> ContextualBinding | None:
        """Return the override for the pair, preferring class entries over name entries."""
        for dependant_key in lookup_keys(dependant):
            bindings = self._bindings.get(dependant_key)
            if not bindings:
                continue
            for dependency_key in lookup_keys(key):
                binding = bindings.get(dependency_key)
                if binding is not None:
                    return binding
        return None

    def __contains__(self, item: tuple[TypeName, TypeName]) -> bool:
        dependant, key = item
        return self.get(dependant, key) is not None

    def __len__(self) -> int:
        return sum(len(bindings) for bindings in self._bindings.values())


class BindingBuilder:
    """Entry point of the fluent ``when(...).needs(...).give(...)`` chain."""

    def __init__(self, store: ContextualBindingStore) -> None:
        self._store = store

    def for_dependant(self, dependant: TypeName) -> DependantBindingSpec:
        return DependantBindingSpec(self._store, dependant)


class DependantBindingSpec:
    """Binding chain scoped to one dependant, waiting for the dependency key."""

    def __init__(self, store: ContextualBindingStore, dependant: TypeName) -> None:
        self._store = store
        self._dependant = dependant

    def needs(self, key: TypeName) -> ContextualValueReceiver:
        """Select the dependency to override.

        Args:
            key: A class or type name for object parameters, or ``"$name"``
                (see ``primitive_key``) for primitive parameters.

        """
        return ContextualValueReceiver(self._store, self._dependant, key)


class ContextualValueReceiver:
    """Final step of the binding chain; ``give`` commits the override."""

    def __init__(
        self,
        store: ContextualBindingStore,
        dependant: TypeName,
        key: TypeName,
    ) -> None:
        self._store = store
        self._dependant = dependant
        self._key = key

    def give(self, value: Any) -> None:
        """Commit ``value`` for the selected dependant and dependency key.

        Nothing is checked against the dependant's constructor here; mismatches
        surface when the dependant is created.
        """
        self._store.set(self._dependant, self._key, value)
