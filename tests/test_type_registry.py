"""Tests for constructor introspection in TypeRegistry."""

from __future__ import annotations

import dataclasses
import datetime
import enum
import pathlib
from abc import ABC, abstractmethod
from collections import OrderedDict
from typing import Any, Optional, Protocol

import pytest

from wirebox.exceptions import WireboxUnknownTypeError
from wirebox.type_registry import (
    ObjectType,
    PrimitiveType,
    TypeRegistry,
    UnknownDeclaredType,
    primitive_key,
    type_key,
)


class Dependency:
    pass


class Color(enum.Enum):
    RED = "red"


class Consumer:
    def __init__(
        self,
        dep: Dependency,
        count: int,
        missing: Ghost,  # type: ignore[name-defined]  # noqa: F821
        label="x",  # noqa: ANN001
    ) -> None:
        pass


class Node:
    def __init__(self, parent: Optional[Node] = None, child: Node | None = None) -> None:  # noqa: UP007
        self.parent = parent
        self.child = child


class ValueTypes:
    def __init__(
        self,
        when: datetime.datetime,
        path: pathlib.Path,
        color: Color,
        anything: Any,
        kind: type[Dependency],
        values: list[Dependency],
    ) -> None:
        pass


class KeywordOnly:
    def __init__(self, dep: Dependency, *, flag: bool = False) -> None:
        pass


@dataclasses.dataclass
class DataclassService:
    dep: Dependency
    size: int = 10


class Interface(ABC):
    @abstractmethod
    def run(self) -> None: ...


class Shape(Protocol):
    def area(self) -> float: ...


class RenamedInstanceParameter:
    def __init__(this, dep: Dependency, /) -> None:  # noqa: N805
        pass


class UnionWithQuotedName:
    def __init__(self, dep: Dependency, value: int | "Ghost") -> None:  # noqa: F821, TC010
        pass


class Outer:
    class Inner:
        pass


class TestDescribe:
    def test_class_without_constructor_has_no_parameters(
        self,
        type_registry: TypeRegistry,
    ) -> None:
        descriptor = type_registry.describe(Dependency)

        assert descriptor.type is Dependency
        assert descriptor.key == type_key(Dependency)
        assert descriptor.parameters == ()
        assert descriptor.instantiable

    def test_classifies_parameters_in_declaration_order(
        self,
        type_registry: TypeRegistry,
    ) -> None:
        descriptor = type_registry.describe(Consumer)

        assert [parameter.name for parameter in descriptor.parameters] == [
            "dep",
            "count",
            "missing",
            "label",
        ]
        dep, count, missing, label = descriptor.parameters
        assert dep.target == ObjectType(key=type_key(Dependency), type=Dependency)
        assert count.target == PrimitiveType()
        assert missing.target == UnknownDeclaredType("Ghost")
        assert label.target == PrimitiveType()
        assert label.has_default
        assert label.default == "x"
        assert not dep.has_default

    def test_optional_parameters_are_primitive(self, type_registry: TypeRegistry) -> None:
        parent, child = type_registry.describe(Node).parameters

        assert parent.target == PrimitiveType()
        assert child.target == PrimitiveType()
        assert parent.has_default
        assert parent.default is None

    def test_value_types_and_generics_are_primitive(self, type_registry: TypeRegistry) -> None:
        descriptor = type_registry.describe(ValueTypes)

        assert all(parameter.target == PrimitiveType() for parameter in descriptor.parameters)

    def test_marks_keyword_only_parameters(self, type_registry: TypeRegistry) -> None:
        dep, flag = type_registry.describe(KeywordOnly).parameters

        assert not dep.keyword_only
        assert flag.keyword_only
        assert flag.default is False

    def test_describes_dataclass_constructor(self, type_registry: TypeRegistry) -> None:
        dep, size = type_registry.describe(DataclassService).parameters

        assert isinstance(dep.target, ObjectType)
        assert dep.target.type is Dependency
        assert size.target == PrimitiveType()
        assert size.default == 10

    def test_skips_instance_parameter_whatever_its_name(
        self,
        type_registry: TypeRegistry,
    ) -> None:
        (dep,) = type_registry.describe(RenamedInstanceParameter).parameters

        assert dep.name == "dep"
        assert dep.target == ObjectType(key=type_key(Dependency), type=Dependency)

    def test_unevaluable_annotation_is_unknown_declared_type(
        self,
        type_registry: TypeRegistry,
    ) -> None:
        dep, value = type_registry.describe(UnionWithQuotedName).parameters

        assert dep.target == ObjectType(key=type_key(Dependency), type=Dependency)
        assert value.target == UnknownDeclaredType("int | 'Ghost'")

    def test_builtin_constructor_has_no_parameters(self, type_registry: TypeRegistry) -> None:
        assert type_registry.describe(OrderedDict).parameters == ()

    def test_abstract_classes_and_protocols_are_not_instantiable(
        self,
        type_registry: TypeRegistry,
    ) -> None:
        assert not type_registry.describe(Interface).instantiable
        assert not type_registry.describe(Shape).instantiable

    def test_caches_descriptors(self, type_registry: TypeRegistry) -> None:
        assert type_registry.describe(Consumer) is type_registry.describe(Consumer)

    def test_describes_importable_name(self, type_registry: TypeRegistry) -> None:
        descriptor = type_registry.describe("collections.OrderedDict")

        assert descriptor.type is OrderedDict

    def test_resolves_nested_class_name(self, type_registry: TypeRegistry) -> None:
        assert type_registry.resolve_type(type_key(Outer.Inner)) is Outer.Inner

    def test_register_makes_name_resolvable(self, type_registry: TypeRegistry) -> None:
        def build_local() -> type[Any]:
            class LocalService:
                pass

            return LocalService

        local_service = build_local()

        assert type_registry.register(local_service) is type_registry
        assert type_registry.resolve_type(type_key(local_service)) is local_service

    def test_raises_for_missing_module(self, type_registry: TypeRegistry) -> None:
        with pytest.raises(WireboxUnknownTypeError, match="does not exist"):
            type_registry.describe("missing_package.Service")

    def test_raises_for_missing_parent_package(self, type_registry: TypeRegistry) -> None:
        with pytest.raises(WireboxUnknownTypeError, match="does not exist"):
            type_registry.describe("missing_package.sub.Service")

    def test_propagates_import_errors_raised_inside_existing_module(
        self,
        type_registry: TypeRegistry,
        tmp_path: pathlib.Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        module = tmp_path / "wirebox_broken_module.py"
        module.write_text("import wirebox_absent_dependency\n\n\nclass Service:\n    pass\n")
        monkeypatch.syspath_prepend(str(tmp_path))

        with pytest.raises(ModuleNotFoundError, match="wirebox_absent_dependency"):
            type_registry.describe("wirebox_broken_module.Service")

    def test_raises_for_missing_attribute(self, type_registry: TypeRegistry) -> None:
        with pytest.raises(WireboxUnknownTypeError, match="does not exist"):
            type_registry.describe("collections.NoSuchClass")

    def test_raises_for_bare_unknown_name(self, type_registry: TypeRegistry) -> None:
        with pytest.raises(WireboxUnknownTypeError):
            type_registry.describe("Storage")

    def test_raises_for_name_of_non_class(self, type_registry: TypeRegistry) -> None:
        with pytest.raises(WireboxUnknownTypeError, match="does not name a class"):
            type_registry.describe("os.path.join")


class TestKeys:
    def test_type_key_uses_module_and_qualname(self) -> None:
        assert type_key(Outer.Inner) == f"{__name__}.Outer.Inner"

    def test_type_key_keeps_strings(self) -> None:
        assert type_key("storage") == "storage"

    def test_primitive_key(self) -> None:
        assert primitive_key("timeout") == "$timeout"
