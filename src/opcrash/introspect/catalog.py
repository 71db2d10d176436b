"""YAML operation catalogue acting as the type introspector."""
from __future__ import annotations

import logging
import pathlib
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import yaml
from jsonschema import Draft7Validator

from opcrash.core.models import OperationDescriptor, Visibility
from opcrash.core.types import OBJECT, VOID, TypeRef
from opcrash.errors import CatalogError, InvalidArgumentError
from opcrash.values import ValueLibrary

logger = logging.getLogger(__name__)

_TYPE_LIST = {"type": "array", "items": {"type": "string", "minLength": 1}}

CATALOG_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "opcrash catalogue",
    "type": "object",
    "required": ["types"],
    "properties": {
        "types": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["name"],
                "properties": {
                    "name": {"type": "string", "minLength": 1},
                    "abstract": {"type": "boolean"},
                    "static": {"type": "boolean"},
                    "supertypes": _TYPE_LIST,
                    "implementation": {"type": "string"},
                    "operations": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "required": ["kind"],
                            "properties": {
                                "kind": {"enum": ["constructor", "method"]},
                                "name": {"type": "string", "minLength": 1},
                                "params": _TYPE_LIST,
                                "returns": {"type": "string", "minLength": 1},
                                "static": {"type": "boolean"},
                                "abstract": {"type": "boolean"},
                                "visibility": {"enum": [v.value for v in Visibility]},
                                "throws": _TYPE_LIST,
                                "implementation": {"type": "string"},
                            },
                        },
                    },
                },
            },
        },
        "values": {
            "type": "object",
            "additionalProperties": {"type": "array"},
        },
    },
}
_validator = Draft7Validator(CATALOG_SCHEMA)


@dataclass(frozen=True)
class TypeDeclaration:
    type_ref: TypeRef
    is_abstract: bool = False
    supertypes: Tuple[TypeRef, ...] = tuple()
    implementation: Optional[str] = None
    operations: Tuple[OperationDescriptor, ...] = tuple()


@dataclass
class CatalogIntrospector:
    """Introspector over declared types, their supertypes and operations."""

    declarations: Sequence[TypeDeclaration]
    values: Mapping[TypeRef, Sequence[Any]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self._by_type: Dict[TypeRef, TypeDeclaration] = {}
        for declaration in self.declarations:
            if declaration.type_ref in self._by_type:
                raise CatalogError(f"Type '{declaration.type_ref}' declared twice")
            self._by_type[declaration.type_ref] = declaration
        self._producers: Dict[Tuple[TypeRef, Visibility], Tuple[OperationDescriptor, ...]] = {}

    def types(self) -> Sequence[TypeRef]:
        return tuple(declaration.type_ref for declaration in self.declarations)

    def declaration(self, type_ref: TypeRef) -> TypeDeclaration:
        try:
            return self._by_type[type_ref]
        except KeyError as exc:
            raise KeyError(f"Type '{type_ref}' is not declared in the catalogue") from exc

    def resolve(self, name: str) -> TypeRef:
        """Parse ``name`` and return the declared type when the catalogue knows it."""

        parsed = TypeRef.parse(name)
        leaf, dimensions = parsed.decompose()
        declared = self._by_type.get(leaf)
        if declared is None:
            return parsed
        return declared.type_ref.array_of(dimensions) if dimensions else declared.type_ref

    def available_operations(self, type_ref: TypeRef, visibility: Visibility) -> Sequence[OperationDescriptor]:
        declaration = self._by_type.get(type_ref)
        if declaration is None:
            return tuple()
        return tuple(op for op in declaration.operations if visibility.allows(op.visibility))

    def producers(self, type_ref: TypeRef, visibility: Visibility) -> Sequence[OperationDescriptor]:
        key = (type_ref, visibility)
        if key not in self._producers:
            self._producers[key] = tuple(self._find_producers(type_ref, visibility))
        return self._producers[key]

    def _find_producers(self, type_ref: TypeRef, visibility: Visibility) -> List[OperationDescriptor]:
        found: List[OperationDescriptor] = []
        for declaration in self.declarations:
            for operation in declaration.operations:
                if operation.is_abstract or not visibility.allows(operation.visibility):
                    continue
                if operation.is_constructor:
                    if declaration.is_abstract:
                        continue
                elif operation.return_type.is_void:
                    continue
                if self.is_subtype(operation.return_type, type_ref):
                    found.append(operation)
        return found

    def is_subtype(self, candidate: TypeRef, target: TypeRef) -> bool:
        if candidate == target:
            return True
        if candidate.is_primitive or target.is_primitive:
            return False
        if target == OBJECT:
            return True
        if candidate.is_array or target.is_array:
            return False
        pending = [candidate]
        seen = set()
        while pending:
            current = pending.pop()
            if current in seen:
                continue
            seen.add(current)
            declaration = self._by_type.get(current)
            if declaration is None:
                continue
            for supertype in declaration.supertypes:
                if supertype == target:
                    return True
                pending.append(supertype)
        return False

    def is_nested_non_static_type(self, type_ref: TypeRef) -> bool:
        declaration = self._by_type.get(type_ref)
        return (declaration.type_ref if declaration else type_ref).is_inner

    def is_abstract(self, type_ref: TypeRef) -> bool:
        declaration = self._by_type.get(type_ref)
        return bool(declaration and declaration.is_abstract)

    def decompose_array_type(self, type_ref: TypeRef) -> Tuple[TypeRef, int]:
        return type_ref.decompose()

    def value_library(self, base: Optional[ValueLibrary] = None) -> ValueLibrary:
        """Built-in values plus the catalogue's own ``values`` section."""

        library = ValueLibrary.with_builtins()
        if base is not None:
            for type_ref in base:
                library.register(type_ref, [lit.value for lit in base.values_for(type_ref)])
        for type_ref, values in self.values.items():
            library.register(type_ref, values)
        return library


def load_catalog(path: str | pathlib.Path) -> CatalogIntrospector:
    try:
        raw = yaml.safe_load(pathlib.Path(path).read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise CatalogError(f"{path}: not valid YAML: {exc}") from exc
    return build_catalog(raw, source=str(path))


def build_catalog(raw: Any, *, source: str = "<catalogue>") -> CatalogIntrospector:
    if not isinstance(raw, Mapping):
        raise CatalogError(f"{source}: catalogue must contain a mapping at the top level")
    errors = sorted(_validator.iter_errors(raw), key=lambda err: list(err.path))
    if errors:
        first = errors[0]
        location = "/".join(str(part) for part in first.path) or "<root>"
        raise CatalogError(f"{source}: invalid catalogue at {location}: {first.message}")
    try:
        shells = _declare_types(raw["types"])
        declarations = [_parse_declaration(entry, shells) for entry in raw["types"]]
        values = {
            _resolve(name, shells): tuple(items) for name, items in (raw.get("values") or {}).items()
        }
    except InvalidArgumentError as exc:
        raise CatalogError(f"{source}: {exc}") from exc
    logger.debug("loaded %d type(s) from %s", len(declarations), source)
    return CatalogIntrospector(declarations=declarations, values=values)


def _declare_types(entries: Sequence[Mapping[str, Any]]) -> Dict[TypeRef, TypeRef]:
    shells: Dict[TypeRef, TypeRef] = {}
    for entry in entries:
        parsed = TypeRef.parse(entry["name"])
        if parsed.is_primitive or parsed.is_array:
            raise CatalogError(f"Only reference types can be declared, got '{entry['name']}'")
        if "static" in entry and not parsed.is_nested:
            raise CatalogError(f"'static' only applies to nested types ('{entry['name']}')")
        shells[parsed] = parsed.with_static(bool(entry.get("static", True)))
    return shells


def _resolve(name: str, shells: Mapping[TypeRef, TypeRef]) -> TypeRef:
    parsed = TypeRef.parse(name)
    leaf, dimensions = parsed.decompose()
    canonical = shells.get(leaf, leaf)
    return canonical.array_of(dimensions) if dimensions else canonical


def _parse_declaration(entry: Mapping[str, Any], shells: Mapping[TypeRef, TypeRef]) -> TypeDeclaration:
    type_ref = _resolve(entry["name"], shells)
    is_abstract = bool(entry.get("abstract", False))
    implementation = entry.get("implementation")
    operations = tuple(
        _parse_operation(op, type_ref, is_abstract, implementation, shells) for op in entry.get("operations", [])
    )
    return TypeDeclaration(
        type_ref=type_ref,
        is_abstract=is_abstract,
        supertypes=tuple(_resolve(name, shells) for name in entry.get("supertypes", [])),
        implementation=implementation,
        operations=operations,
    )


def _parse_operation(
    raw: Mapping[str, Any],
    declaring_type: TypeRef,
    abstract_type: bool,
    type_implementation: Optional[str],
    shells: Mapping[TypeRef, TypeRef],
) -> OperationDescriptor:
    params = tuple(_resolve(name, shells) for name in raw.get("params", []))
    throws = tuple(_resolve(name, shells) for name in raw.get("throws", []))
    visibility = Visibility(raw.get("visibility", Visibility.PUBLIC.value))
    if raw["kind"] == "constructor":
        if "name" in raw or "returns" in raw or "static" in raw:
            raise CatalogError(f"Constructor of '{declaring_type}' must not set name, returns or static")
        return OperationDescriptor.constructor(
            declaring_type,
            params,
            is_abstract=abstract_type,
            visibility=visibility,
            throws=throws,
            implementation=raw.get("implementation", type_implementation),
        )
    name = raw.get("name")
    if not name:
        raise CatalogError(f"Method of '{declaring_type}' requires a name")
    returns = _resolve(raw["returns"], shells) if "returns" in raw else VOID
    return OperationDescriptor.method(
        declaring_type,
        name,
        params,
        returns,
        is_static=bool(raw.get("static", False)),
        is_abstract=bool(raw.get("abstract", False)),
        visibility=visibility,
        throws=throws,
        implementation=raw.get("implementation"),
    )
