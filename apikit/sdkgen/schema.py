"""Mapping of OpenAPI schemas to generated type names, structs and enums."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from apikit.sdkgen.config import CustomTypeConfig
from apikit.sdkgen.models import (
    EnumData,
    EnumValueData,
    FieldData,
    ImportData,
    StructData,
)
from apikit.sdkgen.naming import to_pascal_case

_SCHEMAS_PREFIX = "#/components/schemas/"


def _str(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def schema_type(schema: Optional[Mapping[str, Any]]) -> str:
    """Return the schema's type name; for a list of types, the first that is not null."""
    if not isinstance(schema, Mapping):
        return ""
    value = schema.get("type")
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        for item in value:
            if isinstance(item, str) and item != "null":
                return item
    return ""


def extract_ref_name(ref: str) -> str:
    """Return the schema name a $ref points to, or its last path segment."""
    if ref.startswith(_SCHEMAS_PREFIX):
        return ref[len(_SCHEMAS_PREFIX):]
    return ref.split("/")[-1]


def _format_enum_value(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return str(value)


class SchemaConverter:
    """Converts OpenAPI schemas to type names and collects the imports they need."""

    def __init__(
        self,
        custom_types: Optional[Mapping[str, CustomTypeConfig]] = None,
        schemas: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.custom_types: dict[str, CustomTypeConfig] = dict(custom_types or {})
        self.schemas: Optional[Mapping[str, Any]] = schemas
        self.imports: dict[str, str] = {}

    def go_type(self, schema: Optional[Mapping[str, Any]], required: bool) -> str:
        """Return the type name for a schema; optional references become pointers."""
        if schema is None:
            return "any"

        ref = _str(schema.get("$ref"))
        if ref:
            name = extract_ref_name(ref)
            return name if required else "*" + name

        fmt = _str(schema.get("format"))
        if fmt and fmt in self.custom_types:
            custom = self.custom_types[fmt]
            self.add_import(custom.import_path, "")
            return custom.go_type

        kind = schema_type(schema)
        if kind == "string":
            if fmt in ("date-time", "date"):
                self.add_import("time", "")
                return "time.Time"
            return "string"
        if kind == "integer":
            return fmt if fmt in ("int32", "int64") else "int"
        if kind == "number":
            return "float32" if fmt == "float" else "float64"
        if kind == "boolean":
            return "bool"
        if kind == "array":
            return "[]" + self.go_type(schema.get("items"), True)
        if kind == "object":
            return self._object_type(schema)
        return "any"

    def _object_type(self, schema: Mapping[str, Any]) -> str:
        extra = schema.get("additionalProperties")
        if isinstance(extra, Mapping):
            return "map[string]" + self.go_type(extra, True)
        if extra is True:
            return "map[string]" + self.go_type({}, True)
        return "any"

    def add_import(self, path: str, alias: str) -> None:
        """Record an import; empty paths are ignored."""
        if path:
            self.imports[path] = alias

    def sorted_imports(self) -> list[ImportData]:
        """Return the collected imports ordered by path."""
        return [
            ImportData(path=path, alias=self.imports[path]) for path in sorted(self.imports)
        ]

    def _resolve(self, schema: Mapping[str, Any]) -> Mapping[str, Any]:
        ref = _str(schema.get("$ref"))
        if ref and self.schemas is not None:
            resolved = self.schemas.get(extract_ref_name(ref))
            if isinstance(resolved, Mapping):
                return resolved
        return schema

    def schema_to_struct(
        self, name: str, schema: Optional[Mapping[str, Any]]
    ) -> Optional[StructData]:
        """Build a struct from a schema's properties, merging allOf parts first.

        Returns None when there are no properties at all.
        """
        if schema is None:
            return None

        merged: dict[str, Any] = {}
        required: set[str] = set()
        parts = [self._resolve(sub) for sub in schema.get("allOf") or [] if sub is not None]
        for part in [*parts, schema]:
            for prop_name, prop in (part.get("properties") or {}).items():
                merged[_str(prop_name)] = prop
            required.update(_str(r) for r in part.get("required") or [])

        if not merged:
            return None

        fields = []
        for prop_name in sorted(merged):
            prop = merged[prop_name]
            is_required = prop_name in required
            fields.append(
                FieldData(
                    name=to_pascal_case(prop_name),
                    type=self.go_type(prop, is_required),
                    json_tag=prop_name if is_required else prop_name + ",omitempty",
                    comment=_str((prop or {}).get("description")),
                    required=is_required,
                )
            )

        return StructData(name=name, comment=_str(schema.get("description")), fields=fields)

    def schema_to_enum(
        self, name: str, schema: Optional[Mapping[str, Any]]
    ) -> Optional[EnumData]:
        """Build a string enum from a schema's enum values, or None if it has none."""
        if schema is None or not schema.get("enum"):
            return None

        values = []
        for raw in schema["enum"]:
            text = _format_enum_value(raw)
            values.append(EnumValueData(name=name + to_pascal_case(text), value=text))

        return EnumData(
            name=name,
            type="string",
            comment=_str(schema.get("description")),
            values=values,
        )