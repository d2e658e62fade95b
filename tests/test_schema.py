import pytest

from apikit.sdkgen.config import CustomTypeConfig
from apikit.sdkgen.models import ImportData
from apikit.sdkgen.naming import to_pascal_case
from apikit.sdkgen.schema import SchemaConverter, extract_ref_name, schema_type


@pytest.fixture
def converter():
    return SchemaConverter()


def test_none_schema_is_any(converter):
    assert converter.go_type(None, True) == "any"


def test_ref_required_and_optional(converter):
    ref = {"$ref": "#/components/schemas/Balance"}
    assert converter.go_type(ref, True) == "Balance"
    assert converter.go_type(ref, False) == "*" + converter.go_type(ref, True)


def test_extract_ref_name():
    assert extract_ref_name("#/components/schemas/Balance") == "Balance"
    assert extract_ref_name("#/definitions/Foo") == "Foo"
    assert extract_ref_name("Plain") == "Plain"


@pytest.mark.parametrize(
    "schema, expected",
    [
        ({"type": "string"}, "string"),
        ({"type": "integer"}, "int"),
        ({"type": "integer", "format": "int32"}, "int32"),
        ({"type": "integer", "format": "int64"}, "int64"),
        ({"type": "number"}, "float64"),
        ({"type": "number", "format": "float"}, "float32"),
        ({"type": "number", "format": "double"}, "float64"),
        ({"type": "boolean"}, "bool"),
        ({"type": "object"}, "any"),
        ({}, "any"),
    ],
)
def test_primitive_types(converter, schema, expected):
    assert converter.go_type(schema, True) == expected


@pytest.mark.parametrize("fmt", ["date-time", "date"])
def test_time_formats_add_import(converter, fmt):
    assert converter.go_type({"type": "string", "format": fmt}, True) == "time.Time"
    assert converter.sorted_imports() == [ImportData(path="time", alias="")]


def test_array_type_wraps_item_type(converter):
    items = {"type": "integer", "format": "int64"}
    result = converter.go_type({"type": "array", "items": items}, True)
    assert result == "[]" + converter.go_type(items, True)


def test_map_type_from_additional_properties(converter):
    result = converter.go_type(
        {"type": "object", "additionalProperties": {"type": "boolean"}}, True
    )
    assert result.startswith("map[string]")
    assert result.endswith("bool")


def test_custom_type_by_format():
    custom = CustomTypeConfig(go_type="decimal.Decimal", import_path="github.com/shopspring/decimal")
    converter = SchemaConverter({"decimal": custom})
    assert converter.go_type({"type": "string", "format": "decimal"}, True) == "decimal.Decimal"
    assert converter.imports == {"github.com/shopspring/decimal": ""}


def test_schema_type_handles_lists():
    assert schema_type({"type": ["null", "string"]}) == "string"
    assert schema_type({"type": "array"}) == "array"
    assert schema_type(None) == ""


def test_sorted_imports_are_ordered_and_ignore_empty(converter):
    converter.add_import("zeta/pkg", "")
    converter.add_import("alpha/pkg", "al")
    converter.add_import("", "ignored")
    imports = converter.sorted_imports()
    paths = [imp.path for imp in imports]
    assert paths == sorted(paths)
    assert len(imports) == 2
    assert ImportData(path="alpha/pkg", alias="al") in imports


def test_schema_to_struct_none_and_empty(converter):
    assert converter.schema_to_struct("X", None) is None
    assert converter.schema_to_struct("X", {"type": "object"}) is None


def test_schema_to_struct_fields(converter):
    schema = {
        "description": "A pokemon",
        "required": ["name"],
        "properties": {
            "name": {"type": "string", "description": "the name"},
            "base_experience": {"type": "integer"},
        },
    }
    struct = converter.schema_to_struct("Pokemon", schema)
    assert struct.name == "Pokemon"
    assert struct.comment == "A pokemon"
    tags = [f.json_tag.split(",")[0] for f in struct.fields]
    assert tags == sorted(tags)
    by_tag = {f.json_tag.split(",")[0]: f for f in struct.fields}
    name = by_tag["name"]
    assert name.required is True
    assert name.json_tag == "name"
    assert name.type == "string"
    assert name.comment == "the name"
    exp = by_tag["base_experience"]
    assert exp.required is False
    assert exp.json_tag == "base_experience" + ",omitempty"
    assert exp.name == to_pascal_case("base_experience")
    assert exp.type == "int"


def test_schema_to_struct_merges_all_of():
    schemas = {
        "Base": {
            "required": ["id"],
            "properties": {"id": {"type": "string"}, "kind": {"type": "integer"}},
        }
    }
    converter = SchemaConverter(schemas=schemas)
    schema = {
        "allOf": [{"$ref": "#/components/schemas/Base"}],
        "properties": {"kind": {"type": "boolean"}, "extra": {"type": "string"}},
    }
    struct = converter.schema_to_struct("Derived", schema)
    fields = {f.name: f for f in struct.fields}
    assert set(fields) == {to_pascal_case(n) for n in ("id", "kind", "extra")}
    assert fields[to_pascal_case("id")].required is True
    assert fields[to_pascal_case("kind")].type == "bool"


def test_schema_to_enum(converter):
    enum = converter.schema_to_enum(
        "ElementType", {"type": "string", "enum": ["fire", "water", "dragon"]}
    )
    assert enum.type == "string"
    assert [v.value for v in enum.values] == ["fire", "water", "dragon"]
    assert [v.name for v in enum.values] == [
        "ElementType" + to_pascal_case(v) for v in ("fire", "water", "dragon")
    ]


def test_schema_to_enum_without_values(converter):
    assert converter.schema_to_enum("E", {"type": "string"}) is None
    assert converter.schema_to_enum("E", None) is None


def test_schema_to_enum_formats_booleans(converter):
    enum = converter.schema_to_enum("Flag", {"enum": [True]})
    assert enum.values[0].value == "true"