"""Helpers used by the code templates to build source expressions."""

from __future__ import annotations

import json

from apikit.sdkgen.models import ParamData

_HTTP_FUNCS = {
    "GET": "Get",
    "POST": "Post",
    "PUT": "Put",
    "DELETE": "Delete",
    "PATCH": "Patch",
    "HEAD": "Head",
    "OPTIONS": "Options",
}

_PRIMITIVES = frozenset(
    {"string", "int", "int32", "int64", "float32", "float64", "bool", "any"}
)

_ZAP_FUNCS = {
    "int": "Int",
    "int32": "Int32",
    "int64": "Int64",
    "float32": "Float32",
    "float64": "Float64",
    "bool": "Bool",
    "string": "String",
}


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def http_method_to_func(method: str) -> str:
    """Return the HTTP client method name for an HTTP verb; unknown verbs map to Get."""
    return _HTTP_FUNCS.get(method.upper(), "Get")


def go_zero_value(go_type: str) -> str:
    """Return the zero-value expression for a type name."""
    if not go_type:
        return ""
    if go_type.startswith("models."):
        return go_type + "{}"
    if go_type.startswith(("*", "[]", "map[")):
        return "nil"
    if go_type == "string":
        return '""'
    if go_type in ("int", "int32", "int64", "float32", "float64"):
        return "0"
    if go_type == "bool":
        return "false"
    return "nil"


def go_base_type(go_type: str) -> str:
    """Strip a leading pointer marker."""
    return go_type.removeprefix("*")


def is_pointer_type(go_type: str) -> bool:
    return go_type.startswith("*")


def is_slice_type(go_type: str) -> bool:
    return go_type.startswith("[]")


def is_primitive_slice(go_type: str) -> bool:
    """Whether the type is a slice of a primitive element type."""
    return go_type.startswith("[]") and go_type[2:] in _PRIMITIVES


def format_go_comment(prefix: str, text: str) -> str:
    """Turn text into comment lines; the prefix goes on the first line only."""
    out = []
    for line in text.split("\n"):
        out.append("//" if not line.strip() else "// " + prefix + line)
        prefix = ""
    return "\n".join(out)


def zap_field_expr(name: str, expr: str, go_type: str) -> str:
    """Return a structured-log field call suited to the type."""
    func = _ZAP_FUNCS.get(go_type, "Any")
    return f"zap.{func}({_quote(name)}, {expr})"


def zap_field(param: ParamData) -> str:
    """Return the log field call for a parameter passed by its own name."""
    return zap_field_expr(param.name, param.go_name, param.go_type)


def format_query_value(expr: str, go_type: str) -> str:
    """Return an expression converting a value to its query-string form."""
    if go_type == "string":
        return expr
    if go_type == "int":
        return "strconv.Itoa(" + expr + ")"
    if go_type == "int32":
        return "strconv.FormatInt(int64(" + expr + "), 10)"
    if go_type == "int64":
        return "strconv.FormatInt(" + expr + ", 10)"
    if go_type == "bool":
        return "strconv.FormatBool(" + expr + ")"
    return 'fmt.Sprintf("%v", ' + expr + ")"