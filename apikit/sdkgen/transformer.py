"""Turning an OpenAPI document and an SDK config into the data the templates render."""

from __future__ import annotations

from typing import Any, Iterator, Mapping, Optional, Sequence

from apikit.sdkgen.config import SDKGenConfig
from apikit.sdkgen.models import (
    ConfigData,
    ConfigFieldData,
    MethodData,
    ModelFileData,
    ParamData,
    ProviderData,
    SDKData,
    ServiceData,
    StructData,
    TypeAliasData,
)
from apikit.sdkgen.naming import to_camel_case, to_pascal_case, to_snake_case
from apikit.sdkgen.schema import SchemaConverter, extract_ref_name, schema_type

_HTTP_METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS")
_SUCCESS_CODES = ("200", "201", "202")
_CONFIG_TYPES = {
    "bool": ("bool", "Bool"),
    "int": ("int", "Int"),
    "duration": ("time.Duration", "Duration"),
}


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _components(spec: Mapping[str, Any]) -> Mapping[str, Any]:
    return _mapping(spec.get("components"))


def _operations(path_item: Mapping[str, Any]) -> Iterator[tuple[str, Mapping[str, Any]]]:
    """Yield (HTTP method, operation) pairs in a fixed method order."""
    for method in _HTTP_METHODS:
        op = path_item.get(method.lower())
        if isinstance(op, Mapping):
            yield method, op


def _first_tag(op: Mapping[str, Any]) -> Optional[str]:
    tags = op.get("tags") or []
    return _text(tags[0]) if tags else None


def _responses(op: Mapping[str, Any]) -> dict[str, Mapping[str, Any]]:
    return {
        str(code): response
        for code, response in _mapping(op.get("responses")).items()
        if isinstance(response, Mapping)
    }


def _content_schemas(container: Mapping[str, Any]) -> Iterator[Mapping[str, Any]]:
    """Yield the schemas of every media type in a body or response."""
    for media in _mapping(container.get("content")).values():
        if isinstance(media, Mapping):
            schema = media.get("schema")
            if isinstance(schema, Mapping):
                yield schema


def _ref(schema: Any) -> str:
    return _text(schema.get("$ref")) if isinstance(schema, Mapping) else ""


def transform(cfg: SDKGenConfig, spec: Mapping[str, Any]) -> SDKData:
    """Build the full template data from a validated config and an OpenAPI document."""
    schemas = _mapping(_components(spec).get("schemas"))
    converter = SchemaConverter(cfg.models.custom_types, schemas)

    data = SDKData(
        provider=ProviderData(name=cfg.provider.name, display_name=cfg.provider.display_name),
        config=transform_config(cfg),
        module_path=cfg.output.module_path,
    )
    data.models = transform_models(converter, spec)
    data.services = transform_services(converter, cfg, spec)
    return data


def transform_config(cfg: SDKGenConfig) -> ConfigData:
    """Build the config package data from the config's field entries."""
    fields = []
    for entry in cfg.config.fields:
        go_type, gookit_func = map_config_type(entry.type)
        fields.append(
            ConfigFieldData(
                name=entry.name,
                type=go_type,
                config_key=cfg.config.prefix + "." + entry.key,
                gookit_func=gookit_func,
                default=entry.default,
            )
        )
    return ConfigData(prefix=cfg.config.prefix, fields=fields)


def map_config_type(typ: str) -> tuple[str, str]:
    """Return (type name, config getter) for a config field type; strings by default."""
    return _CONFIG_TYPES.get(typ, ("string", "String"))


def transform_models(converter: SchemaConverter, spec: Mapping[str, Any]) -> list[ModelFileData]:
    """Turn components/schemas into model files grouped by the tag that uses them."""
    schemas = _mapping(_components(spec).get("schemas"))
    if not schemas:
        return []

    tag_map = build_schema_tag_map(spec)
    files: dict[str, ModelFileData] = {}

    for name in sorted(schemas):
        schema = schemas[name]
        if not isinstance(schema, Mapping):
            continue
        tags = tag_map.get(name)
        tag = tags[0] if tags else "common"
        key = tag.lower()
        model_file = files.setdefault(key, ModelFileData(file_name=key, tag=tag))

        kind = schema_type(schema)
        if schema.get("enum"):
            enum = converter.schema_to_enum(name, schema)
            if enum is not None:
                model_file.enums.append(enum)
        elif schema.get("properties") or schema.get("allOf"):
            struct = converter.schema_to_struct(name, schema)
            if struct is not None:
                model_file.structs.append(struct)
        elif kind == "object":
            model_file.structs.append(
                StructData(name=name, comment=_text(schema.get("description")))
            )
        elif kind == "array" and schema.get("items") is not None:
            item_type = converter.go_type(schema.get("items"), True)
            model_file.type_aliases.append(
                TypeAliasData(
                    name=name,
                    type="[]" + item_type,
                    comment=_text(schema.get("description")),
                )
            )

    imports = converter.sorted_imports()
    models = []
    for key in sorted(files):
        model_file = files[key]
        if model_file.structs or model_file.enums or model_file.type_aliases:
            model_file.imports = imports
            models.append(model_file)
    return models


def build_schema_tag_map(spec: Mapping[str, Any]) -> dict[str, list[str]]:
    """Map each schema name to the first tags of the operations that reference it."""
    tag_map: dict[str, list[str]] = {}
    for path_item in _mapping(spec.get("paths")).values():
        if not isinstance(path_item, Mapping):
            continue
        for _, op in _operations(path_item):
            tag = _first_tag(op)
            if tag is None:
                continue
            for ref in _collect_operation_schema_refs(op):
                tags = tag_map.setdefault(extract_ref_name(ref), [])
                if tag not in tags:
                    tags.append(tag)
    return tag_map


def _collect_operation_schema_refs(op: Mapping[str, Any]) -> list[str]:
    refs = []
    body = op.get("requestBody")
    if isinstance(body, Mapping):
        refs.extend(ref for ref in map(_ref, _content_schemas(body)) if ref)
    for response in _responses(op).values():
        for schema in _content_schemas(response):
            ref = _ref(schema)
            if ref:
                refs.append(ref)
            item_ref = _ref(schema.get("items"))
            if item_ref:
                refs.append(item_ref)
    return refs


def resolve_parameter(
    param: Mapping[str, Any], spec: Mapping[str, Any]
) -> Optional[Mapping[str, Any]]:
    """Return the parameter itself, or the one its $ref points to, or None if unresolved."""
    ref = _ref(param)
    if not ref:
        return param
    parameters = _mapping(_components(spec).get("parameters"))
    resolved = parameters.get(extract_ref_name(ref))
    return resolved if isinstance(resolved, Mapping) else None


def should_use_params_struct(cfg: SDKGenConfig, operation_id: str) -> bool:
    """Whether an operation takes its parameters as a struct, honouring per-operation overrides."""
    override = cfg.services.operations.get(operation_id)
    if override is not None and override.params_style:
        return override.params_style == "struct"
    return cfg.services.params_style == "struct"


def transform_services(
    converter: SchemaConverter, cfg: SDKGenConfig, spec: Mapping[str, Any]
) -> list[ServiceData]:
    """Group operations into services by their first tag, sorted by tag."""
    path_items = _mapping(spec.get("paths"))
    services: dict[str, ServiceData] = {}

    for path in sorted(path_items):
        path_item = path_items[path]
        if not isinstance(path_item, Mapping):
            continue
        for http_method, op in _operations(path_item):
            tag = _first_tag(op) or "default"
            key = tag.lower()
            if key not in services:
                services[key] = ServiceData(
                    name=to_pascal_case(tag),
                    file_name=to_snake_case(tag) + "_service",
                    field_name=to_camel_case(tag) + "Service",
                )
            method = transform_operation(
                converter, cfg, spec, path, http_method, op, path_item.get("parameters")
            )
            services[key].methods.append(method)

    return [services[key] for key in sorted(services)]


def transform_operation(
    converter: SchemaConverter,
    cfg: SDKGenConfig,
    spec: Mapping[str, Any],
    path: str,
    http_method: str,
    op: Mapping[str, Any],
    path_item_params: Optional[Sequence[Any]],
) -> MethodData:
    """Turn one operation into a service method."""
    operation_id = _text(op.get("operationId"))
    name = to_pascal_case(operation_id)
    if not name:
        name = to_pascal_case(http_method + "_" + path.strip("/").replace("/", "_"))

    method = MethodData(
        name=name,
        http_method=http_method,
        path=path,
        tracer_span=cfg.provider.name + ".sdk." + name,
        response_wrapper=cfg.services.response_wrapper,
        comment=operation_comment(op),
    )

    for param in [*(path_item_params or []), *(op.get("parameters") or [])]:
        if not isinstance(param, Mapping):
            continue
        resolved = resolve_parameter(param, spec)
        if resolved is None:
            continue
        required = bool(resolved.get("required", False))
        schema = resolved.get("schema")
        go_type = converter.go_type(schema, required) if schema is not None else "string"
        param_name = _text(resolved.get("name"))
        data = ParamData(
            name=param_name,
            go_name=to_camel_case(param_name),
            go_type=go_type,
            required=required,
        )
        location = resolved.get("in")
        if location == "path":
            method.path_params.append(data)
        elif location == "query":
            method.query_params.append(data)

    body = op.get("requestBody")
    if body is not None:
        method.has_request_body = True
        for schema in _content_schemas(_mapping(body)):
            ref = _ref(schema)
            if ref:
                method.request_body_type = "models." + extract_ref_name(ref)
            else:
                method.request_body_type = converter.go_type(schema, True)
            break

    method.response_type = extract_response_type(converter, op)
    method.use_params_struct = should_use_params_struct(cfg, operation_id)
    if method.use_params_struct:
        method.params_struct_name = method.name + "Params"
    return method


def _slice_of(converter: SchemaConverter, items: Mapping[str, Any]) -> str:
    ref = _ref(items)
    if ref:
        return "[]models." + extract_ref_name(ref)
    return "[]" + converter.go_type(items, True)


def extract_response_type(converter: SchemaConverter, op: Mapping[str, Any]) -> str:
    """Return the return type from the first success response that names one, or ""."""
    responses = _responses(op)
    for code in _SUCCESS_CODES:
        response = responses.get(code)
        if response is None:
            continue
        for schema in _content_schemas(response):
            items = schema.get("items")
            if schema_type(schema) == "array" and isinstance(items, Mapping):
                return _slice_of(converter, items)

            ref = _ref(schema)
            if ref:
                ref_name = extract_ref_name(ref)
                target = (converter.schemas or {}).get(ref_name)
                if isinstance(target, Mapping) and schema_type(target) == "array":
                    target_items = target.get("items")
                    if isinstance(target_items, Mapping):
                        return _slice_of(converter, target_items)
                return "models." + ref_name

            go_type = converter.go_type(schema, True)
            if go_type != "any":
                return go_type
    return ""


def operation_comment(op: Mapping[str, Any]) -> str:
    """Combine summary and description into a method comment."""
    summary = _text(op.get("summary"))
    description = _text(op.get("description"))
    if summary and description:
        return summary + "\n\n" + description
    return description or summary