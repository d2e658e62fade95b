"""Intermediate data handed from the spec transformer to the code templates."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ProviderData:
    """Provider naming: a lower-case package name and a display name."""

    name: str = ""
    display_name: str = ""


@dataclass
class ConfigFieldData:
    """One field of the generated config struct."""

    name: str = ""
    type: str = ""
    config_key: str = ""
    gookit_func: str = ""
    default: str = ""


@dataclass
class ConfigData:
    """Settings for the generated config package."""

    prefix: str = ""
    fields: list[ConfigFieldData] = field(default_factory=list)


@dataclass
class ParamData:
    """A path or query parameter of an operation."""

    name: str = ""
    go_name: str = ""
    go_type: str = ""
    required: bool = False


@dataclass
class MethodData:
    """A single API operation turned into a service method."""

    name: str = ""
    http_method: str = ""
    path: str = ""
    tracer_span: str = ""
    path_params: list[ParamData] = field(default_factory=list)
    query_params: list[ParamData] = field(default_factory=list)
    has_request_body: bool = False
    request_body_type: str = ""
    response_type: str = ""
    response_wrapper: str = ""
    comment: str = ""
    use_params_struct: bool = False
    params_struct_name: str = ""


@dataclass
class ServiceData:
    """A service: the operations that share a first tag."""

    name: str = ""
    file_name: str = ""
    field_name: str = ""
    methods: list[MethodData] = field(default_factory=list)


@dataclass
class TypeAliasData:
    """A type alias such as a named array type."""

    name: str = ""
    type: str = ""
    comment: str = ""


@dataclass
class FieldData:
    """A field of a generated struct."""

    name: str = ""
    type: str = ""
    json_tag: str = ""
    comment: str = ""
    required: bool = False


@dataclass
class StructData:
    """A struct to generate."""

    name: str = ""
    comment: str = ""
    fields: list[FieldData] = field(default_factory=list)


@dataclass
class EnumValueData:
    """One constant of an enum."""

    name: str = ""
    value: str = ""


@dataclass
class EnumData:
    """A string-based enum type with its constants."""

    name: str = ""
    type: str = ""
    comment: str = ""
    values: list[EnumValueData] = field(default_factory=list)


@dataclass
class ImportData:
    """An import path with an optional alias."""

    path: str = ""
    alias: str = ""


@dataclass
class ModelFileData:
    """The models that go into one file, grouped by tag."""

    file_name: str = ""
    tag: str = ""
    structs: list[StructData] = field(default_factory=list)
    enums: list[EnumData] = field(default_factory=list)
    type_aliases: list[TypeAliasData] = field(default_factory=list)
    imports: list[ImportData] = field(default_factory=list)


@dataclass
class SDKData:
    """Everything the templates need to render an SDK."""

    provider: ProviderData = field(default_factory=ProviderData)
    config: ConfigData = field(default_factory=ConfigData)
    services: list[ServiceData] = field(default_factory=list)
    models: list[ModelFileData] = field(default_factory=list)
    module_path: str = ""