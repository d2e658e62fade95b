"""The SDK generator's YAML configuration file."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Union

import yaml

from apikit.sdkgen.naming import to_pascal_case

_PARAMS_STYLES = ("", "inline", "struct")


class ConfigError(ValueError):
    """The configuration file cannot be read, parsed or is invalid."""


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        raise ConfigError(f"expected a scalar, got {type(value).__name__}")
    return str(value)


def _mapping(value: Any, where: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigError(f"{where} must be a mapping")
    return value


def _sequence(value: Any, where: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigError(f"{where} must be a list")
    return value


@dataclass
class ProviderConfig:
    name: str = ""
    display_name: str = ""


@dataclass
class SpecConfig:
    path: str = ""


@dataclass
class OutputConfig:
    module_path: str = ""


@dataclass
class ConfigFieldEntry:
    name: str = ""
    key: str = ""
    type: str = ""
    default: str = ""


@dataclass
class ConfigFieldsConfig:
    prefix: str = ""
    fields: list[ConfigFieldEntry] = field(default_factory=list)


@dataclass
class OperationConfig:
    params_style: str = ""


@dataclass
class ServicesConfig:
    response_wrapper: str = ""
    params_style: str = ""
    operations: dict[str, OperationConfig] = field(default_factory=dict)


@dataclass
class CustomTypeConfig:
    go_type: str = ""
    import_path: str = ""


@dataclass
class ModelsConfig:
    custom_types: dict[str, CustomTypeConfig] = field(default_factory=dict)


@dataclass
class SDKGenConfig:
    """Settings read from a .sdkgen.yaml file."""

    provider: ProviderConfig = field(default_factory=ProviderConfig)
    spec: SpecConfig = field(default_factory=SpecConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    config: ConfigFieldsConfig = field(default_factory=ConfigFieldsConfig)
    services: ServicesConfig = field(default_factory=ServicesConfig)
    models: ModelsConfig = field(default_factory=ModelsConfig)

    @classmethod
    def from_mapping(cls, data: Any) -> "SDKGenConfig":
        """Build a config from the decoded YAML document."""
        root = _mapping(data, "config")
        provider = _mapping(root.get("provider"), "provider")
        spec = _mapping(root.get("spec"), "spec")
        output = _mapping(root.get("output"), "output")
        config = _mapping(root.get("config"), "config")
        services = _mapping(root.get("services"), "services")
        models = _mapping(root.get("models"), "models")

        fields = []
        for entry in _sequence(config.get("fields"), "config.fields"):
            entry = _mapping(entry, "config.fields[]")
            fields.append(
                ConfigFieldEntry(
                    name=_text(entry.get("name")),
                    key=_text(entry.get("key")),
                    type=_text(entry.get("type")),
                    default=_text(entry.get("default")),
                )
            )

        operations = {
            _text(op_id): OperationConfig(
                params_style=_text(
                    _mapping(op, f"services.operations.{op_id}").get("paramsStyle")
                )
            )
            for op_id, op in _mapping(services.get("operations"), "services.operations").items()
        }

        custom_types = {}
        for fmt, entry in _mapping(models.get("customTypes"), "models.customTypes").items():
            entry = _mapping(entry, f"models.customTypes.{fmt}")
            custom_types[_text(fmt)] = CustomTypeConfig(
                go_type=_text(entry.get("goType")),
                import_path=_text(entry.get("import")),
            )

        return cls(
            provider=ProviderConfig(
                name=_text(provider.get("name")),
                display_name=_text(provider.get("displayName")),
            ),
            spec=SpecConfig(path=_text(spec.get("path"))),
            output=OutputConfig(module_path=_text(output.get("modulePath"))),
            config=ConfigFieldsConfig(prefix=_text(config.get("prefix")), fields=fields),
            services=ServicesConfig(
                response_wrapper=_text(services.get("responseWrapper")),
                params_style=_text(services.get("paramsStyle")),
                operations=operations,
            ),
            models=ModelsConfig(custom_types=custom_types),
        )

    def validate(self) -> None:
        """Check required fields and fill in derived defaults."""
        if not self.provider.name:
            raise ConfigError("provider.name is required")
        if not self.provider.display_name:
            self.provider.display_name = to_pascal_case(self.provider.name)
        if not self.spec.path:
            raise ConfigError("spec.path is required")
        if not self.output.module_path:
            raise ConfigError("output.module_path is required")
        if not self.config.prefix:
            self.config.prefix = self.provider.name
        if self.services.params_style not in _PARAMS_STYLES:
            raise ConfigError("services.params_style must be 'inline' or 'struct'")
        for op_id, op in self.services.operations.items():
            if op.params_style not in _PARAMS_STYLES:
                raise ConfigError(
                    f"services.operations.{op_id}.params_style must be 'inline' or 'struct'"
                )


def load_sdkgen_config(path: Union[str, Path]) -> SDKGenConfig:
    """Read, parse and validate a .sdkgen.yaml file."""
    try:
        data = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"failed to read config file {path}: {exc}") from exc

    try:
        cfg = SDKGenConfig.from_mapping(yaml.safe_load(data))
    except (yaml.YAMLError, ConfigError) as exc:
        raise ConfigError(f"failed to parse config file {path}: {exc}") from exc

    try:
        cfg.validate()
    except ConfigError as exc:
        raise ConfigError(f"invalid config: {exc}") from exc
    return cfg