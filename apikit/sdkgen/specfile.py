"""Loading OpenAPI documents for SDK generation."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Union

import yaml


def load_spec(path: Union[str, Path]) -> dict[str, Any]:
    """Read an OpenAPI YAML file into a dict.

    The result always has "paths", "components", "components.schemas" and
    "components.parameters" as mappings.
    Raises OSError if the file cannot be read and ValueError if it cannot be parsed.
    """
    text = Path(path).read_text(encoding="utf-8")
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ValueError(f"failed to parse spec file {path}: {exc}") from exc

    if document is None:
        document = {}
    if not isinstance(document, dict):
        raise ValueError(f"failed to parse spec file {path}: document is not a mapping")

    if document.get("paths") is None:
        document["paths"] = {}
    components = document.get("components")
    if components is None:
        components = document["components"] = {}
    if not isinstance(components, dict):
        raise ValueError(f"failed to parse spec file {path}: components is not a mapping")
    if components.get("schemas") is None:
        components["schemas"] = {}
    if components.get("parameters") is None:
        components["parameters"] = {}
    return document