"""Serving Swagger UI and OpenAPI specs from an in-memory zip."""

from __future__ import annotations

import html
import io
import json
import zipfile
from dataclasses import dataclass, field, replace
from http import HTTPStatus
from typing import Any, Callable, Iterable, Mapping, Optional
from urllib.parse import parse_qs

_CONTENT_TYPES = {
    ".html": "text/html; charset=utf-8",
    ".js": "application/javascript",
    ".css": "text/css",
    ".png": "image/png",
    ".svg": "image/svg+xml",
    ".json": "application/json",
}


@dataclass
class SwaggerConfig:
    """Paths the handler answers on and the specs it serves."""

    base_path: str = ""
    spec_path: str = ""
    resources_path: str = ""
    specs: dict[str, bytes] = field(default_factory=dict)
    default_spec: str = ""


@dataclass
class Response:
    """An HTTP response produced by the handler."""

    status: int = 200
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""


def _extension(path: str) -> str:
    last = path.rsplit("/", 1)[-1]
    dot = last.rfind(".")
    return last[dot:] if dot >= 0 else ""


def _valid_path(name: str) -> bool:
    if name == ".":
        return True
    return all(part not in ("", ".", "..") for part in name.split("/"))


def _json_bytes(value: Any) -> bytes:
    text = json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    for char, escaped in (
        ("<", "\\u003c"),
        (">", "\\u003e"),
        ("&", "\\u0026"),
        ("\u2028", "\\u2028"),
        ("\u2029", "\\u2029"),
    ):
        text = text.replace(char, escaped)
    return text.encode("utf-8")


def _not_found() -> Response:
    return Response(
        404,
        {"Content-Type": "text/plain; charset=utf-8", "X-Content-Type-Options": "nosniff"},
        b"404 page not found\n",
    )


def _redirect(url: str) -> Response:
    body = f'<a href="{html.escape(url)}">Moved Permanently</a>.\n\n'
    return Response(
        301,
        {"Location": url, "Content-Type": "text/html; charset=utf-8"},
        body.encode("utf-8"),
    )


class SwaggerUIHandler:
    """Serves Swagger UI files, the specs and the list of spec resources; also a WSGI app."""

    def __init__(self, swagger_ui_zip: bytes, config: Optional[SwaggerConfig] = None) -> None:
        config = config or SwaggerConfig()
        self.config = replace(
            config,
            base_path=config.base_path or "/swagger",
            spec_path=config.spec_path or "/openapi/specs",
            resources_path=config.resources_path or "/openapi/resources",
            specs=dict(config.specs),
        )

        self._files: dict[str, bytes] = {}
        self._dirs: set[str] = {"."}
        with zipfile.ZipFile(io.BytesIO(swagger_ui_zip)) as archive:
            for info in archive.infolist():
                name = info.filename.rstrip("/")
                parts = name.split("/")
                for depth in range(1, len(parts)):
                    self._dirs.add("/".join(parts[:depth]))
                if info.is_dir():
                    self._dirs.add(name)
                else:
                    self._files[name] = archive.read(info)

        resources = [
            {"name": name, "url": self.config.spec_path + "?spec=" + name}
            for name in sorted(self.config.specs)
        ]
        self._resources_json = _json_bytes(resources or None)

    def handle(self, path: str, query_string: str = "") -> Response:
        """Route a request path to the UI, the spec or the resources list."""
        base = self.config.base_path
        if path == base:
            return _redirect(base + "/")
        if path.startswith(base + "/"):
            return self.serve_swagger_ui(path)
        if path == self.config.spec_path:
            return self.serve_spec(query_string)
        if path == self.config.resources_path:
            return self.serve_resources()
        return _not_found()

    def serve_ui(self, path: str, request_uri: str) -> Response:
        """Serve UI files for a path already stripped of its mount point."""
        if path in ("", "/") and not request_uri.endswith("/"):
            return _redirect(request_uri + "/")
        return self._serve_file(path.removeprefix("/") or "index.html")

    def serve_swagger_ui(self, path: str) -> Response:
        """Serve a UI file for a path that still carries the base path."""
        file_path = path.removeprefix(self.config.base_path).removeprefix("/")
        return self._serve_file(file_path or "index.html")

    def _serve_file(self, file_path: str) -> Response:
        if not _valid_path(file_path):
            return Response(404)
        content = self._files.get(file_path)
        if content is None and file_path not in self._dirs:
            return Response(404)
        headers = {}
        content_type = _CONTENT_TYPES.get(_extension(file_path))
        if content_type:
            headers["Content-Type"] = content_type
        return Response(200, headers, content or b"")

    def serve_spec(self, query_string: str = "") -> Response:
        """Serve the spec named by the "spec" query parameter, or the default one."""
        values = parse_qs(query_string, keep_blank_values=True).get("spec")
        spec_name = values[0] if values else ""
        if not spec_name:
            spec_name = self.config.default_spec

        spec = self.config.specs.get(spec_name)
        if spec is None:
            if self.config.specs and not spec_name:
                spec = next(iter(self.config.specs.values()))
            else:
                return _not_found()
        return Response(200, {"Content-Type": "application/yaml"}, spec)

    def serve_resources(self) -> Response:
        """Serve the JSON list of spec names and URLs."""
        return Response(200, {"Content-Type": "application/json"}, self._resources_json)

    def __call__(
        self,
        environ: Mapping[str, Any],
        start_response: Callable[[str, list[tuple[str, str]]], Any],
    ) -> Iterable[bytes]:
        response = self.handle(environ.get("PATH_INFO", "") or "", environ.get("QUERY_STRING", "") or "")
        headers = list(response.headers.items())
        headers.append(("Content-Length", str(len(response.body))))
        start_response(f"{response.status} {HTTPStatus(response.status).phrase}", headers)
        return [response.body]