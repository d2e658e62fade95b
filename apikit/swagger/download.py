"""Downloading a Swagger UI release and repackaging its dist folder."""

from __future__ import annotations

import io
import json
import os
import re
import urllib.error
import urllib.request
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

GITHUB_RELEASES_API = "https://api.github.com/repos/swagger-api/swagger-ui/releases/latest"
DOWNLOAD_URL_TEMPLATE = "https://github.com/swagger-api/swagger-ui/archive/refs/tags/{}.zip"

_TIMEOUT = 60
_SOURCE_MAPPING = re.compile(rb"//# sourceMappingURL=.*")
_CSS_LINK = b'<link rel="stylesheet" type="text/css" href="custom-styles.css">'


@dataclass
class DownloadOptions:
    """Where to save Swagger UI and how to customise it."""

    output_dir: str = ""
    custom_css: str = ""
    custom_initializer: str = ""
    version: str = ""


def _fetch(url: str, headers: Optional[dict[str, str]] = None) -> tuple[int, bytes]:
    request = urllib.request.Request(url, headers=headers or {}, method="GET")
    with urllib.request.urlopen(request, timeout=_TIMEOUT) as response:
        return response.status, response.read()


def get_latest_version() -> str:
    """Return the tag name of the latest Swagger UI release."""
    headers = {"Accept": "application/vnd.github.v3+json", "User-Agent": "openapi-cli"}
    try:
        status, body = _fetch(GITHUB_RELEASES_API, headers)
    except urllib.error.HTTPError as exc:
        raise RuntimeError(f"GitHub API returned status {exc.code}") from exc
    except (urllib.error.URLError, OSError) as exc:
        raise RuntimeError(f"failed to fetch releases: {exc}") from exc
    if status != 200:
        raise RuntimeError(f"GitHub API returned status {status}")

    try:
        release = json.loads(body)
    except ValueError as exc:
        raise RuntimeError(f"failed to parse release info: {exc}") from exc
    if not isinstance(release, dict):
        raise RuntimeError("failed to parse release info: not an object")
    tag = release.get("tag_name")
    return tag if isinstance(tag, str) else ""


def download(options: Optional[DownloadOptions] = None) -> str:
    """Download, customise and save Swagger UI as swagger-ui.zip; return the version."""
    options = options or DownloadOptions()
    version = options.version
    if not version:
        try:
            version = get_latest_version()
        except RuntimeError as exc:
            raise RuntimeError(f"failed to get latest version: {exc}") from exc
    if not version.startswith("v"):
        version = "v" + version

    url = DOWNLOAD_URL_TEMPLATE.format(version)
    print(f"Downloading Swagger UI {version} from {url}")

    try:
        status, zip_data = _fetch(url)
    except urllib.error.HTTPError as exc:
        raise RuntimeError(f"download failed with status {exc.code}") from exc
    except (urllib.error.URLError, OSError) as exc:
        raise RuntimeError(f"failed to download: {exc}") from exc
    if status != 200:
        raise RuntimeError(f"download failed with status {status}")

    try:
        processed = process_swagger_ui(zip_data, version, options)
    except zipfile.BadZipFile as exc:
        raise ValueError(f"failed to process swagger-ui: {exc}") from exc

    output_dir = Path(options.output_dir or ".")
    output_dir.mkdir(mode=0o750, parents=True, exist_ok=True)
    output_path = output_dir / "swagger-ui.zip"
    fd = os.open(output_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "wb") as handle:
        handle.write(processed)

    print(f"Swagger UI {version} saved to {output_path}")
    return version


def process_swagger_ui(zip_data: bytes, version: str, options: DownloadOptions) -> bytes:
    """Keep the release's dist folder, strip source maps, apply customisations, re-zip."""
    dist_prefix = f"swagger-ui-{version.removeprefix('v')}/dist/"
    output = io.BytesIO()

    with zipfile.ZipFile(io.BytesIO(zip_data)) as source, zipfile.ZipFile(
        output, "w", zipfile.ZIP_DEFLATED
    ) as target:
        for info in source.infolist():
            name = info.filename
            if not name.startswith(dist_prefix):
                continue
            if name.endswith(".map") or "swagger-ui-es-" in name:
                continue
            relative = name[len(dist_prefix):]
            if not relative:
                continue

            content = source.read(info)
            if relative.endswith((".js", ".css")):
                content = _SOURCE_MAPPING.sub(b"", content)
            if relative == "swagger-initializer.js" and options.custom_initializer:
                content = options.custom_initializer.encode("utf-8")
            if relative == "index.html" and options.custom_css:
                content = content.replace(b"</head>", _CSS_LINK + b"\n</head>", 1)
            target.writestr(relative, content)

        if options.custom_css:
            target.writestr("custom-styles.css", options.custom_css.encode("utf-8"))

    return output.getvalue()