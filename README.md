# apikit

Tooling around OpenAPI specifications, in three parts:

- **Swagger directive parsing** – `apikit.directives`, `apikit.registry` and
  `apikit.tagparsers` provide a thread-safe registry of parsers for
  `swagger:*` comment directives, with generic single-line
  (`SingleLineParser`), multi-line (`MultiLineParser`) and list
  (`ListParser`) parsers that write their values through per-context setters.
- **SDK generation model** – `apikit.sdkgen` loads an `.sdkgen.yaml`
  configuration (`load_sdkgen_config`) and an OpenAPI YAML document
  (`load_spec`) and turns them into a typed description of a Go SDK
  (`transform`): services grouped by first tag, their methods and
  parameters, model structs, enums and type aliases grouped by tag. Naming
  helpers (`to_pascal_case`, `to_camel_case`, `to_snake_case`) and code
  helpers (`go_zero_value`, `format_query_value`, `zap_field_expr`, …) are
  included.
- **Swagger UI** – `apikit.swagger` downloads and repackages a Swagger UI
  release (`download`, `process_swagger_ui`) and serves it together with
  your specs through `SwaggerUIHandler`, which is also a WSGI application.

## Installation

```
pip install .
```

## Parsing directives

```python
from apikit.directives import CommentGroup, Context, Directive
from apikit.registry import Registry
from apikit.tagparsers import SingleLineParser

registry = Registry()
registry.register(
    Directive.ROUTE,
    SingleLineParser("summary", "summary:", [Context.ROUTE],
                     {Context.ROUTE: lambda op, value: op.update(summary=value)}),
)

operation = {}
registry.parse(Directive.ROUTE, CommentGroup(["// Summary: List users"]),
               operation, Context.ROUTE)
# operation == {"summary": "List users"}
```

Parsers run in registration order. A parser whose `parse` raises is reported
as `ParseFailureError`; a setter that raises `InvalidTargetError` is skipped,
so one comment group can be parsed against several kinds of target
(`Registry.parse_all`). A parser applied in a context it has no setter for
raises `NoSetterForContextError`. `global_registry()` and `register()` give a
process-wide registry.

## Building the SDK model

```python
from apikit.sdkgen.config import load_sdkgen_config
from apikit.sdkgen.specfile import load_spec
from apikit.sdkgen.transformer import transform

cfg = load_sdkgen_config("pokemon.sdkgen.yaml")
spec = load_spec("openapi.yaml")
sdk = transform(cfg, spec)
for service in sdk.services:
    print(service.name, [method.name for method in service.methods])
```

The configuration file needs `provider.name`, `spec.path` and
`output.modulePath`; `provider.displayName` and `config.prefix` are filled in
from the provider name when missing. `services.paramsStyle` and per-operation
`services.operations.<id>.paramsStyle` accept `inline` or `struct`, and
`models.customTypes` maps an OpenAPI `format` to a Go type and import. An
unreadable, malformed or invalid configuration raises `ConfigError`;
`load_spec` raises `OSError` or `ValueError`.

## Serving Swagger UI

```python
from pathlib import Path

from apikit.swagger.handler import SwaggerConfig, SwaggerUIHandler

app = SwaggerUIHandler(
    Path("swagger-ui.zip").read_bytes(),
    SwaggerConfig(specs={"api": Path("openapi.yaml").read_bytes()}, default_spec="api"),
)

response = app.handle("/openapi/specs", "spec=api")
print(response.status, response.headers["Content-Type"])
```

By default the UI is served under `/swagger/`, specs under `/openapi/specs`
(choose one with `?spec=<name>`) and the JSON list of specs under
`/openapi/resources`. `handle` returns a `Response` with `status`, `headers`
and `body`; the handler object itself can be mounted as a WSGI application.
`serve_ui` serves files for a path already stripped of its mount point.

A customised `swagger-ui.zip` can be produced with
`apikit.swagger.download.download(DownloadOptions(output_dir="assets"))`,
which fetches the latest release (or `version`) over the network, keeps only
its `dist` folder, removes source maps and ES module bundles, and can inject
`custom_css` and a `custom_initializer` script (for example
`apikit.swagger.templates.DEFAULT_CSS` and `DEFAULT_INITIALIZER`). Network
failures raise `RuntimeError`.

## What this package does not do

- It does not render Go source files or write a generated SDK to disk:
  `transform` stops at the `SDKData` description, ready for templates of
  your own.
- It does not scan Go source for directives and ships no ready-made
  directive parsers (title, summary, tags and so on); you register the
  parsers you need.
- It provides no command-line tool.

## Running the tests

```
pip install ".[test]"
pytest
```