"""OpenAPI tooling: directive parsers, an SDK generation model and Swagger UI serving."""

__version__ = "0.1.0"