[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "apikit"
version = "0.1.0"
description = "OpenAPI tooling: swagger directive parsers, a Go SDK generation model and a Swagger UI handler"
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = ["openapi", "swagger", "sdk", "code-generation", "swagger-ui", "wsgi"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Code Generators",
    "Topic :: Internet :: WWW/HTTP :: WSGI :: Application",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["apikit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
