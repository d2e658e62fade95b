"""Build a Go SDK description from an OpenAPI spec and an SDK config file."""