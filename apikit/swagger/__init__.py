"""Download, repackage and serve Swagger UI alongside OpenAPI specs."""