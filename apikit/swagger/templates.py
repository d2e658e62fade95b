"""Default assets injected into a packaged Swagger UI."""

DEFAULT_INITIALIZER = """window.onload = () => {
  const baseUrlFromQuery = () => {
    const found = /url=([^&]+)/.exec(window.location.search);
    return found ? decodeURIComponent(found[1]) : window.location.origin;
  };

  const authenticationFirst = (left, right) => {
    if (left === "Authentication") return -1;
    if (right === "Authentication") return 1;
    return left.localeCompare(right);
  };

  const startUI = (baseUrl, resources) => SwaggerUIBundle({
    dom_id: "#swagger-ui",
    url: `${baseUrl}/openapi/specs`,
    urls: Array.isArray(resources) && resources.length ? resources : undefined,
    presets: [SwaggerUIBundle.presets.apis, SwaggerUIStandalonePreset],
    plugins: [SwaggerUIBundle.plugins.DownloadUrl],
    layout: "StandaloneLayout",
    docExpansion: "none",
    deepLinking: true,
    tagsSorter: authenticationFirst,
    operationsSorter: "alpha",
  });

  const boot = async () => {
    const baseUrl = baseUrlFromQuery();
    try {
      const reply = await fetch("/openapi/resources", {
        credentials: "same-origin",
        headers: { Accept: "application/json", "Content-Type": "application/json" },
      });
      window.ui = startUI(baseUrl, await reply.json());
    } catch (failure) {
      console.error("Error loading Swagger UI: ", failure);
    }
  };

  boot();
};
"""

DEFAULT_CSS = """.swagger-ui .info .title > span,
.swagger-ui .info .main > a {
  display: none;
}
"""

SIMPLE_INITIALIZER = """window.onload = () => {
  window.ui = SwaggerUIBundle({
    dom_id: "#swagger-ui",
    url: "/openapi/specs",
    presets: [SwaggerUIBundle.presets.apis, SwaggerUIStandalonePreset],
    plugins: [SwaggerUIBundle.plugins.DownloadUrl],
    layout: "StandaloneLayout",
    deepLinking: true,
    docExpansion: "none",
    tagsSorter: "alpha",
    operationsSorter: "alpha",
  });
};
"""