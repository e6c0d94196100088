import json
import os

from school_api.api.main import app, settings

# Get the OpenAPI schema (all REST routes are under /api)
openapi_schema = app.openapi()

# Document the session cookie alongside the bearer scheme
components = openapi_schema.setdefault("components", {})
components.setdefault("securitySchemes", {})["sessionCookie"] = {
    "type": "apiKey",
    "in": "cookie",
    "name": settings.SESSION_COOKIE_NAME,
}

# Write to file
output_dir = "interfaces"
os.makedirs(output_dir, exist_ok=True)
output_path = os.path.join(output_dir, "openapi.json")

with open(output_path, "w") as f:
    json.dump(openapi_schema, f, indent=2)
