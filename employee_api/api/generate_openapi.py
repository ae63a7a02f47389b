import json
import os

from employee_api.api.main import app


def build_schema():
    # All REST routes are under /api; /health sits at the root
    openapi_schema = app.openapi()

    # Document the bearer token the protected routes expect
    components = openapi_schema.setdefault("components", {})
    components.setdefault("securitySchemes", {})["HTTPBearer"] = {
        "type": "http",
        "scheme": "bearer",
        "bearerFormat": "JWT",
    }

    openapi_schema["x-roles"] = {
        "admin": "Full access, including create/update/delete, availability checks and stats.",
        "user": "Read-only access to employee records.",
    }
    return openapi_schema


def write_schema(output_dir="interfaces"):
    os.makedirs(output_dir, exist_ok=True)
    output_path = os.path.join(output_dir, "openapi.json")

    with open(output_path, "w") as f:
        json.dump(build_schema(), f, indent=2)
    return output_path


if __name__ == "__main__":
    write_schema()
