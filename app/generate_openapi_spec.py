import sys

import yaml

from app.main import app


def write_openapi_spec(path: str = "openapi.yaml") -> dict:
    """Dump the application's OpenAPI schema to a YAML file."""
    openapi_dict = app.openapi()
    with open(path, "w") as f:
        yaml.dump(openapi_dict, f, default_flow_style=False, sort_keys=False)
    return openapi_dict


if __name__ == "__main__":
    write_openapi_spec(sys.argv[1] if len(sys.argv) > 1 else "openapi.yaml")
