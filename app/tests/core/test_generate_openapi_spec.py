import yaml
from app.generate_openapi_spec import write_openapi_spec


def test_write_openapi_spec(tmp_path):
    path = tmp_path / "openapi.yaml"

    spec = write_openapi_spec(str(path))

    written = yaml.safe_load(path.read_text())
    assert written["info"]["title"] == "Portfolio API"
    assert "/api/contact" in spec["paths"]
    assert "/api/portfolio/{section}" in written["paths"]
