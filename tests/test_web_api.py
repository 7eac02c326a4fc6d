"""
Tests for the HTTP parsing service.
"""

import pytest
from starlette.testclient import TestClient

from bnfparse.config import BnfParseConfig
from bnfparse.web.api.main import create_app


class TestParseAPI:
    """Tests for POST /parse."""

    def test_parse_success(self, client):
        response = client.post("/parse", content="<a>::='b'\n<c>::=<d> | \"e\"")
        assert response.status_code == 200
        assert response.json() == {"rules": [
            {"name": "a", "alternatives": [[{"type": "literal", "text": "b"}]]},
            {"name": "c", "alternatives": [
                [{"type": "rule_ref", "name": "d"}],
                [{"type": "literal", "text": "e"}],
            ]},
        ]}

    def test_parse_sample_grammar(self, client, sample_grammar):
        response = client.post("/parse", content=sample_grammar, headers={"Content-Type": "text/plain"})
        assert response.status_code == 200
        names = [rule["name"] for rule in response.json()["rules"]]
        assert names == ["expr", "term", "digit", "quote"]

    def test_parse_failure(self, client):
        response = client.post("/parse", content="<ab>::=")
        assert response.status_code == 400
        data = response.json()
        assert data["error"].startswith("line 1, column 8: ")
        assert data["failure"]["offset"] == 7
        assert data["failure"]["line"] == 1
        assert data["failure"]["column"] == 8
        assert data["failure"]["found"] is None
        assert "literal" in data["failure"]["expected"]

    def test_parse_empty_body(self, client):
        response = client.post("/parse", content="")
        assert response.status_code == 400
        assert response.json()["failure"]["offset"] == 0

    def test_parse_trailing_garbage(self, client):
        response = client.post("/parse", content="<a>::='b' %")
        assert response.status_code == 400
        assert response.json()["failure"]["found"] == "%"

    def test_parse_non_utf8_body(self, client):
        response = client.post("/parse", content=b"\xff\xfe<a>")
        assert response.status_code == 400
        data = response.json()
        assert data["error"] is True
        assert "UTF-8" in data["detail"]

    def test_parse_unexpected_error(self, client, monkeypatch):
        def broken_parser(text):
            raise RuntimeError("parser exploded")

        monkeypatch.setattr("bnfparse.web.api.routes.parse.parse_grammar", broken_parser)
        response = client.post("/parse", content="<a>::='b'")
        assert response.status_code == 500
        data = response.json()
        assert data["error"] is True
        assert "parser exploded" in data["detail"]

    def test_parse_requires_post(self, client):
        response = client.get("/parse")
        assert response.status_code == 405
        assert response.json()["error"] is True


class TestMetaAPI:
    """Tests for the static page, API description and health check."""

    def test_health_check(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data.get("status") == "ok"
        assert data.get("service") == "bnfparse"

    def test_index_page(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "bnfparse playground" in response.text

    def test_api_spec(self, client):
        response = client.get("/meta-data/api-spec")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/yaml")
        assert "openapi:" in response.text
        assert "/parse:" in response.text

    def test_custom_static_paths(self, tmp_path):
        page = tmp_path / "page.html"
        page.write_text("<html>custom</html>")
        config = BnfParseConfig(webpage_path=str(page))
        with TestClient(create_app(config)) as custom_client:
            response = custom_client.get("/")
        assert response.status_code == 200
        assert "custom" in response.text

    def test_missing_static_file(self, tmp_path):
        config = BnfParseConfig(api_spec_path=str(tmp_path / "missing.yaml"))
        with TestClient(create_app(config)) as custom_client:
            response = custom_client.get("/meta-data/api-spec")
        assert response.status_code == 404
        assert response.json() == {"detail": "Not found", "error": True}

    def test_unknown_route(self, client):
        response = client.get("/nope")
        assert response.status_code == 404
        assert response.json()["error"] is True

    def test_openapi_schema(self, client):
        response = client.get("/api/openapi.json")
        assert response.status_code == 200
        assert "/parse" in response.json()["paths"]
