"""End-to-end checks for an app wired with build_app."""
from __future__ import annotations

from starlette.testclient import TestClient

from routedoc.app import build_app
from routedoc.tests.fixtures.math_service import SKELETON, make_routes


def _client() -> TestClient:
    return TestClient(build_app(make_routes(), skeleton=SKELETON, docs_path="/swagger.json"))


def test_document_combines_all_layers() -> None:
    with _client() as client:
        document = client.get("/swagger.json").json()

    assert list(document) == ["swagger", "info", "basePath", "securityDefinitions", "paths"]
    assert list(document["paths"]) == ["/plus", "/results/{result_id}"]

    plus = document["paths"]["/plus"]["post"]
    assert plus["tags"] == ["math"]
    assert plus["summary"] == "adds numbers"
    assert plus["security"] == [{"apiKey": []}]
    assert plus["consumes"] == ["application/json"]
    assert plus["parameters"][0]["in"] == "body"
    assert set(plus["responses"]) == {"200", "401", "429"}

    results = document["paths"]["/results/{result_id}"]
    assert results == {"get": {"summary": "fetch a stored result"}}


def test_requests_still_served_and_validated() -> None:
    with _client() as client:
        ok = client.post("/plus", json={"a": 1, "b": 2})
        invalid = client.post("/plus", json={"a": 1})
        undecodable = client.post(
            "/plus", content=b"{not json", headers={"content-type": "application/json"}
        )

    assert ok.status_code == 200
    assert ok.json() == {"result": 3}
    assert invalid.status_code == 400
    assert invalid.json()["errors"][0]["code"] == "INVALID_REQUEST"
    assert invalid.json()["meta"]["summary"] == "value_error"
    assert undecodable.status_code == 400
    assert undecodable.json()["meta"]["summary"] == "json_decode_error"
