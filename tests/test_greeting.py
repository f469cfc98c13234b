from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from userhub.greeting import create_app


@pytest.fixture()
def client():
    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.mark.parametrize("path", ["/", "/hello"])
def test_greeting_routes_return_hello_world(client: TestClient, path: str) -> None:
    response = client.get(path)
    assert response.status_code == 200
    assert response.json() == {"msg": "Hello World"}


def test_health_reports_ok(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "OK"}


def test_payloads_ignore_query_parameters_and_body(client: TestClient) -> None:
    response = client.request("GET", "/hello?name=Bob&lang=fr", content=b'{"msg": "Bonjour"}')
    assert response.json() == {"msg": "Hello World"}

    response = client.get("/health", params={"deep": "true"})
    assert response.json() == {"status": "OK"}


def test_restricted_cors_origins(client: TestClient) -> None:
    app = create_app(cors_origins=["https://allowed.example.com"])
    with TestClient(app) as restricted:
        allowed = restricted.get("/", headers={"Origin": "https://allowed.example.com"})
        denied = restricted.get("/", headers={"Origin": "https://other.example.com"})

    assert allowed.headers.get("access-control-allow-origin") == "https://allowed.example.com"
    assert "access-control-allow-origin" not in denied.headers

    default = client.get("/", headers={"Origin": "https://anywhere.example.com"})
    assert default.headers.get("access-control-allow-origin") == "*"


def test_package_level_factories_build_both_services(tmp_path) -> None:
    from userhub import Database, create_greeting_app, create_profile_app

    database = Database(tmp_path / "factory.sqlite3")
    with TestClient(create_greeting_app()) as greeting, TestClient(create_profile_app(database=database)) as profile:
        assert greeting.get("/health").json() == profile.get("/health").json() == {"status": "OK"}
    database.close()
