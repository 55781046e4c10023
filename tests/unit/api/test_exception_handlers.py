"""Tests for the global exception handlers.

Hey future me - a tiny app with one route per exception type is enough here; the
real routers are covered by the integration tests.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel, Field

from tunelist.api.exception_handlers import register_exception_handlers, to_field_errors
from tunelist.domain.exceptions import (
    DomainException,
    EntityNotFoundException,
    InvalidArgumentException,
    InvalidTrackPositionException,
    PlaylistNotFoundException,
    StaleEntityException,
    TrackNotFoundException,
)

RAISERS = {
    "track": TrackNotFoundException("t1"),
    "playlist": PlaylistNotFoundException("p1"),
    "entity": EntityNotFoundException("Album", "a1"),
    "position": InvalidTrackPositionException(3, 1),
    "argument": InvalidArgumentException("Tracks list cannot be null or empty"),
    "stale": StaleEntityException("Playlist", "p1"),
    "domain": DomainException("Something odd"),
    "value": ValueError("Invalid TrackId: ' '"),
    "crash": RuntimeError("secret internals"),
}


class Body(BaseModel):
    name: str = Field(..., max_length=3)
    count: int


@pytest.fixture
def client() -> TestClient:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/raise/{kind}")
    async def raise_it(kind: str) -> None:
        raise RAISERS[kind]

    @app.post("/body")
    async def body(payload: Body) -> dict[str, str]:
        return {"name": payload.name}

    return TestClient(app, raise_server_exceptions=False)


class TestDomainExceptionMapping:
    """Test exception → status/error tag mapping."""

    @pytest.mark.parametrize(
        ("kind", "status_code", "error"),
        [
            ("track", 404, "TRACK_NOT_FOUND"),
            ("playlist", 404, "PLAYLIST_NOT_FOUND"),
            ("entity", 404, "NOT_FOUND"),
            ("position", 400, "INVALID_TRACK_POSITION"),
            ("argument", 400, "VALIDATION_ERROR"),
            ("stale", 409, "CONFLICT"),
            ("domain", 400, "DOMAIN_ERROR"),
            ("value", 400, "VALIDATION_ERROR"),
        ],
    )
    def test_mapping(self, client: TestClient, kind: str, status_code: int, error: str) -> None:
        response = client.get(f"/raise/{kind}")

        assert response.status_code == status_code
        payload = response.json()
        assert payload["status"] == status_code
        assert payload["error"] == error
        assert payload["message"] == str(RAISERS[kind])
        assert "timestamp" in payload

    def test_unexpected_error_hides_details(self, client: TestClient) -> None:
        response = client.get("/raise/crash")

        assert response.status_code == 500
        payload = response.json()
        assert payload["error"] == "INTERNAL_ERROR"
        assert payload["message"] == "An unexpected error occurred"
        assert "secret" not in response.text

    def test_unknown_route_uses_http_error(self, client: TestClient) -> None:
        response = client.get("/nowhere")

        assert response.status_code == 404
        assert response.json()["error"] == "HTTP_ERROR"


class TestRequestValidation:
    """Test request body validation responses."""

    def test_field_errors_are_listed(self, client: TestClient) -> None:
        response = client.post("/body", json={"name": "toolong"})

        assert response.status_code == 400
        payload = response.json()
        assert payload["error"] == "VALIDATION_ERROR"
        assert payload["message"] == "Request validation failed"

        by_field = {e["field"]: e for e in payload["fieldErrors"]}
        assert by_field["name"]["rejectedValue"] == "toolong"
        assert by_field["count"]["rejectedValue"] == "null"

    def test_malformed_json(self, client: TestClient) -> None:
        response = client.post(
            "/body", content=b"{not json", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"


def test_to_field_errors_strips_value_error_prefix() -> None:
    errors = [
        {
            "type": "value_error",
            "loc": ("body", "title"),
            "msg": "Value error, Title must not be blank",
            "input": "  ",
        },
        {"type": "missing", "loc": ("body", "isPublic"), "msg": "Field required", "input": {}},
    ]

    assert to_field_errors(errors) == [
        {"field": "title", "rejectedValue": "  ", "message": "Title must not be blank"},
        {"field": "isPublic", "rejectedValue": "null", "message": "Field required"},
    ]
