"""Integration tests for the /api/tracks endpoints."""

import uuid

from fastapi.testclient import TestClient


def create_track(client: TestClient, title: str = "Song", duration: int = 180) -> dict:
    response = client.post(
        "/api/tracks", json={"title": title, "artist": "Artist", "duration": duration}
    )
    assert response.status_code == 201
    return response.json()


def test_create_and_get_track(client: TestClient) -> None:
    created = create_track(client, "Blue")

    response = client.get(f"/api/tracks/{created['id']}")

    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "Blue"
    assert body["artist"] == "Artist"
    assert body["duration"] == 180
    assert body["createdAt"] is not None


def test_list_tracks(client: TestClient) -> None:
    assert client.get("/api/tracks").json() == []

    create_track(client, "One")
    create_track(client, "Two")

    titles = [t["title"] for t in client.get("/api/tracks").json()]
    assert sorted(titles) == ["One", "Two"]


def test_update_track_keeps_duration_when_omitted(client: TestClient) -> None:
    created = create_track(client, "Old", duration=240)

    response = client.put(
        f"/api/tracks/{created['id']}", json={"title": "New", "artist": "Someone"}
    )

    assert response.status_code == 200
    body = response.json()
    assert (body["title"], body["artist"], body["duration"]) == ("New", "Someone", 240)
    assert body["createdAt"] == created["createdAt"]


def test_delete_track(client: TestClient) -> None:
    created = create_track(client)

    assert client.delete(f"/api/tracks/{created['id']}").status_code == 204
    assert client.get(f"/api/tracks/{created['id']}").status_code == 404


# Hey future me - ids are opaque, so any unknown id (UUID-shaped or not) is 404 TRACK_NOT_FOUND.
def test_unknown_track_is_404(client: TestClient) -> None:
    track_id = str(uuid.uuid4())

    for response in (
        client.get(f"/api/tracks/{track_id}"),
        client.put(f"/api/tracks/{track_id}", json={"title": "T", "artist": "A"}),
        client.delete(f"/api/tracks/{track_id}"),
    ):
        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "TRACK_NOT_FOUND"
        assert body["message"] == f"Track not found with ID: {track_id}"


def test_non_uuid_track_id_is_404(client: TestClient) -> None:
    response = client.get("/api/tracks/non-existent-track-id")

    assert response.status_code == 404
    body = response.json()
    assert body["error"] == "TRACK_NOT_FOUND"
    assert body["message"] == "Track not found with ID: non-existent-track-id"


def test_create_track_validation_errors(client: TestClient) -> None:
    response = client.post("/api/tracks", json={"title": " ", "artist": "A", "duration": -1})

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "VALIDATION_ERROR"
    fields = {e["field"]: e["message"] for e in body["fieldErrors"]}
    assert fields["title"] == "Title must not be blank"
    assert fields["duration"] == "Duration must be a positive number in seconds"
