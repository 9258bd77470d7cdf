"""
Tests for chat API endpoints.

Sessions are issued through the auth service and set as the user cookie.
"""

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import get_container
from shared.config import get_settings


@pytest.fixture
def client():
    return TestClient(create_app())


def as_user(client: TestClient, user_id: str, role: str) -> TestClient:
    """Switch the client's session cookie to the given user."""
    token = get_container().auth.issue_user_session(user_id, role)
    client.cookies.clear()
    client.cookies.set(get_settings().user_session_cookie, token)
    return client


def open_room(client, listing_id="call-1", gallery_id="gallery-1", artist_id="artist-1"):
    as_user(client, artist_id, "artist")
    response = client.post(
        "/api/chat", json={"listing_id": listing_id, "gallery_id": gallery_id}
    )
    assert response.status_code == 200
    return response.json()["room_id"]


class TestAuthentication:
    """Every chat endpoint requires a user session."""

    @pytest.mark.parametrize("method,path", [
        ("get", "/api/chat"),
        ("post", "/api/chat"),
        ("post", "/api/chat/invite"),
        ("get", "/api/chat/some-room"),
        ("post", "/api/chat/some-room/messages"),
    ])
    def test_no_cookie(self, client, method, path):
        response = client.get(path) if method == "get" else client.post(path, json={})
        assert response.status_code == 401

    def test_admin_cookie_is_not_a_user_session(self, client):
        """An admin cookie does not open chat."""
        token = get_container().auth.issue_admin_session("admin@example.com")
        client.cookies.set(get_settings().admin_session_cookie, token)
        assert client.get("/api/chat").status_code == 401


class TestCreateRoom:
    """Tests for POST /api/chat"""

    def test_artist_creates_room(self, client):
        """Creating twice returns the same room."""
        first = open_room(client)
        second = open_room(client)
        assert first == second

    def test_gallery_cannot_create(self, client):
        as_user(client, "gallery-1", "gallery")
        response = client.post("/api/chat", json={"listing_id": "call-1", "gallery_id": "gallery-1"})
        assert response.status_code == 403

    def test_conflicting_gallery(self, client):
        """Reusing a (listing, artist) pair with another gallery is a conflict."""
        open_room(client)
        response = client.post("/api/chat", json={"listing_id": "call-1", "gallery_id": "gallery-2"})
        assert response.status_code == 409

    def test_missing_gallery(self, client):
        as_user(client, "artist-1", "artist")
        response = client.post("/api/chat", json={"listing_id": "call-1"})
        assert response.status_code == 422


class TestInvite:
    """Tests for POST /api/chat/invite"""

    def test_gallery_invites_artist(self, client):
        """The invite opens the room with the gallery's message."""
        as_user(client, "gallery-1", "gallery")
        response = client.post("/api/chat/invite", json={
            "listing_id": "call-1",
            "artist_id": "artist-1",
            "text": "  We love your work  ",
        })
        assert response.status_code == 200
        room_id = response.json()["room_id"]

        as_user(client, "artist-1", "artist")
        detail = client.get(f"/api/chat/{room_id}").json()
        assert detail["room"]["gallery_id"] == "gallery-1"
        assert [m["text"] for m in detail["messages"]] == ["We love your work"]
        assert detail["messages"][0]["sender_role"] == "gallery"

    def test_artist_cannot_invite(self, client):
        as_user(client, "artist-1", "artist")
        response = client.post("/api/chat/invite", json={
            "listing_id": "call-1", "artist_id": "artist-2", "text": "hi",
        })
        assert response.status_code == 403

    def test_other_gallery_gets_generic_forbidden(self, client):
        """Inviting into another gallery's room does not reveal that it exists."""
        room_id = open_room(client, listing_id="call-1", gallery_id="gallery-1")

        as_user(client, "gallery-2", "gallery")
        response = client.post("/api/chat/invite", json={
            "listing_id": "call-1", "artist_id": "artist-1", "text": "hello",
        })
        assert response.status_code == 403
        assert response.json() == {"detail": "forbidden"}

        as_user(client, "artist-1", "artist")
        assert client.get(f"/api/chat/{room_id}").json()["messages"] == []

    def test_blank_text_rejected(self, client):
        as_user(client, "gallery-1", "gallery")
        response = client.post("/api/chat/invite", json={
            "listing_id": "call-1", "artist_id": "artist-1", "text": "   ",
        })
        assert response.status_code == 422


class TestRoomAccess:
    """Tests for GET /api/chat/{room_id} and POST /api/chat/{room_id}/messages"""

    def test_both_parties_exchange_messages(self, client):
        room_id = open_room(client)
        sent = client.post(f"/api/chat/{room_id}/messages", json={"text": "hello"})
        assert sent.status_code == 201
        assert sent.json()["sequence"] == 1

        as_user(client, "gallery-1", "gallery")
        reply = client.post(f"/api/chat/{room_id}/messages", json={"text": "hi"})
        assert reply.status_code == 201

        messages = client.get(f"/api/chat/{room_id}").json()["messages"]
        assert [(m["sender_id"], m["text"]) for m in messages] == [
            ("artist-1", "hello"),
            ("gallery-1", "hi"),
        ]

    def test_unknown_room(self, client):
        as_user(client, "artist-1", "artist")
        assert client.get("/api/chat/missing").status_code == 404
        response = client.post("/api/chat/missing/messages", json={"text": "hi"})
        assert response.status_code == 404

    def test_third_party_is_forbidden(self, client):
        """Neither reading nor writing is allowed to outsiders."""
        room_id = open_room(client)
        as_user(client, "artist-2", "artist")
        assert client.get(f"/api/chat/{room_id}").status_code == 403
        response = client.post(f"/api/chat/{room_id}/messages", json={"text": "hi"})
        assert response.status_code == 403

    def test_party_id_in_wrong_role_is_forbidden(self, client):
        """The artist's ID presented with the gallery role is rejected."""
        room_id = open_room(client)
        as_user(client, "artist-1", "gallery")
        assert client.get(f"/api/chat/{room_id}").status_code == 403

    def test_message_too_long(self, client):
        room_id = open_room(client)
        response = client.post(f"/api/chat/{room_id}/messages", json={"text": "x" * 5001})
        assert response.status_code == 422


class TestListRooms:
    """Tests for GET /api/chat"""

    def test_lists_only_own_rooms(self, client):
        mine = open_room(client, listing_id="call-1")
        open_room(client, listing_id="call-2", artist_id="artist-2")

        as_user(client, "artist-1", "artist")
        client.post(f"/api/chat/{mine}/messages", json={"text": "latest"})
        rooms = client.get("/api/chat").json()["rooms"]
        assert [room["id"] for room in rooms] == [mine]
        assert rooms[0]["last_message_text"] == "latest"

    def test_gallery_sees_rooms_from_all_artists(self, client):
        open_room(client, listing_id="call-1", artist_id="artist-1")
        open_room(client, listing_id="call-1", artist_id="artist-2")

        as_user(client, "gallery-1", "gallery")
        assert len(client.get("/api/chat").json()["rooms"]) == 2
