"""Notes Routes — owner-scoped CRUD, filtering, search and sort.

Invariants:
    - Listing only ever returns the caller's notes
    - Another user's note -> 403; a missing note -> 404
    - Update is partial; an empty update -> 400 NO_FIELDS_TO_UPDATE
    - Invalid id / sortBy / body fields / search over 100 chars -> 400 VALIDATION_ERROR
    - Every edit moves updatedAt forward; timestamps are served in UTC
"""

from datetime import datetime, timedelta

import pytest


@pytest.fixture
def create_note(client, auth_headers):
    """Factory: POST a note for the given token, return its data."""
    async def _create(token: str, **fields) -> dict:
        payload = {"title": "A note", "content": "Body"}
        payload.update(fields)
        res = await client.post(
            "/api/notes", json=payload, headers=auth_headers(token),
        )
        assert res.status_code == 201, res.text
        return res.json()["data"]
    return _create


@pytest.fixture
def alice_headers(alice, auth_headers):
    return auth_headers(alice["accessToken"])


# ─── auth guard ──────────────────────────────────────────────────

async def test_notes_require_authentication(client):
    res = await client.get("/api/notes")
    assert res.status_code == 401


async def test_garbage_token_rejected(client, auth_headers):
    res = await client.get("/api/notes", headers=auth_headers("garbage"))
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "INVALID_TOKEN"


# ─── create / get ────────────────────────────────────────────────

async def test_create_and_get(client, alice, alice_headers, create_note):
    note = await create_note(
        alice["accessToken"], title="  Groceries ", content="milk",
        category="Home", color="#FFAA00", isPinned=True,
    )
    assert note["title"] == "Groceries"
    assert note["isPinned"] is True
    assert "createdAt" in note and "updatedAt" in note

    res = await client.get(f"/api/notes/{note['id']}", headers=alice_headers)
    assert res.status_code == 200
    assert res.json()["success"] is True
    assert res.json()["data"]["color"] == "#FFAA00"


async def test_create_response_envelope(client, alice_headers):
    res = await client.post(
        "/api/notes", json={"title": "t", "content": "c"}, headers=alice_headers,
    )
    assert res.status_code == 201
    body = res.json()
    assert body["success"] is True
    assert body["message"] == "Note created successfully"
    assert body["data"]["isPinned"] is False


async def test_create_rejects_bad_color(client, alice_headers):
    res = await client.post(
        "/api/notes",
        json={"title": "t", "content": "c", "color": "blue"},
        headers=alice_headers,
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_get_missing_note_is_404(client, alice_headers):
    res = await client.get("/api/notes/9999", headers=alice_headers)
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "NOTE_NOT_FOUND"


async def test_non_positive_id_is_400(client, alice_headers):
    res = await client.get("/api/notes/0", headers=alice_headers)
    assert res.status_code == 400


async def test_other_users_note_is_403(client, alice, bob, auth_headers, create_note):
    note = await create_note(alice["accessToken"])
    bob_headers = auth_headers(bob["accessToken"])

    for method in ("GET", "DELETE"):
        res = await client.request(method, f"/api/notes/{note['id']}", headers=bob_headers)
        assert res.status_code == 403
        assert res.json()["error"]["code"] == "FORBIDDEN"

    res = await client.put(
        f"/api/notes/{note['id']}", json={"title": "mine now"}, headers=bob_headers,
    )
    assert res.status_code == 403


# ─── update ──────────────────────────────────────────────────────

async def test_partial_update(client, alice, alice_headers, create_note):
    note = await create_note(alice["accessToken"], category="Work", color="#000000")

    res = await client.put(
        f"/api/notes/{note['id']}", json={"isPinned": True}, headers=alice_headers,
    )
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["isPinned"] is True
    assert data["title"] == note["title"]
    assert data["category"] == "Work"
    assert data["color"] == "#000000"


async def test_update_null_clears_category(client, alice, alice_headers, create_note):
    note = await create_note(alice["accessToken"], category="Work")
    res = await client.put(
        f"/api/notes/{note['id']}", json={"category": None}, headers=alice_headers,
    )
    assert res.status_code == 200
    assert res.json()["data"]["category"] is None


async def test_empty_update_is_400(client, alice, alice_headers, create_note):
    note = await create_note(alice["accessToken"])
    res = await client.put(
        f"/api/notes/{note['id']}", json={}, headers=alice_headers,
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "NO_FIELDS_TO_UPDATE"


async def test_update_missing_note_is_404(client, alice_headers):
    res = await client.put(
        "/api/notes/4242", json={"title": "x"}, headers=alice_headers,
    )
    assert res.status_code == 404


# ─── delete ──────────────────────────────────────────────────────

async def test_delete_then_get_is_404(client, alice, alice_headers, create_note):
    note = await create_note(alice["accessToken"])

    res = await client.delete(f"/api/notes/{note['id']}", headers=alice_headers)
    assert res.status_code == 200
    assert res.json() == {"success": True, "message": "Note deleted successfully"}

    res = await client.get(f"/api/notes/{note['id']}", headers=alice_headers)
    assert res.status_code == 404


# ─── list / filter / search / sort ───────────────────────────────

async def test_list_only_returns_own_notes(
    client, alice, bob, alice_headers, create_note,
):
    await create_note(alice["accessToken"], title="alice-1")
    await create_note(bob["accessToken"], title="bob-1")

    res = await client.get("/api/notes", headers=alice_headers)
    body = res.json()
    assert body["count"] == 1
    assert [n["title"] for n in body["data"]] == ["alice-1"]


async def test_filter_by_category_is_case_insensitive(
    client, alice, alice_headers, create_note,
):
    await create_note(alice["accessToken"], title="w", category="Work")
    await create_note(alice["accessToken"], title="h", category="Home")

    res = await client.get("/api/notes?category=work", headers=alice_headers)
    assert [n["title"] for n in res.json()["data"]] == ["w"]


async def test_filter_by_pinned(client, alice, alice_headers, create_note):
    await create_note(alice["accessToken"], title="pinned", isPinned=True)
    await create_note(alice["accessToken"], title="loose")

    res = await client.get("/api/notes?isPinned=true", headers=alice_headers)
    assert [n["title"] for n in res.json()["data"]] == ["pinned"]

    res = await client.get("/api/notes?isPinned=false", headers=alice_headers)
    assert [n["title"] for n in res.json()["data"]] == ["loose"]


async def test_search_matches_title_or_content(
    client, alice, alice_headers, create_note,
):
    await create_note(alice["accessToken"], title="Shopping", content="eggs")
    await create_note(alice["accessToken"], title="Ideas", content="Buy a SHOP sign")
    await create_note(alice["accessToken"], title="Other", content="nothing")

    res = await client.get("/api/notes?search=shop", headers=alice_headers)
    assert sorted(n["title"] for n in res.json()["data"]) == ["Ideas", "Shopping"]


async def test_search_treats_wildcards_literally(
    client, alice, alice_headers, create_note,
):
    await create_note(alice["accessToken"], title="100% done")
    await create_note(alice["accessToken"], title="halfway")

    res = await client.get("/api/notes", params={"search": "%"}, headers=alice_headers)
    assert [n["title"] for n in res.json()["data"]] == ["100% done"]


async def test_default_sort_is_newest_first(client, alice, alice_headers, create_note):
    for title in ("first", "second", "third"):
        await create_note(alice["accessToken"], title=title)

    res = await client.get("/api/notes", headers=alice_headers)
    assert [n["title"] for n in res.json()["data"]] == ["third", "second", "first"]


async def test_sort_by_title_ascending(client, alice, alice_headers, create_note):
    for title in ("banana", "apple", "cherry"):
        await create_note(alice["accessToken"], title=title)

    res = await client.get(
        "/api/notes?sortBy=title&order=asc", headers=alice_headers,
    )
    assert [n["title"] for n in res.json()["data"]] == ["apple", "banana", "cherry"]


async def test_invalid_sort_field_is_400(client, alice_headers):
    res = await client.get("/api/notes?sortBy=password", headers=alice_headers)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_search_longer_than_100_chars_is_400(client, alice_headers):
    res = await client.get(
        "/api/notes", params={"search": "x" * 101}, headers=alice_headers,
    )
    assert res.status_code == 400
    assert res.json()["error"]["details"][0]["field"] == "search"


# ─── timestamps ──────────────────────────────────────────────────

async def test_update_bumps_updated_at(client, alice, alice_headers, create_note):
    note = await create_note(alice["accessToken"])

    res = await client.put(
        f"/api/notes/{note['id']}", json={"content": "edited"}, headers=alice_headers,
    )
    updated = res.json()["data"]
    assert updated["createdAt"] == note["createdAt"]
    assert datetime.fromisoformat(updated["updatedAt"]) > datetime.fromisoformat(
        note["updatedAt"],
    )


async def test_stored_timestamps_are_served_as_utc(
    client, alice, alice_headers, create_note,
):
    note = await create_note(alice["accessToken"])

    res = await client.get(f"/api/notes/{note['id']}", headers=alice_headers)
    data = res.json()["data"]
    for key in ("createdAt", "updatedAt"):
        assert datetime.fromisoformat(data[key]).utcoffset() == timedelta(0)
    assert data["createdAt"] == note["createdAt"]
