"""Tests for the contacts endpoints."""

import uuid

import pytest


@pytest.mark.asyncio
async def test_create_and_get_contact(client):
    res = await client.post(
        "/contacts",
        json={
            "name": "  Jordan Lee ",
            "email": "jordan@example.com",
            "contact_types": ["Parent", "parent", " Teacher "],
        },
    )
    assert res.status_code == 201, res.text
    data = res.json()
    assert data["name"] == "Jordan Lee"
    assert data["contact_types"] == ["parent", "teacher"]
    assert data["tags"] == []

    res = await client.get(f"/contacts/{data['id']}")
    assert res.status_code == 200
    assert res.json()["email"] == "jordan@example.com"


@pytest.mark.asyncio
async def test_create_contact_requires_name(client):
    res = await client.post("/contacts", json={"name": "   "})
    assert res.status_code == 422


@pytest.mark.asyncio
async def test_create_contact_rejects_bad_email(client):
    res = await client.post("/contacts", json={"name": "A", "email": "not-an-email"})
    assert res.status_code == 422


@pytest.mark.asyncio
async def test_list_contacts_search_and_type_filter(client, make_contact):
    make_contact("Maya Thompson", contact_types=["parent"], organization="Oak Elementary")
    make_contact("Sam Rivera", contact_types=["teacher"])
    make_contact("Priya Patel", contact_types=["parent", "member"])

    res = await client.get("/contacts", params={"q": "oak"})
    assert [c["name"] for c in res.json()] == ["Maya Thompson"]

    res = await client.get("/contacts", params={"type": "parent"})
    assert [c["name"] for c in res.json()] == ["Maya Thompson", "Priya Patel"]

    res = await client.get("/contacts", params={"type": "all"})
    assert len(res.json()) == 3

    res = await client.get("/contacts/types")
    assert res.json() == ["member", "parent", "teacher"]


@pytest.mark.asyncio
async def test_update_notes_and_tags(client, make_contact):
    contact = make_contact("Maya Thompson")
    res = await client.patch(
        f"/contacts/{contact.id}",
        json={"notes": "Prefers email", "tags": ["vip", "vip", "volunteer"]},
    )
    assert res.status_code == 200
    data = res.json()
    assert data["notes"] == "Prefers email"
    assert data["tags"] == ["vip", "volunteer"]
    assert data["name"] == "Maya Thompson"


@pytest.mark.asyncio
async def test_unknown_contact_is_404(client):
    res = await client.get(f"/contacts/{uuid.uuid4()}")
    assert res.status_code == 404
    res = await client.patch(f"/contacts/{uuid.uuid4()}", json={"notes": "x"})
    assert res.status_code == 404


@pytest.mark.asyncio
async def test_search_treats_wildcards_literally(client, make_contact):
    make_contact("Maya Thompson", organization="Oak Elementary")
    make_contact("Priya Patel", organization="100% Kids Club")
    make_contact("Sam_Rivera")

    res = await client.get("/contacts", params={"q": "%"})
    assert [c["name"] for c in res.json()] == ["Priya Patel"]

    res = await client.get("/contacts", params={"q": "_"})
    assert [c["name"] for c in res.json()] == ["Sam_Rivera"]
