"""Tests for the memberships endpoints."""

import uuid

import pytest


@pytest.mark.asyncio
async def test_membership_crud(client, make_contact):
    contact = make_contact("Priya Patel")
    res = await client.post(
        "/memberships",
        json={
            "contact_id": str(contact.id),
            "membership_type": "Family",
            "start_date": "2024-01-01",
            "end_date": "2024-12-31",
            "code": "  ",
        },
    )
    assert res.status_code == 201, res.text
    membership = res.json()
    assert membership["status"] == "active"
    assert membership["code"] is None
    assert membership["contact_name"] == "Priya Patel"

    res = await client.put(
        f"/memberships/{membership['id']}",
        json={"membership_type": "Family Plus", "status": "expired", "code": "FAM-001"},
    )
    assert res.status_code == 200
    updated = res.json()
    assert updated["status"] == "expired"
    assert updated["code"] == "FAM-001"
    assert updated["start_date"] is None

    res = await client.delete(f"/memberships/{membership['id']}")
    assert res.status_code == 204
    res = await client.get(f"/memberships/{membership['id']}")
    assert res.status_code == 404


@pytest.mark.asyncio
async def test_membership_requires_existing_contact(client):
    res = await client.post(
        "/memberships",
        json={"contact_id": str(uuid.uuid4()), "membership_type": "Individual"},
    )
    assert res.status_code == 404


@pytest.mark.asyncio
async def test_membership_rejects_unknown_status(client, make_contact):
    contact = make_contact()
    res = await client.post(
        "/memberships",
        json={"contact_id": str(contact.id), "membership_type": "Individual", "status": "paused"},
    )
    assert res.status_code == 422


@pytest.mark.asyncio
async def test_list_memberships_filters(client, make_contact):
    maya = make_contact("Maya Thompson")
    sam = make_contact("Sam Rivera")
    for contact, code, status, start in (
        (maya, "M-100", "active", "2024-02-01"),
        (sam, "S-200", "cancelled", "2024-03-01"),
    ):
        res = await client.post(
            "/memberships",
            json={
                "contact_id": str(contact.id),
                "membership_type": "Family",
                "code": code,
                "status": status,
                "start_date": start,
            },
        )
        assert res.status_code == 201

    res = await client.get("/memberships")
    assert [m["code"] for m in res.json()] == ["S-200", "M-100"]

    res = await client.get("/memberships", params={"status": "active"})
    assert [m["code"] for m in res.json()] == ["M-100"]

    res = await client.get("/memberships", params={"q": "rivera"})
    assert [m["code"] for m in res.json()] == ["S-200"]

    res = await client.get("/memberships", params={"q": "m-1"})
    assert [m["code"] for m in res.json()] == ["M-100"]
