import asyncio

import pytest

from app.core.exceptions import DuplicateKeyError
from app.models import ActivityLog, Master
from app.services.persistence import commit_unique


def test_duplicate_master_key_is_rejected(client, admin_headers, master):
    resp = client.post(
        "/v1/masters",
        json={"masterKey": "M-001", "name": "Impostor"},
        headers=admin_headers,
    )
    assert resp.status_code == 400
    assert resp.json()["message"] == "Master key already taken"

    resp = client.get(f"/v1/masters/{master['id']}", headers=admin_headers)
    assert resp.json()["name"] == "Plant A"
    assert resp.json()["description"] == "Main plant"


def test_master_key_is_trimmed(client, admin_headers):
    resp = client.post(
        "/v1/masters", json={"masterKey": "  M-009 ", "name": " Yard "}, headers=admin_headers
    )
    assert resp.status_code == 201
    assert resp.json()["masterKey"] == "M-009"
    assert resp.json()["name"] == "Yard"


def test_master_key_cannot_be_changed(client, admin_headers, master):
    resp = client.patch(
        f"/v1/masters/{master['id']}", json={"masterKey": "M-777"}, headers=admin_headers
    )
    assert resp.status_code == 400

    resp = client.patch(
        f"/v1/masters/{master['id']}", json={"name": "Plant A2"}, headers=admin_headers
    )
    assert resp.status_code == 200
    assert resp.json()["masterKey"] == "M-001"
    assert resp.json()["name"] == "Plant A2"


def test_users_only_see_their_own_masters(client, admin_headers, user_headers, master):
    resp = client.post(
        "/v1/masters", json={"masterKey": "A-001", "name": "Alice home"}, headers=user_headers
    )
    assert resp.status_code == 201

    resp = client.get("/v1/masters", headers=user_headers)
    assert resp.json()["totalResults"] == 1
    assert resp.json()["results"][0]["masterKey"] == "A-001"

    resp = client.get("/v1/masters", headers=admin_headers)
    assert resp.json()["totalResults"] == 2

    resp = client.get(f"/v1/masters/{master['id']}", headers=user_headers)
    assert resp.status_code == 403
    resp = client.delete(f"/v1/masters/{master['id']}", headers=user_headers)
    assert resp.status_code == 403


def test_delete_master_removes_its_records(client, admin_headers, master, device, db_session):
    client.post(
        "/v1/activityLogs",
        json={"masterKey": "M-001", "category": "General", "type": "Success"},
    )
    client.post(
        "/v1/faults",
        json={
            "gatewayId": "GW-001",
            "deviceId": "1",
            "category": "LoggerFault",
            "type": "Error",
            "event": "Devices",
            "position": 1,
        },
    )

    resp = client.delete(f"/v1/masters/{master['id']}", headers=admin_headers)
    assert resp.status_code == 204

    assert client.get(f"/v1/masters/{master['id']}", headers=admin_headers).status_code == 404
    assert client.get("/v1/gateways", headers=admin_headers).json()["totalResults"] == 0
    assert client.get("/v1/devices", headers=admin_headers).json()["totalResults"] == 0
    assert client.get("/v1/faults", headers=admin_headers).json()["totalResults"] == 0
    assert db_session.query(ActivityLog).count() == 0


def test_concurrent_duplicate_key_is_reported_as_duplicate(
    client, master, async_session_factory
):
    async def insert_duplicate():
        async with async_session_factory() as session:
            session.add(Master(master_key="M-001", name="Racing copy", user_id=master["user"]))
            await commit_unique(session, "Master key already taken")

    with pytest.raises(DuplicateKeyError) as exc_info:
        asyncio.run(insert_duplicate())
    assert exc_info.value.message == "Master key already taken"
