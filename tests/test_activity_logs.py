from datetime import datetime

from app.models import ActivityLog


def _create_log(client, master_key="M-001", **overrides):
    payload = {
        "masterKey": master_key,
        "category": "Master",
        "type": "Success",
        "description": "Master connected",
        "activityLogData": {"ip": "10.0.0.2"},
    }
    payload.update(overrides)
    return client.post("/v1/activityLogs", json=payload)


def _insert_log(db_session, master_id, created_at, description=None):
    log_entry = ActivityLog(
        master_id=master_id,
        category="General",
        type="Success",
        description=description,
        created_at=created_at,
        updated_at=created_at,
    )
    db_session.add(log_entry)
    db_session.commit()
    return log_entry.id


def test_create_then_get_returns_same_fields(client, admin_headers, master):
    resp = _create_log(client)
    assert resp.status_code == 201
    created = resp.json()
    assert created["master"] == master["id"]
    assert created["createdAt"] and created["updatedAt"]

    resp = client.get(f"/v1/activityLogs/{created['id']}", headers=admin_headers)
    assert resp.status_code == 200
    fetched = resp.json()
    assert fetched["category"] == "Master"
    assert fetched["type"] == "Success"
    assert fetched["description"] == "Master connected"
    assert fetched["activityLogData"] == {"ip": "10.0.0.2"}
    assert fetched["master"] == master["id"]


def test_create_does_not_require_auth(client, master):
    resp = _create_log(client, category="DeviceLogs", type="Warning")
    assert resp.status_code == 201


def test_create_with_unknown_master_key_creates_nothing(client, admin_headers, master):
    resp = _create_log(client, master_key="missing")
    assert resp.status_code == 404
    assert resp.json()["message"] == "Master not found"

    resp = client.get("/v1/activityLogs", headers=admin_headers)
    assert resp.json()["totalResults"] == 0


def test_create_rejects_unknown_category(client, master):
    resp = _create_log(client, category="Unknown")
    assert resp.status_code == 400
    assert resp.json()["success"] is False

    resp = _create_log(client, type="Info")
    assert resp.status_code == 400


def test_list_empty(client, admin_headers):
    resp = client.get("/v1/activityLogs", params={"page": 1, "limit": 10}, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json() == {
        "results": [],
        "page": 1,
        "limit": 10,
        "totalPages": 0,
        "totalResults": 0,
    }


def test_list_requires_auth(client):
    resp = client.get("/v1/activityLogs")
    assert resp.status_code == 401


def test_list_paginates_newest_first(client, admin_headers, master):
    for i in range(25):
        assert _create_log(client, description=f"event {i}").status_code == 201

    resp = client.get("/v1/activityLogs", params={"page": 1, "limit": 10}, headers=admin_headers)
    body = resp.json()
    assert body["totalResults"] == 25
    assert body["totalPages"] == 3
    assert body["results"][0]["description"] == "event 24"

    resp = client.get("/v1/activityLogs", params={"page": 3, "limit": 10}, headers=admin_headers)
    body = resp.json()
    assert body["page"] == 3
    assert len(body["results"]) == 5
    assert body["results"][-1]["description"] == "event 0"


def test_list_filters_inclusive_time_window(client, admin_headers, master, db_session):
    for created_at in [
        datetime(2021, 3, 14, 23, 59, 59),
        datetime(2021, 3, 15, 0, 0, 0),
        datetime(2021, 3, 15, 12, 0, 0),
        datetime(2021, 3, 16, 0, 0, 0),
        datetime(2021, 3, 16, 0, 0, 1),
    ]:
        _insert_log(db_session, master["id"], created_at, description=created_at.isoformat())

    resp = client.get(
        "/v1/activityLogs",
        params={"from": "2021-03-15 00:00:00", "to": "2021-03-16 00:00:00"},
        headers=admin_headers,
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["totalResults"] == 3
    assert [r["createdAt"] for r in body["results"]] == [
        "2021-03-16T00:00:00",
        "2021-03-15T12:00:00",
        "2021-03-15T00:00:00",
    ]


def test_list_with_inverted_range_is_empty(client, admin_headers, master, db_session):
    _insert_log(db_session, master["id"], datetime(2021, 3, 15, 12, 0, 0))

    resp = client.get(
        "/v1/activityLogs",
        params={"from": "2021-03-16 00:00:00", "to": "2021-03-15 00:00:00"},
        headers=admin_headers,
    )
    assert resp.status_code == 200
    assert resp.json()["totalResults"] == 0
    assert resp.json()["results"] == []


def test_list_with_invalid_date_is_rejected(client, admin_headers):
    resp = client.get("/v1/activityLogs", params={"from": "yesterday"}, headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json()["code"] == 1001


def test_list_filters_by_master_key(client, admin_headers, master):
    other = client.post(
        "/v1/masters", json={"masterKey": "M-002", "name": "Plant B"}, headers=admin_headers
    ).json()
    _create_log(client)
    _create_log(client, master_key=other["masterKey"])
    _create_log(client, master_key=other["masterKey"])

    resp = client.get("/v1/activityLogs", params={"masterKey": "M-002"}, headers=admin_headers)
    body = resp.json()
    assert body["totalResults"] == 2
    assert all(r["master"] == other["id"] for r in body["results"])

    resp = client.get("/v1/activityLogs", params={"masterKey": "nope"}, headers=admin_headers)
    assert resp.status_code == 404


def test_latest_returns_most_recent(client, admin_headers, master, db_session):
    _insert_log(db_session, master["id"], datetime(2021, 3, 15, 10, 0), description="older")
    _insert_log(db_session, master["id"], datetime(2021, 3, 15, 11, 0), description="newer")
    _insert_log(db_session, master["id"], datetime(2021, 3, 14, 10, 0), description="oldest")

    resp = client.get("/v1/activityLogs/latest", params={"masterKey": "M-001"}, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["description"] == "newer"


def test_latest_tie_breaks_by_insertion_order(client, admin_headers, master, db_session):
    same_time = datetime(2021, 3, 15, 10, 0)
    _insert_log(db_session, master["id"], same_time, description="first")
    last_id = _insert_log(db_session, master["id"], same_time, description="second")

    resp = client.get("/v1/activityLogs/latest", params={"masterKey": "M-001"}, headers=admin_headers)
    assert resp.json()["id"] == last_id
    assert resp.json()["description"] == "second"


def test_latest_not_found_messages(client, admin_headers, master):
    resp = client.get("/v1/activityLogs/latest", params={"masterKey": "M-001"}, headers=admin_headers)
    assert resp.status_code == 404
    assert resp.json()["message"] == "ActivityLog not found"

    resp = client.get("/v1/activityLogs/latest", params={"masterKey": "ghost"}, headers=admin_headers)
    assert resp.status_code == 404
    assert resp.json()["message"] == "Master not found"


def test_update_changes_only_supplied_fields(client, admin_headers, master):
    created = _create_log(client).json()

    resp = client.patch(
        f"/v1/activityLogs/{created['id']}",
        json={"description": "Master reconnected"},
        headers=admin_headers,
    )
    assert resp.status_code == 200
    updated = resp.json()
    assert updated["description"] == "Master reconnected"
    assert updated["category"] == created["category"]
    assert updated["type"] == created["type"]
    assert updated["activityLogData"] == created["activityLogData"]
    assert updated["master"] == created["master"]


def test_update_re_resolves_master_key(client, admin_headers, master):
    other = client.post(
        "/v1/masters", json={"masterKey": "M-002", "name": "Plant B"}, headers=admin_headers
    ).json()
    created = _create_log(client).json()

    resp = client.patch(
        f"/v1/activityLogs/{created['id']}", json={"masterKey": "M-002"}, headers=admin_headers
    )
    assert resp.json()["master"] == other["id"]

    resp = client.patch(
        f"/v1/activityLogs/{created['id']}", json={"masterKey": "ghost"}, headers=admin_headers
    )
    assert resp.status_code == 404


def test_delete_then_get_is_not_found(client, admin_headers, master):
    created = _create_log(client).json()

    resp = client.delete(f"/v1/activityLogs/{created['id']}", headers=admin_headers)
    assert resp.status_code == 204

    resp = client.get(f"/v1/activityLogs/{created['id']}", headers=admin_headers)
    assert resp.status_code == 404

    resp = client.delete(f"/v1/activityLogs/{created['id']}", headers=admin_headers)
    assert resp.status_code == 404


def test_list_rejects_oversized_paging(client, admin_headers, master):
    _create_log(client)

    resp = client.get(
        "/v1/activityLogs", params={"limit": "100000000000000000000"}, headers=admin_headers
    )
    assert resp.status_code == 400
    assert resp.json()["code"] == 1001

    resp = client.get(
        "/v1/activityLogs", params={"page": "100000000000000000000"}, headers=admin_headers
    )
    assert resp.status_code == 400

    resp = client.get("/v1/activityLogs", params={"limit": 100}, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["totalResults"] == 1


def test_create_trims_master_key(client, master):
    resp = _create_log(client, master_key="  M-001 ")
    assert resp.status_code == 201
    assert resp.json()["master"] == master["id"]
