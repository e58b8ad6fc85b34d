def test_gateway_requires_existing_master(client, admin_headers):
    resp = client.post(
        "/v1/gateways",
        json={"gatewayId": "GW-001", "masterKey": "ghost", "name": "Roof"},
        headers=admin_headers,
    )
    assert resp.status_code == 404
    assert resp.json()["message"] == "Master not found"


def test_duplicate_gateway_id_is_rejected(client, admin_headers, gateway):
    resp = client.post(
        "/v1/gateways",
        json={"gatewayId": "GW-001", "masterKey": "M-001", "name": "Copy"},
        headers=admin_headers,
    )
    assert resp.status_code == 400


def test_gateway_state_update_and_filter(client, admin_headers, gateway):
    assert gateway["state"] == "OFFLINE"

    resp = client.patch(
        f"/v1/gateways/{gateway['id']}", json={"state": "ONLINE"}, headers=admin_headers
    )
    assert resp.status_code == 200
    assert resp.json()["state"] == "ONLINE"
    assert resp.json()["name"] == "Roof gateway"

    resp = client.get("/v1/gateways", params={"state": "ONLINE"}, headers=admin_headers)
    assert resp.json()["totalResults"] == 1
    resp = client.get("/v1/gateways", params={"state": "BROKEN"}, headers=admin_headers)
    assert resp.status_code == 400


def test_device_id_is_unique_per_gateway(client, admin_headers, gateway, device):
    resp = client.post(
        "/v1/devices",
        json={"deviceId": "1", "gatewayId": "GW-001", "name": "Dup", "type": "SENSOR"},
        headers=admin_headers,
    )
    assert resp.status_code == 400

    other = client.post(
        "/v1/gateways",
        json={"gatewayId": "GW-002", "masterKey": "M-001", "name": "Basement"},
        headers=admin_headers,
    )
    assert other.status_code == 201
    resp = client.post(
        "/v1/devices",
        json={"deviceId": "1", "gatewayId": "GW-002", "name": "Same key", "type": "SENSOR"},
        headers=admin_headers,
    )
    assert resp.status_code == 201


def test_device_type_must_be_known(client, admin_headers, gateway):
    resp = client.post(
        "/v1/devices",
        json={"deviceId": "7", "gatewayId": "GW-001", "name": "Toaster", "type": "TOASTER"},
        headers=admin_headers,
    )
    assert resp.status_code == 400


def test_list_devices_by_gateway_and_type(client, admin_headers, device):
    client.post(
        "/v1/devices",
        json={"deviceId": "2", "gatewayId": "GW-001", "name": "Inverter", "type": "INVERTER"},
        headers=admin_headers,
    )

    resp = client.get("/v1/devices", params={"gatewayId": "GW-001"}, headers=admin_headers)
    assert resp.json()["totalResults"] == 2

    resp = client.get(
        "/v1/devices", params={"gatewayId": "GW-001", "type": "INVERTER"}, headers=admin_headers
    )
    assert resp.json()["totalResults"] == 1
    assert resp.json()["results"][0]["deviceId"] == "2"


def test_delete_gateway_removes_devices(client, admin_headers, gateway, device):
    assert client.delete(f"/v1/gateways/{gateway['id']}", headers=admin_headers).status_code == 204
    assert client.get(f"/v1/devices/{device['id']}", headers=admin_headers).status_code == 404


def test_other_users_cannot_touch_gateways(client, admin_headers, user_headers, gateway):
    resp = client.post(
        "/v1/gateways",
        json={"gatewayId": "GW-ALICE", "masterKey": "M-001", "name": "Sneaky"},
        headers=user_headers,
    )
    assert resp.status_code == 403

    assert client.get(f"/v1/gateways/{gateway['id']}", headers=user_headers).status_code == 403
    resp = client.patch(
        f"/v1/gateways/{gateway['id']}", json={"name": "Mine now"}, headers=user_headers
    )
    assert resp.status_code == 403
    assert client.delete(f"/v1/gateways/{gateway['id']}", headers=user_headers).status_code == 403

    resp = client.get("/v1/gateways", headers=user_headers)
    assert resp.json()["totalResults"] == 0
    resp = client.get("/v1/gateways", params={"masterKey": "M-001"}, headers=user_headers)
    assert resp.status_code == 403

    resp = client.get(f"/v1/gateways/{gateway['id']}", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["name"] == "Roof gateway"


def test_other_users_cannot_touch_devices(client, admin_headers, user_headers, device):
    resp = client.post(
        "/v1/devices",
        json={"deviceId": "9", "gatewayId": "GW-001", "name": "Sneaky", "type": "SENSOR"},
        headers=user_headers,
    )
    assert resp.status_code == 403

    assert client.get(f"/v1/devices/{device['id']}", headers=user_headers).status_code == 403
    resp = client.patch(
        f"/v1/devices/{device['id']}", json={"state": "ONLINE"}, headers=user_headers
    )
    assert resp.status_code == 403
    assert client.delete(f"/v1/devices/{device['id']}", headers=user_headers).status_code == 403

    assert client.get("/v1/devices", headers=user_headers).json()["totalResults"] == 0
    assert client.get("/v1/devices", headers=admin_headers).json()["totalResults"] == 1


def test_owner_manages_own_gateways_and_devices(client, user_headers):
    resp = client.post(
        "/v1/masters", json={"masterKey": "A-001", "name": "Alice home"}, headers=user_headers
    )
    assert resp.status_code == 201
    resp = client.post(
        "/v1/gateways",
        json={"gatewayId": "GW-A", "masterKey": "A-001", "name": "Garage"},
        headers=user_headers,
    )
    assert resp.status_code == 201
    resp = client.post(
        "/v1/devices",
        json={"deviceId": "1", "gatewayId": "GW-A", "name": "Meter", "type": "SENSOR"},
        headers=user_headers,
    )
    assert resp.status_code == 201

    assert client.get("/v1/gateways", headers=user_headers).json()["totalResults"] == 1
    assert client.get("/v1/devices", headers=user_headers).json()["totalResults"] == 1
