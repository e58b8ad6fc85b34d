import os
import tempfile

_TMP_DIR = tempfile.mkdtemp(prefix="iot-monitor-test-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["DEFAULT_ADMIN_USERNAME"] = "admin"
os.environ["DEFAULT_ADMIN_PASSWORD"] = "admin123"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.database import (
    ASYNC_DATABASE_URL,
    Base,
    SessionLocal,
    enable_sqlite_foreign_keys,
    engine,
    get_async_db,
    init_db,
)
from app.main import app

# TestClient runs each test in its own event loop, so pooled aiosqlite
# connections cannot be shared between tests.
test_async_engine = create_async_engine(ASYNC_DATABASE_URL, poolclass=NullPool)
enable_sqlite_foreign_keys(test_async_engine.sync_engine)
TestAsyncSession = async_sessionmaker(
    bind=test_async_engine, class_=AsyncSession, expire_on_commit=False
)


async def override_get_async_db():
    async with TestAsyncSession() as session:
        yield session


app.dependency_overrides[get_async_db] = override_get_async_db


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=engine)
    init_db()
    yield


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def async_session_factory():
    return TestAsyncSession


@pytest.fixture
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def login(client, username, password):
    resp = client.post("/v1/auth/login", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


@pytest.fixture
def admin_headers(client):
    return login(client, "admin", "admin123")


@pytest.fixture
def user_headers(client):
    resp = client.post(
        "/v1/auth/register",
        json={"username": "alice", "password": "password1", "email": "alice@example.com"},
    )
    assert resp.status_code == 201, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


@pytest.fixture
def master(client, admin_headers):
    resp = client.post(
        "/v1/masters",
        json={"masterKey": "M-001", "name": "Plant A", "description": "Main plant"},
        headers=admin_headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.fixture
def gateway(client, admin_headers, master):
    resp = client.post(
        "/v1/gateways",
        json={"gatewayId": "GW-001", "masterKey": master["masterKey"], "name": "Roof gateway"},
        headers=admin_headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.fixture
def device(client, admin_headers, gateway):
    resp = client.post(
        "/v1/devices",
        json={
            "deviceId": "1",
            "gatewayId": gateway["gatewayId"],
            "name": "Logger 1",
            "type": "LOGGER",
        },
        headers=admin_headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()
