import pytest
from fastapi.testclient import TestClient

from simlock.devices.lock import LockDevice
from simlock.main import create_app


@pytest.fixture
def client(device: LockDevice):
    with TestClient(create_app(device)) as client:
        yield client


def _add_user(client: TestClient, **fields):
    return client.post("/api/v1/thing/actions", json={"addUser": {"input": fields}})


def test_health(client: TestClient) -> None:
    body = client.get("/api/v1/health").json()
    assert body["status"] == "healthy"
    assert body["mqtt_connected"] is False
    assert body["users_count"] == 0


def test_thing_description(client: TestClient) -> None:
    td = client.get("/api/v1/thing").json()
    assert td["@type"] == ["Lock"]
    assert td["actions"]["setPinCode"]["links"][0]["href"] == "/api/v1/thing/actions/setPinCode"


def test_properties(client: TestClient) -> None:
    assert client.get("/api/v1/thing/properties").json() == {"locked": True, "users": []}
    assert client.get("/api/v1/thing/properties/locked").json() == {"locked": True}
    assert client.get("/api/v1/thing/properties/battery").status_code == 404


def test_add_user_action(client: TestClient) -> None:
    resp = _add_user(client, userId=3, pin="1234")
    assert resp.status_code == 201
    description = resp.json()["addUser"]
    assert description["status"] == "completed"
    assert description["href"].startswith("/api/v1/thing/actions/addUser/")

    users = client.get("/api/v1/thing/properties/users").json()
    assert users == {"users": [{"userId": 3, "pin": "1234"}]}

    action_id = description["href"].rsplit("/", 1)[-1]
    fetched = client.get(f"/api/v1/thing/actions/addUser/{action_id}")
    assert fetched.status_code == 200
    assert fetched.json() == resp.json()


def test_remove_missing_user_succeeds(client: TestClient) -> None:
    resp = client.post("/api/v1/thing/actions", json={"removeUser": {"input": {"userId": 7}}})
    assert resp.status_code == 201
    assert client.get("/api/v1/thing/properties/users").json() == {"users": []}


def test_set_pin_code_action(client: TestClient) -> None:
    _add_user(client, userId=3, pin="9999", userName="Bob")
    resp = client.post(
        "/api/v1/thing/actions", json={"setPinCode": {"input": {"userId": 3, "pin": "0000"}}}
    )
    assert resp.status_code == 201
    users = client.get("/api/v1/thing/properties/users").json()["users"]
    assert users == [{"userId": 3, "pin": "0000", "userName": "Bob"}]


@pytest.mark.parametrize(
    "body",
    [
        {"addUser": {"input": {"userId": 3}}},
        {"addUser": {"input": {"userId": 11, "pin": "1"}}},
        {"unlock": {"input": {}}},
        {"addUser": {"input": {"userId": 1, "pin": "1"}}, "removeUser": {"input": {"userId": 1}}},
    ],
)
def test_rejected_action_requests(client: TestClient, body) -> None:
    resp = client.post("/api/v1/thing/actions", json=body)
    assert resp.status_code == 400
    assert client.get("/api/v1/thing/properties/users").json() == {"users": []}


def test_action_queue(client: TestClient) -> None:
    _add_user(client, userId=1, pin="1")
    client.post("/api/v1/thing/actions", json={"removeUser": {"input": {"userId": 1}}})

    all_actions = client.get("/api/v1/thing/actions").json()
    assert [next(iter(a)) for a in all_actions] == ["addUser", "removeUser"]
    assert len(client.get("/api/v1/thing/actions/removeUser").json()) == 1
    assert client.get("/api/v1/thing/actions/unlock").status_code == 404
    assert client.get("/api/v1/thing/actions/addUser/nope").status_code == 404


def test_write_locked(client: TestClient, device: LockDevice) -> None:
    resp = client.put("/api/v1/thing/properties/locked", json={"locked": False})
    assert resp.status_code == 200
    assert resp.json() == {"locked": False}
    assert device.locked is False


@pytest.mark.parametrize(
    "name, body, status",
    [
        ("users", {"users": []}, 400),
        ("locked", {"locked": "open"}, 400),
        ("locked", {"unlocked": True}, 400),
        ("battery", {"battery": 1}, 404),
    ],
)
def test_rejected_property_writes(client: TestClient, device: LockDevice, name, body, status) -> None:
    assert client.put(f"/api/v1/thing/properties/{name}", json=body).status_code == status
    assert device.locked is True


def test_websocket_sends_initial_properties(client: TestClient) -> None:
    with client.websocket_connect("/ws") as ws:
        message = ws.receive_json()
    assert message == {"messageType": "propertyStatus", "data": {"locked": True, "users": []}}


def test_remove_user_with_empty_input(client: TestClient) -> None:
    _add_user(client, userId=4, pin="4444")
    resp = client.post("/api/v1/thing/actions", json={"removeUser": {"input": {}}})
    assert resp.status_code == 201
    assert resp.json()["removeUser"]["status"] == "completed"
    assert client.get("/api/v1/thing/properties/users").json() == {"users": [{"userId": 4, "pin": "4444"}]}
