import pytest


@pytest.fixture
def employee(client):
    response = client.post(
        "/employees/add",
        json={"first_name": "Grace", "last_name": "Hopper", "position": "Cashier", "pin_id": "1234"},
    )
    assert response.status_code == 201
    return response.get_json()["data"]


def test_provision_creates_unassigned_employee(client):
    response = client.post("/employees", json={"userId": "auth0-123", "name": "Ada Lovelace"})

    assert response.status_code == 201
    created = response.get_json()["data"]["employee"]
    assert created["first_name"] == "Ada"
    assert created["last_name"] == "Lovelace"
    assert created["position"] == "None"
    assert created["role"] == -1
    assert created["is_active"] is True
    assert created["pin_id"] == created["employee_id"] + 1000

    again = client.post("/employees", json={"userId": "auth0-123", "name": "Ada Lovelace"})
    assert again.status_code == 200
    assert again.get_json()["data"]["employee_id"] == created["employee_id"]

    lookup = client.get("/employees/auth0-123")
    assert lookup.status_code == 200
    assert lookup.get_json()["employee_id"] == created["employee_id"]


def test_provision_rejects_role_out_of_range(client):
    response = client.post("/employees", json={"userId": "auth0-9", "name": "Bad", "role": 7})

    assert response.status_code == 400
    assert response.get_json()["status"] == "error"


def test_unknown_subject_is_not_found(client):
    response = client.get("/employees/nobody")

    assert response.status_code == 404


def test_add_employee(client, employee):
    assert employee["first_name"] == "Grace"
    assert employee["pin_id"] == 1234

    listing = client.get("/employees").get_json()
    assert [row["employee_id"] for row in listing] == [employee["employee_id"]]


@pytest.mark.parametrize(
    "body",
    [
        {"first_name": "Grace", "last_name": "Hopper", "position": "Cashier", "pin_id": "12a4"},
        {"first_name": "Grace", "last_name": "Hopper", "position": "Cashier", "pin_id": 123},
        {"first_name": " ", "last_name": "Hopper", "position": "Cashier", "pin_id": "1234"},
        {"first_name": "Grace", "last_name": "Hopper", "pin_id": "1234"},
    ],
)
def test_add_employee_validation(client, body):
    response = client.post("/employees/add", json=body)

    assert response.status_code == 400


def test_field_updates(client, employee):
    employee_id = employee["employee_id"]

    response = client.post(
        "/employees/position", json={"id": employee_id, "selectedPosition": "Manager"}
    )
    assert response.status_code == 200
    assert response.get_json()["data"]["position"] == "Manager"

    response = client.post("/employees/role", json={"id": employee_id, "selectedRole": 3})
    assert response.get_json()["data"]["role"] == 3

    response = client.post(
        "/employees/name", json={"id": employee_id, "first_name": "Amazing", "last_name": "Grace"}
    )
    assert response.get_json()["data"]["first_name"] == "Amazing"

    response = client.post("/employees/active", json={"id": employee_id, "activeBool": False})
    assert response.get_json()["data"]["is_active"] is False


def test_role_update_out_of_range(client, employee):
    response = client.post(
        "/employees/role", json={"id": employee["employee_id"], "selectedRole": 9}
    )

    assert response.status_code == 400


@pytest.mark.parametrize(
    ("path", "body"),
    [
        ("/employees/position", {"id": 999, "selectedPosition": "Manager"}),
        ("/employees/role", {"id": 999, "selectedRole": 1}),
        ("/employees/name", {"id": 999, "first_name": "A", "last_name": "B"}),
        ("/employees/active", {"id": 999, "activeBool": True}),
    ],
)
def test_updates_on_missing_employee(client, path, body):
    response = client.post(path, json=body)

    assert response.status_code == 404
    assert response.get_json()["error"] == "Employee not found"


def test_delete_employee(client, employee):
    path = f"/employees/{employee['employee_id']}"

    assert client.delete(path).status_code == 200
    assert client.delete(path).status_code == 404
    assert client.get("/employees").get_json() == []


def test_user_roles(client):
    response = client.post("/users", json={"userId": "auth0-77", "name": "Kim"})
    assert response.status_code == 201
    assert response.get_json()["data"] == {"user_id": "auth0-77", "role": 1, "name": "Kim"}

    again = client.post("/users", json={"userId": "auth0-77", "role": 4, "name": "Kim"})
    assert again.status_code == 200
    assert again.get_json()["data"]["role"] == 1

    lookup = client.get("/users/auth0-77")
    assert lookup.status_code == 200
    assert lookup.get_json()["role"] == 1

    assert client.get("/users/missing").status_code == 404


def test_user_role_out_of_range(client):
    response = client.post("/users", json={"userId": "auth0-78", "role": 5})

    assert response.status_code == 400
