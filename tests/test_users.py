import uuid

from identity_api.auth.tokens import get_token_service

def register(client, first_name: str, email: str) -> str:
    r = client.post(
        "/auth/register",
        json={
            "firstName": first_name,
            "lastName": "Test",
            "email": email,
            "password": "password123",
            "phone": "555-0100",
        },
    )
    assert r.status_code == 201, r.text
    return r.json()["token"]

def auth(jwt: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {jwt}"}

def user_id(jwt: str) -> str:
    return str(get_token_service().verify(jwt))

def test_user_can_view_self(client):
    a = register(client, "Alice", "alice@x.com")

    r = client.get(f"/api/users/{user_id(a)}", headers=auth(a))
    assert r.status_code == 200
    body = r.json()
    assert body["message"] == "User retrieved successfully"
    assert body["data"] == {
        "userId": user_id(a),
        "firstName": "Alice",
        "lastName": "Test",
        "email": "alice@x.com",
        "phone": "555-0100",
    }

def test_stranger_is_denied(client):
    a = register(client, "Alice", "alice@x.com")
    b = register(client, "Bob", "bob@x.com")

    r = client.get(f"/api/users/{user_id(b)}", headers=auth(a))
    assert r.status_code == 403

def test_creator_can_view_member_of_own_org(client):
    a = register(client, "Alice", "alice@x.com")
    b = register(client, "Bob", "bob@x.com")

    r = client.get("/api/my-organisations", headers=auth(a))
    personal_org = r.json()[0]["orgId"]

    r = client.post(f"/api/organisations/{personal_org}/users", json={"userId": user_id(b)}, headers=auth(a))
    assert r.status_code == 200

    r = client.get(f"/api/users/{user_id(b)}", headers=auth(a))
    assert r.status_code == 200
    assert r.json()["data"]["email"] == "bob@x.com"

    # the relation is one-way: bob created nothing alice belongs to
    r = client.get(f"/api/users/{user_id(a)}", headers=auth(b))
    assert r.status_code == 403

def test_unknown_user_is_404(client):
    a = register(client, "Alice", "alice@x.com")

    r = client.get(f"/api/users/{uuid.uuid4()}", headers=auth(a))
    assert r.status_code == 404
    assert r.json() == {"status": "error", "message": "User not found"}
