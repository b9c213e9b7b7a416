import uuid
from datetime import timedelta

import pytest

from identity_api.auth.tokens import get_token_service, now_utc

@pytest.mark.parametrize(
    "headers",
    [
        {},
        {"Authorization": "Basic dXNlcjpwYXNz"},
        {"Authorization": "Bearer"},
    ],
)
def test_missing_or_wrong_scheme(client, headers):
    r = client.get("/api/organisations", headers=headers)
    assert r.status_code == 401
    assert r.json() == {"msg": "No token, authorization denied"}

def test_garbage_token(client):
    r = client.get("/api/organisations", headers={"Authorization": "Bearer not.a.token"})
    assert r.status_code == 401
    assert r.json() == {"msg": "Token is not valid"}

def test_expired_token(client):
    token = get_token_service().issue(uuid.uuid4(), now=now_utc() - timedelta(hours=5, seconds=1))
    r = client.get("/api/protected", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401
    assert r.json() == {"msg": "Token is not valid"}

def test_lowercase_scheme_accepted(client):
    token = get_token_service().issue(uuid.uuid4())
    r = client.get("/api/protected", headers={"authorization": f"bearer {token}"})
    assert r.status_code == 200
