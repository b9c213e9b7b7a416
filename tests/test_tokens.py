import uuid
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from identity_api.auth.tokens import InvalidToken, TokenService

SECRET = "test-secret-that-is-long-enough-for-hs256"
T0 = datetime(2030, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

def service(**kw) -> TokenService:
    return TokenService(SECRET, issuer="identity-api", audience="identity-api", **kw)

def test_issue_embeds_user_and_five_hour_window():
    user_id = uuid.uuid4()
    token = service().issue(user_id, now=T0)

    claims = jwt.decode(token, SECRET, algorithms=["HS256"], options={"verify_exp": False, "verify_iat": False, "verify_aud": False})
    assert claims["user"] == {"id": str(user_id)}
    assert claims["exp"] - claims["iat"] == 5 * 60 * 60

def test_valid_from_issue_until_just_before_expiry():
    user_id = uuid.uuid4()
    tokens = service()
    token = tokens.issue(user_id, now=T0)

    assert tokens.verify(token, now=T0) == user_id
    assert tokens.verify(token, now=T0 + timedelta(hours=4, minutes=59, seconds=59)) == user_id

def test_fails_at_and_after_expiry():
    tokens = service()
    token = tokens.issue(uuid.uuid4(), now=T0)

    with pytest.raises(InvalidToken):
        tokens.verify(token, now=T0 + timedelta(hours=5))
    with pytest.raises(InvalidToken):
        tokens.verify(token, now=T0 + timedelta(days=1))

def test_uses_injected_clock():
    now = {"t": T0}
    tokens = service(clock=lambda: now["t"])
    user_id = uuid.uuid4()
    token = tokens.issue(user_id)

    assert tokens.verify(token) == user_id
    now["t"] = T0 + timedelta(hours=6)
    with pytest.raises(InvalidToken):
        tokens.verify(token)

def test_signature_from_other_secret_rejected():
    token = TokenService("another-secret-that-is-long-enough-xx").issue(uuid.uuid4(), now=T0)
    with pytest.raises(InvalidToken):
        TokenService(SECRET).verify(token, now=T0)

def test_tampered_payload_rejected():
    tokens = service()
    token = tokens.issue(uuid.uuid4(), now=T0)
    header, _, sig = token.split(".")
    forged = tokens.issue(uuid.uuid4(), now=T0).split(".")[1]

    with pytest.raises(InvalidToken):
        tokens.verify(".".join([header, forged, sig]), now=T0)

@pytest.mark.parametrize("token", ["", "not-a-jwt", "a.b.c"])
def test_malformed_rejected(token):
    with pytest.raises(InvalidToken):
        service().verify(token, now=T0)

def test_missing_or_bad_user_claim_rejected():
    iat = int(T0.timestamp())
    base = {"iat": iat, "exp": iat + 60, "iss": "identity-api", "aud": "identity-api"}

    no_user = jwt.encode(base, SECRET, algorithm="HS256")
    bad_id = jwt.encode({**base, "user": {"id": "not-a-uuid"}}, SECRET, algorithm="HS256")
    no_id = jwt.encode({**base, "user": {}}, SECRET, algorithm="HS256")

    for token in (no_user, bad_id, no_id):
        with pytest.raises(InvalidToken):
            service().verify(token, now=T0)

def test_wrong_audience_rejected():
    token = TokenService(SECRET, issuer="identity-api", audience="someone-else").issue(uuid.uuid4(), now=T0)
    with pytest.raises(InvalidToken):
        service().verify(token, now=T0)

def test_empty_secret_refused():
    with pytest.raises(ValueError):
        TokenService("")

def test_sub_second_issue_time_keeps_full_window():
    issued = T0 + timedelta(milliseconds=900)
    user_id = uuid.uuid4()
    tokens = service()
    token = tokens.issue(user_id, now=issued)

    assert tokens.verify(token, now=issued + timedelta(hours=5, milliseconds=-500)) == user_id
    with pytest.raises(InvalidToken):
        tokens.verify(token, now=issued + timedelta(hours=5, milliseconds=1))
