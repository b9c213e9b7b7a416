import uuid
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any

import jwt

from identity_api.config import settings

def now_utc() -> datetime:
    return datetime.now(timezone.utc)

class InvalidToken(Exception):
    pass

class TokenService:
    """Issues and verifies HS256 access tokens.

    A token carries ``{"user": {"id": ...}}`` plus ``iat``/``exp``. There is
    no revocation: a token stays valid until ``exp`` whatever happens to the
    user afterwards.
    """

    algorithm = "HS256"

    def __init__(
        self,
        secret: str,
        expires: timedelta = timedelta(hours=5),
        issuer: str | None = None,
        audience: str | None = None,
        clock: Callable[[], datetime] = now_utc,
    ):
        if not secret:
            raise ValueError("token secret must not be empty")
        self.secret = secret
        self.expires = expires
        self.issuer = issuer
        self.audience = audience
        self.clock = clock

    def issue(self, user_id: str | uuid.UUID, now: datetime | None = None) -> str:
        # fractional NumericDate, valid on [iat, iat + expires)
        iat = (now or self.clock()).timestamp()
        exp = iat + self.expires.total_seconds()
        payload: dict[str, Any] = {
            "user": {"id": str(user_id)},
            "iat": iat,
            "exp": exp,
        }
        if self.issuer:
            payload["iss"] = self.issuer
        if self.audience:
            payload["aud"] = self.audience
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode(self, token: str, now: datetime | None = None) -> dict[str, Any]:
        try:
            # expiry is checked below against our own clock
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer,
                options={
                    "require": ["exp", "iat", "user"],
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_aud": self.audience is not None,
                    "verify_iss": self.issuer is not None,
                },
            )
        except jwt.PyJWTError as e:
            raise InvalidToken(str(e)) from e

        exp = payload["exp"]
        if isinstance(exp, bool) or not isinstance(exp, (int, float)):
            raise InvalidToken("malformed exp claim")
        current = (now or self.clock()).timestamp()
        if current >= exp:
            raise InvalidToken("token expired")
        return payload

    def verify(self, token: str, now: datetime | None = None) -> uuid.UUID:
        payload = self.decode(token, now=now)
        user = payload.get("user")
        if not isinstance(user, dict):
            raise InvalidToken("malformed user claim")
        try:
            return uuid.UUID(str(user["id"]))
        except (KeyError, ValueError) as e:
            raise InvalidToken("malformed user id") from e

@lru_cache
def get_token_service() -> TokenService:
    return TokenService(
        secret=settings.jwt_secret,
        expires=timedelta(minutes=settings.jwt_expires_minutes),
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
    )

def issue_access_token(user_id: str | uuid.UUID) -> str:
    return get_token_service().issue(user_id)
