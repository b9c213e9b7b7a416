import hashlib
from functools import lru_cache

import bcrypt

from identity_api.config import settings

# bcrypt only looks at the first 72 bytes
_BCRYPT_MAX_BYTES = 72

def _prepare(password: str) -> bytes:
    raw = password.encode("utf-8")
    if len(raw) > _BCRYPT_MAX_BYTES:
        raw = hashlib.sha256(raw).hexdigest().encode("ascii")
    return raw

def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(_prepare(password), salt).decode("ascii")

def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(_prepare(password), hashed.encode("ascii"))
    except ValueError:
        return False

# compared against when the email is unknown, so both login failures cost the same
@lru_cache
def dummy_hash() -> str:
    return hash_password("not-a-real-password")
