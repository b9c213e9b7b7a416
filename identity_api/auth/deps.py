import uuid

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from identity_api.auth.tokens import InvalidToken, TokenService, get_token_service
from identity_api.errors import MissingOrInvalidToken

bearer = HTTPBearer(auto_error=False)

def get_current_user_id(
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
    tokens: TokenService = Depends(get_token_service),
) -> uuid.UUID:
    # identity comes from the token alone, the user row is not loaded here
    if creds is None or creds.scheme.lower() != "bearer":
        raise MissingOrInvalidToken("No token, authorization denied")

    try:
        return tokens.verify(creds.credentials)
    except InvalidToken:
        raise MissingOrInvalidToken("Token is not valid")
