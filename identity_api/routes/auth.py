from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from identity_api import store
from identity_api.auth.passwords import dummy_hash, hash_password, verify_password
from identity_api.auth.tokens import TokenService, get_token_service
from identity_api.config import settings
from identity_api.db import get_db
from identity_api.errors import AuthenticationFailed, DuplicateEmail
from identity_api.models.membership import Membership
from identity_api.models.organisation import Organisation
from identity_api.models.user import User
from identity_api.ratelimit import rate_limit
from identity_api.schemas.auth import LoginData, LoginIn, RegisterIn, RegisterOut, UserOut
from identity_api.schemas.common import Envelope

router = APIRouter(prefix="/auth", tags=["auth"])
log = structlog.get_logger()

def personal_org_name(first_name: str) -> str:
    return f"{first_name}'s Organisation"

@router.post("/register", response_model=RegisterOut, status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterIn,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
    _: None = Depends(
        rate_limit(
            "auth:register",
            limit_per_window=settings.rate_limit_register_per_min,
            window_seconds=60,
        )
    ),
) -> RegisterOut:
    if store.get_user_by_email(db, payload.email) is not None:
        raise DuplicateEmail()

    user = User(
        first_name=payload.first_name,
        last_name=payload.last_name,
        email=payload.email,
        password=hash_password(payload.password),
        phone=payload.phone,
    )
    db.add(user)

    # user, personal org and membership land in one commit
    try:
        db.flush()
        org = Organisation(name=personal_org_name(payload.first_name), creator_id=user.id)
        db.add(org)
        db.flush()
        db.add(Membership(user_id=user.id, org_id=org.id))
        db.commit()
    except IntegrityError:
        # lost a race on the unique email index
        db.rollback()
        raise DuplicateEmail()

    log.info("user.registered", user_id=str(user.id), org_id=str(org.id))
    return RegisterOut(token=tokens.issue(user.id))

@router.post("/login", response_model=Envelope[LoginData])
def login(
    payload: LoginIn,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
    _: None = Depends(
        rate_limit(
            "auth:login",
            limit_per_window=settings.rate_limit_login_per_min,
            window_seconds=60,
        )
    ),
) -> Envelope[LoginData]:
    user = store.get_user_by_email(db, payload.email)
    if user is None:
        verify_password(payload.password, dummy_hash())
        log.info("auth.login_failed", reason="unknown_email")
        raise AuthenticationFailed()

    if not verify_password(payload.password, user.password):
        log.info("auth.login_failed", reason="bad_password", user_id=str(user.id))
        raise AuthenticationFailed()

    data = LoginData(
        access_token=tokens.issue(user.id),
        user=UserOut(
            user_id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            phone=user.phone,
        ),
    )
    return Envelope[LoginData](message="Login successful", data=data)
