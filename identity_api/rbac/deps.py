import uuid

from fastapi import Depends
from sqlalchemy.orm import Session

from identity_api import store
from identity_api.auth.deps import get_current_user_id
from identity_api.config import settings
from identity_api.db import get_db
from identity_api.errors import AccessDenied, NotFound
from identity_api.models.organisation import Organisation
from identity_api.models.user import User
from identity_api.rbac.perms import can_add_member, can_view_organisation, can_view_user

def parse_id(raw: str) -> uuid.UUID | None:
    try:
        return uuid.UUID(raw)
    except ValueError:
        return None

# not-found is answered before the access check, so a 403 confirms the
# resource exists

def load_organisation(db: Session, org_id: str) -> Organisation:
    parsed = parse_id(org_id)
    org = store.get_organisation(db, parsed) if parsed else None
    if org is None:
        raise NotFound("Organisation not found")
    return org

def load_user(db: Session, user_id: str) -> User:
    parsed = parse_id(user_id)
    user = store.get_user(db, parsed) if parsed else None
    if user is None:
        raise NotFound("User not found")
    return user

def get_viewable_organisation(
    org_id: str,
    actor_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> Organisation:
    org = load_organisation(db, org_id)
    if not can_view_organisation(actor_id, org, store.member_ids(db, org.id)):
        raise AccessDenied()
    return org

def get_viewable_user(
    id: str,
    actor_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> User:
    target = load_user(db, id)
    if not can_view_user(actor_id, target.id, store.created_org_member_ids(db, actor_id)):
        raise AccessDenied()
    return target

def check_member_add(actor_id: uuid.UUID, org: Organisation) -> None:
    if not can_add_member(actor_id, org, settings.member_add_policy):
        raise AccessDenied()
