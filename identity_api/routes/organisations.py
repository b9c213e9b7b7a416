import uuid

import structlog
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from identity_api import store
from identity_api.auth.deps import get_current_user_id
from identity_api.db import get_db
from identity_api.errors import NotFound
from identity_api.models.organisation import Organisation
from identity_api.rbac.deps import check_member_add, get_viewable_organisation, load_organisation, load_user
from identity_api.rbac.perms import merge_organisations
from identity_api.schemas.common import Envelope, MessageOut
from identity_api.schemas.orgs import AddMemberIn, OrgCreateIn, OrgListData, OrgOut

router = APIRouter(prefix="/api", tags=["organisations"])
log = structlog.get_logger()

def org_out(org: Organisation) -> OrgOut:
    return OrgOut(org_id=org.id, name=org.name, description=org.description)

@router.get("/my-organisations", response_model=list[OrgOut])
def my_organisations(
    actor_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> list[OrgOut]:
    # membership rows only, creator status is not consulted here
    if store.get_user(db, actor_id) is None:
        raise NotFound("User not found")
    return [org_out(o) for o in store.organisations_joined_by(db, actor_id)]

@router.get("/organisations", response_model=Envelope[OrgListData])
def list_organisations(
    actor_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> Envelope[OrgListData]:
    orgs = merge_organisations(
        store.organisations_created_by(db, actor_id),
        store.organisations_joined_by(db, actor_id),
    )
    return Envelope[OrgListData](
        message="Organisations retrieved successfully",
        data=OrgListData(organisations=[org_out(o) for o in orgs]),
    )

@router.get("/organisations/{org_id}", response_model=Envelope[OrgOut])
def get_organisation(org: Organisation = Depends(get_viewable_organisation)) -> Envelope[OrgOut]:
    return Envelope[OrgOut](message="Organisation retrieved successfully", data=org_out(org))

@router.post("/organisations", response_model=Envelope[OrgOut], status_code=status.HTTP_201_CREATED)
def create_organisation(
    payload: OrgCreateIn,
    actor_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> Envelope[OrgOut]:
    # creator only, no membership row is added
    org = Organisation(name=payload.name, description=payload.description, creator_id=actor_id)
    db.add(org)
    db.commit()
    db.refresh(org)

    log.info("org.created", org_id=str(org.id), creator=str(actor_id))
    return Envelope[OrgOut](message="Organisation created successfully", data=org_out(org))

@router.post("/organisations/{org_id}/users", response_model=MessageOut)
def add_user_to_organisation(
    org_id: str,
    payload: AddMemberIn,
    actor_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> MessageOut:
    org = load_organisation(db, org_id)
    user = load_user(db, payload.user_id)
    check_member_add(actor_id, org)

    store.add_member(db, user.id, org.id)
    db.commit()

    log.info("org.member_added", org_id=str(org.id), user_id=str(user.id), by=str(actor_id))
    return MessageOut(message="User added to organisation successfully")
