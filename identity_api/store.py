import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from identity_api.models.membership import Membership
from identity_api.models.organisation import Organisation
from identity_api.models.user import User

def get_user(db: Session, user_id: uuid.UUID) -> User | None:
    return db.get(User, user_id)

def get_user_by_email(db: Session, email: str) -> User | None:
    return db.scalar(select(User).where(User.email == email))

def get_organisation(db: Session, org_id: uuid.UUID) -> Organisation | None:
    return db.get(Organisation, org_id)

def get_membership(db: Session, user_id: uuid.UUID, org_id: uuid.UUID) -> Membership | None:
    return db.scalar(
        select(Membership).where(Membership.user_id == user_id, Membership.org_id == org_id)
    )

def member_ids(db: Session, org_id: uuid.UUID) -> set[uuid.UUID]:
    rows = db.scalars(select(Membership.user_id).where(Membership.org_id == org_id)).all()
    return set(rows)

def organisations_created_by(db: Session, user_id: uuid.UUID) -> list[Organisation]:
    q = (
        select(Organisation)
        .where(Organisation.creator_id == user_id)
        .order_by(Organisation.created_at, Organisation.id)
    )
    return list(db.scalars(q).all())

def organisations_joined_by(db: Session, user_id: uuid.UUID) -> list[Organisation]:
    q = (
        select(Organisation)
        .join(Membership, Membership.org_id == Organisation.id)
        .where(Membership.user_id == user_id)
        .order_by(Membership.created_at, Organisation.id)
    )
    return list(db.scalars(q).all())

def created_org_member_ids(db: Session, creator_id: uuid.UUID) -> set[uuid.UUID]:
    """Ids of every user who belongs to an organisation ``creator_id`` created."""
    q = (
        select(Membership.user_id)
        .join(Organisation, Organisation.id == Membership.org_id)
        .where(Organisation.creator_id == creator_id)
    )
    return set(db.scalars(q).all())

def add_member(db: Session, user_id: uuid.UUID, org_id: uuid.UUID) -> Membership:
    # idempotent per (user, org)
    existing = get_membership(db, user_id, org_id)
    if existing is not None:
        return existing

    m = Membership(user_id=user_id, org_id=org_id)
    db.add(m)
    db.flush()
    return m
