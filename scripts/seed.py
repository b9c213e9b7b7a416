import uuid
from dataclasses import dataclass

from sqlalchemy.orm import Session

from identity_api import store
from identity_api.auth.passwords import hash_password
from identity_api.db import SessionLocal, init_db
from identity_api.models.organisation import Organisation
from identity_api.models.user import User
from identity_api.routes.auth import personal_org_name

SEED_PASSWORD = "password123"

@dataclass
class SeedResult:
    creator_email: str
    member_email: str
    outsider_email: str
    org_id: uuid.UUID

def get_or_create_user(db: Session, email: str, first_name: str, last_name: str) -> User:
    u = store.get_user_by_email(db, email)
    if u is None:
        u = User(
            first_name=first_name,
            last_name=last_name,
            email=email,
            password=hash_password(SEED_PASSWORD),
        )
        db.add(u)
        db.flush()

        # same shape registration produces
        personal = Organisation(name=personal_org_name(first_name), creator_id=u.id)
        db.add(personal)
        db.flush()
        store.add_member(db, u.id, personal.id)
    return u

def get_or_create_org(db: Session, name: str, creator_id: uuid.UUID) -> Organisation:
    for o in store.organisations_created_by(db, creator_id):
        if o.name == name:
            return o
    o = Organisation(name=name, description="seeded organisation", creator_id=creator_id)
    db.add(o)
    db.flush()
    return o

def seed() -> SeedResult:
    init_db()
    db = SessionLocal()
    try:
        creator = get_or_create_user(db, "creator@example.com", "Cora", "Creator")
        member = get_or_create_user(db, "member@example.com", "Milo", "Member")
        outsider = get_or_create_user(db, "outsider@example.com", "Olive", "Outsider")

        org = get_or_create_org(db, "seeded org", creator.id)
        store.add_member(db, member.id, org.id)

        db.commit()

        return SeedResult(
            creator_email=creator.email,
            member_email=member.email,
            outsider_email=outsider.email,
            org_id=org.id,
        )
    finally:
        db.close()

if __name__ == "__main__":
    r = seed()
    print("seed complete")
    print(f"org_id={r.org_id}")
    print(f"users (password {SEED_PASSWORD!r}):")
    print(f"  creator:  {r.creator_email}")
    print(f"  member:   {r.member_email}")
    print(f"  outsider: {r.outsider_email}")
