"""Access rules for organisations and user records.

Creator status and membership are separate facts: the creator of an
organisation is not necessarily in its membership set, and both are
checked on their own.
"""
import uuid
from collections.abc import Iterable
from enum import Enum

from identity_api.models.organisation import Organisation

class Relation(str, Enum):
    creator = "creator"
    member = "member"
    self_ = "self"
    # actor created an org the target belongs to
    org_creator = "org_creator"
    authenticated = "authenticated"

PERMS: dict[str, set[Relation]] = {
    "org:view": {Relation.creator, Relation.member},
    "org:add_member": {Relation.creator},
    "user:view": {Relation.self_, Relation.org_creator},
}

# member_add_policy="any" keeps the legacy open behaviour
LEGACY_PERMS: dict[str, set[Relation]] = {
    "org:add_member": {Relation.authenticated},
}

def allowed_relations(action: str, member_add_policy: str = "creator") -> set[Relation]:
    if member_add_policy == "any" and action in LEGACY_PERMS:
        return LEGACY_PERMS[action]
    allowed = PERMS.get(action)
    if allowed is None:
        raise RuntimeError(f"unknown permission action: {action}")
    return allowed

def org_relations(actor_id: uuid.UUID, org: Organisation, member_ids: Iterable[uuid.UUID]) -> set[Relation]:
    rels = {Relation.authenticated}
    if org.creator_id == actor_id:
        rels.add(Relation.creator)
    if actor_id in set(member_ids):
        rels.add(Relation.member)
    return rels

def user_relations(
    actor_id: uuid.UUID,
    target_id: uuid.UUID,
    members_of_created_orgs: Iterable[uuid.UUID],
) -> set[Relation]:
    rels = {Relation.authenticated}
    if actor_id == target_id:
        rels.add(Relation.self_)
    if target_id in set(members_of_created_orgs):
        rels.add(Relation.org_creator)
    return rels

def is_allowed(action: str, relations: set[Relation], member_add_policy: str = "creator") -> bool:
    return bool(relations & allowed_relations(action, member_add_policy))

def can_view_organisation(actor_id: uuid.UUID, org: Organisation, member_ids: Iterable[uuid.UUID]) -> bool:
    return is_allowed("org:view", org_relations(actor_id, org, member_ids))

def can_add_member(actor_id: uuid.UUID, org: Organisation, member_add_policy: str = "creator") -> bool:
    return is_allowed("org:add_member", org_relations(actor_id, org, ()), member_add_policy)

def can_view_user(
    actor_id: uuid.UUID,
    target_id: uuid.UUID,
    members_of_created_orgs: Iterable[uuid.UUID],
) -> bool:
    return is_allowed("user:view", user_relations(actor_id, target_id, members_of_created_orgs))

def merge_organisations(created: Iterable[Organisation], joined: Iterable[Organisation]) -> list[Organisation]:
    # union by id, first seen wins, created ones first
    seen: dict[uuid.UUID, Organisation] = {}
    for org in [*created, *joined]:
        seen.setdefault(org.id, org)
    return list(seen.values())
