import uuid

from pydantic import Field

from identity_api.schemas.common import CamelModel

class OrgCreateIn(CamelModel):
    name: str = Field(min_length=1)
    description: str | None = None

class OrgOut(CamelModel):
    org_id: uuid.UUID
    name: str
    description: str | None = None

class OrgListData(CamelModel):
    organisations: list[OrgOut]

class AddMemberIn(CamelModel):
    user_id: str = Field(min_length=1)
