import uuid

from pydantic import EmailStr, Field

from identity_api.schemas.common import CamelModel

class RegisterIn(CamelModel):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=6)
    phone: str | None = None

class RegisterOut(CamelModel):
    token: str

class LoginIn(CamelModel):
    email: EmailStr
    password: str

class UserOut(CamelModel):
    user_id: uuid.UUID
    first_name: str
    last_name: str
    email: str
    phone: str | None = None

class LoginData(CamelModel):
    access_token: str
    user: UserOut
