from fastapi import APIRouter, Depends

from identity_api.models.user import User
from identity_api.rbac.deps import get_viewable_user
from identity_api.schemas.auth import UserOut
from identity_api.schemas.common import Envelope

router = APIRouter(prefix="/api", tags=["users"])

@router.get("/users/{id}", response_model=Envelope[UserOut])
def get_user(user: User = Depends(get_viewable_user)) -> Envelope[UserOut]:
    data = UserOut(
        user_id=user.id,
        first_name=user.first_name,
        last_name=user.last_name,
        email=user.email,
        phone=user.phone,
    )
    return Envelope[UserOut](message="User retrieved successfully", data=data)
