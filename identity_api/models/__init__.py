from identity_api.models.membership import Membership
from identity_api.models.organisation import Organisation
from identity_api.models.user import User
from identity_api.models.base import Base

__all__ = ["Base", "User", "Organisation", "Membership"]
