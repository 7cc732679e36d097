# 📄 File: myhome/modules/community_management/domain/models/user.py
# 🧭 Purpose (Layman Explanation):
# Describes a person with a MyHome account, and which communities they look after.
# 🧪 Purpose (Technical Summary):
# User domain entity. Holds the ids of administered communities as the inverse side
# of Community.admins, so the domain graph stays free of object cycles.
# 🔗 Dependencies:
# pydantic (BaseModel, EmailStr, Field)
# 🔄 Connected Modules / Calls From:
# community.py (admins map), CommunityService, UserRepository

from typing import Set

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class User(BaseModel):
    """
    A MyHome account.

    Only the community side writes the admin relationship; ``community_ids``
    mirrors it when the user is loaded with its communities.
    """

    model_config = ConfigDict(validate_assignment=True)

    user_id: str
    name: str
    email: EmailStr
    encrypted_password: str = ""
    email_confirmed: bool = False

    community_ids: Set[str] = Field(default_factory=set)
