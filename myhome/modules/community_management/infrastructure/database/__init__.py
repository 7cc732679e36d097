# 📄 File: myhome/modules/community_management/infrastructure/database/__init__.py
# 🧭 Purpose (Layman Explanation):
# The database side of community management.
# 🧪 Purpose (Technical Summary):
# Exports the ORM models and the SQLAlchemy repository implementations.

from .community_house_repository_impl import CommunityHouseRepositoryImpl
from .community_repository_impl import CommunityRepositoryImpl
from .house_member_document_repository_impl import HouseMemberDocumentRepositoryImpl
from .house_member_repository_impl import HouseMemberRepositoryImpl
from .models import (
    CommunityHouseModel,
    CommunityModel,
    HouseMemberDocumentModel,
    HouseMemberModel,
    UserModel,
    community_admins,
)
from .user_repository_impl import UserRepositoryImpl

__all__ = [
    "CommunityHouseModel",
    "CommunityHouseRepositoryImpl",
    "CommunityModel",
    "CommunityRepositoryImpl",
    "HouseMemberDocumentModel",
    "HouseMemberDocumentRepositoryImpl",
    "HouseMemberModel",
    "HouseMemberRepositoryImpl",
    "UserModel",
    "UserRepositoryImpl",
    "community_admins",
]
