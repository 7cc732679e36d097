# 📄 File: myhome/modules/community_management/domain/repositories/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the data access contracts for communities, houses, residents, documents and users.
# 🧪 Purpose (Technical Summary):
# Package initialization for repository interfaces (Repository pattern, dependency inversion).

from .community_house_repository import CommunityHouseRepository
from .community_repository import CommunityRepository
from .house_member_document_repository import HouseMemberDocumentRepository
from .house_member_repository import HouseMemberRepository
from .user_repository import UserRepository

__all__ = [
    "CommunityHouseRepository",
    "CommunityRepository",
    "HouseMemberDocumentRepository",
    "HouseMemberRepository",
    "UserRepository",
]
