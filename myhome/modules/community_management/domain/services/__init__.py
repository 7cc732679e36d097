# 📄 File: myhome/modules/community_management/domain/services/__init__.py
# 🧭 Purpose (Layman Explanation):
# The rule-keepers of the community hierarchy.
# 🧪 Purpose (Technical Summary):
# Package exports for the community, house and member document domain services.

from .community_service import CommunityService
from .house_member_document_service import HouseMemberDocumentService
from .house_service import HouseService

__all__ = ["CommunityService", "HouseMemberDocumentService", "HouseService"]
