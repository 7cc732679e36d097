# 📄 File: myhome/modules/community_management/domain/models/__init__.py
# 🧭 Purpose (Layman Explanation):
# Collects the building blocks of the community hierarchy in one place.
# 🧪 Purpose (Technical Summary):
# Package exports for the community management domain entities.
# 🔗 Dependencies:
# community.py, house.py, user.py
# 🔄 Connected Modules / Calls From:
# Domain services, repositories, infrastructure mapping

"""
Community Management Domain Models

- Community: aggregate root with admins and houses
- CommunityHouse: a house owned by one community
- HouseMember: a resident, optionally housed, optionally with a document
- HouseMemberDocument: the identity document of a member
- User: an account that can administer communities
"""

from .community import Community
from .house import CommunityHouse, HouseMember, HouseMemberDocument
from .user import User

__all__ = [
    "Community",
    "CommunityHouse",
    "HouseMember",
    "HouseMemberDocument",
    "User",
]
