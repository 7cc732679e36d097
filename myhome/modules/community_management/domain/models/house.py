# 📄 File: myhome/modules/community_management/domain/models/house.py
# 🧭 Purpose (Layman Explanation):
# Describes a house inside a community, the people living there and the identity
# document a resident may have uploaded.
# 🧪 Purpose (Technical Summary):
# CommunityHouse, HouseMember and HouseMemberDocument domain entities. A house owns a
# keyed map of members; members point back to their house and document by id.
# 🔗 Dependencies:
# pydantic
# 🔄 Connected Modules / Calls From:
# community.py, HouseService, CommunityService, HouseMemberDocumentService,
# repository interfaces and implementations

from typing import Dict, Optional

from pydantic import BaseModel, Field


class HouseMemberDocument(BaseModel):
    """Identity document uploaded for a single house member."""

    document_id: str
    filename: str
    content: bytes = b""

    @property
    def size(self) -> int:
        return len(self.content)


class HouseMember(BaseModel):
    """
    A resident of a house.

    ``member_id`` is empty for candidates that have not been stored yet; the
    house service always assigns a fresh one. A member without ``house_id``
    is unhoused but still exists.
    """

    member_id: Optional[str] = None
    name: str
    house_id: Optional[str] = None
    document_id: Optional[str] = None


class CommunityHouse(BaseModel):
    """
    A house belonging to exactly one community.

    ``members`` is only populated when the house is loaded with its members.
    """

    house_id: Optional[str] = None
    name: str
    community_id: Optional[str] = None

    members: Dict[str, HouseMember] = Field(default_factory=dict)

    def add_member(self, member: HouseMember) -> None:
        self.members[member.member_id] = member

    def remove_member(self, member_id: str) -> Optional[HouseMember]:
        """Drop a member from the map, returning it if it was there."""
        return self.members.pop(member_id, None)
