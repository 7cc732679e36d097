# 📄 File: myhome/modules/community_management/domain/models/community.py
# 🧭 Purpose (Layman Explanation):
# Describes a residential community: its name, district, the houses in it and the
# people allowed to manage it.
# 🧪 Purpose (Technical Summary):
# Community aggregate root with keyed maps of admins (User) and houses
# (CommunityHouse), plus the identity check used to skip resubmitted houses.
# 🔗 Dependencies:
# pydantic, house.py, user.py
# 🔄 Connected Modules / Calls From:
# CommunityService, CommunityRepository and its SQLAlchemy implementation

from typing import Dict, Optional, Set

from pydantic import BaseModel, Field

from .house import CommunityHouse
from .user import User


class Community(BaseModel):
    """
    Community aggregate.

    ``admins`` is loaded with every community lookup. ``houses`` is only
    populated by the lookups that ask for houses.
    """

    community_id: str
    name: str
    district: str

    admins: Dict[str, User] = Field(default_factory=dict)
    houses: Dict[str, CommunityHouse] = Field(default_factory=dict)

    # =========================================================================
    # ADMINS
    # =========================================================================

    def add_admin(self, user: User) -> None:
        self.admins[user.user_id] = user

    def remove_admin(self, admin_id: str) -> bool:
        return self.admins.pop(admin_id, None) is not None

    @property
    def admin_ids(self) -> Set[str]:
        return set(self.admins)

    # =========================================================================
    # HOUSES
    # =========================================================================

    def add_house(self, house: CommunityHouse) -> None:
        self.houses[house.house_id] = house

    def remove_house(self, house_id: str) -> Optional[CommunityHouse]:
        return self.houses.pop(house_id, None)

    def contains_house(self, house: CommunityHouse) -> bool:
        """
        True when ``house`` is a resubmission of a house already in this community.

        Identity means same ``house_id`` and same name. Candidates without an id
        are never considered present.
        """
        if house.house_id is None:
            return False
        existing = self.houses.get(house.house_id)
        return existing is not None and existing.name == house.name

    @property
    def house_ids(self) -> Set[str]:
        return set(self.houses)
