# 📄 File: myhome/modules/community_management/domain/repositories/house_member_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines how residents are saved and found, including "every resident of every
# house in the communities this person manages".
# 🧪 Purpose (Technical Summary):
# Repository interface for HouseMember entities. The member row owns both its house
# reference and its document reference.
# 🔗 Dependencies:
# Domain models (HouseMember), PageRequest, typing, abc
# 🔄 Connected Modules / Calls From:
# HouseService, HouseMemberDocumentService, infrastructure implementation

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from myhome.shared.utils.pagination import PageRequest

from ..models.house import HouseMember


class HouseMemberRepository(ABC):
    """Repository interface for HouseMember data access operations."""

    @abstractmethod
    async def find_by_id(self, member_id: str) -> Optional[HouseMember]:
        pass

    @abstractmethod
    async def find_by_id_with_relations(self, member_id: str) -> Optional[HouseMember]:
        """Members own no nested collections; same result as find_by_id."""
        pass

    @abstractmethod
    async def find_all(self, page: Optional[PageRequest] = None) -> List[HouseMember]:
        pass

    @abstractmethod
    async def find_all_by_house_id(
        self, house_id: str, page: Optional[PageRequest] = None
    ) -> List[HouseMember]:
        """
        List the members currently in a house.

        Returns:
            Members in storage order; empty if none
        """
        pass

    @abstractmethod
    async def find_all_by_community_admin_id(
        self, user_id: str, page: Optional[PageRequest] = None
    ) -> List[HouseMember]:
        """
        List members of every house of every community the user administers.

        Args:
            user_id: Admin user id
            page: Page to return, or None for all members

        Returns:
            Members in storage order, each listed once
        """
        pass

    @abstractmethod
    async def exists_by_id(self, member_id: str) -> bool:
        pass

    @abstractmethod
    async def save(self, member: HouseMember) -> HouseMember:
        """
        Insert or update a member, including its house and document references.

        Raises:
            ConflictError: If a reference points to a missing house or document
            RepositoryError: If the database operation fails
        """
        pass

    @abstractmethod
    async def save_all(self, members: Iterable[HouseMember]) -> List[HouseMember]:
        pass

    @abstractmethod
    async def delete_by_id(self, member_id: str) -> bool:
        pass
