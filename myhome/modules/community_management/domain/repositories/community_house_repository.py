# 📄 File: myhome/modules/community_management/domain/repositories/community_house_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines how houses are saved, found and removed.
# 🧪 Purpose (Technical Summary):
# Repository interface for CommunityHouse entities. A house's community is fixed when
# it is first stored; saving a house never rewrites member rows.
# 🔗 Dependencies:
# Domain models (CommunityHouse), PageRequest, typing, abc
# 🔄 Connected Modules / Calls From:
# HouseService, CommunityService, infrastructure implementation

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from myhome.shared.utils.pagination import PageRequest

from ..models.house import CommunityHouse


class CommunityHouseRepository(ABC):
    """Repository interface for CommunityHouse data access operations."""

    @abstractmethod
    async def find_by_id(self, house_id: str) -> Optional[CommunityHouse]:
        """
        Get a house by id, without members.

        Returns:
            CommunityHouse if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_id_with_relations(self, house_id: str) -> Optional[CommunityHouse]:
        """
        Get a house by id with its members.

        Returns:
            CommunityHouse if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(self, page: Optional[PageRequest] = None) -> List[CommunityHouse]:
        pass

    @abstractmethod
    async def find_all_by_community_id(
        self, community_id: str, page: Optional[PageRequest] = None
    ) -> List[CommunityHouse]:
        """
        List the houses of one community.

        Returns:
            Houses in storage order; empty if the community has none or does not exist
        """
        pass

    @abstractmethod
    async def exists_by_id(self, house_id: str) -> bool:
        pass

    @abstractmethod
    async def save(self, house: CommunityHouse) -> CommunityHouse:
        """
        Insert or update a house.

        Args:
            house: House with ``house_id`` and ``community_id`` set

        Returns:
            The stored CommunityHouse (without members)

        Raises:
            ConflictError: If a constraint is violated (e.g. unknown community)
            RepositoryError: If the database operation fails
        """
        pass

    @abstractmethod
    async def save_all(self, houses: Iterable[CommunityHouse]) -> List[CommunityHouse]:
        pass

    @abstractmethod
    async def delete_by_id(self, house_id: str) -> bool:
        """
        Delete a house row.

        Members must have been detached first, otherwise a ConflictError is raised.

        Returns:
            True if a house was deleted, False if none matched
        """
        pass
