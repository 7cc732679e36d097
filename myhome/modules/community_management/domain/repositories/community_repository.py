# 📄 File: myhome/modules/community_management/domain/repositories/community_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines how communities are saved, found and removed, without saying which
# database does the work.
# 🧪 Purpose (Technical Summary):
# Repository interface for the Community aggregate. Implementations own the
# community/admin link and always load admins together with a community.
# 🔗 Dependencies:
# Domain models (Community), PageRequest, typing, abc
# 🔄 Connected Modules / Calls From:
# CommunityService, infrastructure implementation

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from myhome.shared.utils.pagination import PageRequest

from ..models.community import Community


class CommunityRepository(ABC):
    """
    Repository interface for Community data access operations.

    Implementation Notes:
    - Methods return domain entities (Community), not database models
    - Every lookup loads the community's admins
    - ``save`` persists scalars and the admin set; it never rewrites house rows
    """

    @abstractmethod
    async def find_by_id(self, community_id: str) -> Optional[Community]:
        """
        Get a community by id, with its admins.

        Returns:
            Community if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_id_with_houses(self, community_id: str) -> Optional[Community]:
        """
        Get a community by id with its admins and houses (houses without members).

        Returns:
            Community if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_id_with_relations(self, community_id: str) -> Optional[Community]:
        """
        Get a community by id with admins, houses and every house's members.

        Returns:
            Community if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(self, page: Optional[PageRequest] = None) -> List[Community]:
        """
        List communities in storage order, one entry per community.

        Args:
            page: Page to return, or None for every community
        """
        pass

    @abstractmethod
    async def exists_by_id(self, community_id: str) -> bool:
        pass

    @abstractmethod
    async def save(self, community: Community) -> Community:
        """
        Insert or update a community and synchronise its admin set.

        Args:
            community: Community entity; every admin must already exist

        Returns:
            The stored Community, reloaded with its admins

        Raises:
            ConflictError: If a constraint is violated
            RepositoryError: If the database operation fails
        """
        pass

    @abstractmethod
    async def save_all(self, communities: Iterable[Community]) -> List[Community]:
        pass

    @abstractmethod
    async def delete_by_id(self, community_id: str) -> bool:
        """
        Delete a community and its admin links.

        Houses must have been removed first.

        Returns:
            True if a community was deleted, False if none matched
        """
        pass
