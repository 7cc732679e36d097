# 📄 File: myhome/modules/community_management/domain/repositories/user_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines how user accounts are looked up and saved for community management.
# 🧪 Purpose (Technical Summary):
# Identity store interface. ``save`` persists user scalars only; the admin link is
# owned by the community side.
# 🔗 Dependencies:
# Domain models (User), PageRequest, typing, abc
# 🔄 Connected Modules / Calls From:
# CommunityService, HouseService, infrastructure implementation

from abc import ABC, abstractmethod
from typing import List, Optional

from myhome.shared.utils.pagination import PageRequest

from ..models.user import User


class UserRepository(ABC):
    """
    Repository interface for User data access operations.

    Implementation Notes:
    - ``find_by_id`` leaves ``community_ids`` empty
    - ``find_by_id_with_communities`` fills it from the admin link
    """

    @abstractmethod
    async def find_by_id(self, user_id: str) -> Optional[User]:
        """
        Get a user by id.

        Returns:
            User if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_id_with_communities(self, user_id: str) -> Optional[User]:
        """
        Get a user by id with the ids of the communities it administers.

        Returns:
            User if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all_by_community_id(
        self, community_id: str, page: Optional[PageRequest] = None
    ) -> List[User]:
        """
        List the admins of a community.

        Returns:
            Users in storage order; empty if the community has no admins
        """
        pass

    @abstractmethod
    async def exists_by_id(self, user_id: str) -> bool:
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """
        Insert or update a user's own fields.

        Returns:
            The stored User with its communities loaded

        Raises:
            ConflictError: If the email or id is already taken by another user
            RepositoryError: If the database operation fails
        """
        pass
