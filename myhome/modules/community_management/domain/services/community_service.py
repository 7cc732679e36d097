# 📄 File: myhome/modules/community_management/domain/services/community_service.py
# 🧭 Purpose (Layman Explanation):
# Handles the rules for communities: creating them, choosing who manages them,
# adding houses and tearing everything down cleanly when a community goes away.
# 🧪 Purpose (Technical Summary):
# Community lifecycle domain service. Owns admin assignment, idempotent house
# addition and the removal cascade (detach members, delete houses, delete community)
# executed inside one unit of work.
# 🔗 Dependencies:
# Domain models, repository interfaces, HouseService, UnitOfWork, id generator
# 🔄 Connected Modules / Calls From:
# Presentation dependencies, transport layers

import logging
from typing import Iterable, List, Optional, Set

from myhome.shared.core.identifiers import IdGenerator, generate_unique_id
from myhome.shared.infrastructure.database.unit_of_work import UnitOfWork
from myhome.shared.utils.pagination import PageRequest

from ..models.community import Community
from ..models.house import CommunityHouse
from ..models.user import User
from ..repositories.community_house_repository import CommunityHouseRepository
from ..repositories.community_repository import CommunityRepository
from ..repositories.user_repository import UserRepository
from .house_service import HouseService

logger = logging.getLogger(__name__)


class CommunityService:
    """
    Domain service for the community hierarchy.

    Bulk operations succeed partially: targets that do not resolve are
    skipped and logged, the rest is applied.
    """

    def __init__(
        self,
        community_repository: CommunityRepository,
        house_repository: CommunityHouseRepository,
        user_repository: UserRepository,
        house_service: HouseService,
        unit_of_work: UnitOfWork,
        id_generator: IdGenerator = generate_unique_id,
    ):
        self.community_repository = community_repository
        self.house_repository = house_repository
        self.user_repository = user_repository
        self.house_service = house_service
        self.unit_of_work = unit_of_work
        self._generate_id = id_generator

    # =========================================================================
    # CREATION AND ADMINS
    # =========================================================================

    async def create_community(
        self, name: str, district: str, requesting_user_id: Optional[str] = None
    ) -> Community:
        """
        Create a community under a fresh id.

        The requesting user, when it resolves, becomes the sole initial admin.

        Args:
            name: Community name
            district: Community district
            requesting_user_id: Id of the user creating the community

        Returns:
            The stored Community
        """
        async with self.unit_of_work.transaction():
            community = Community(
                community_id=self._generate_id(),
                name=name,
                district=district,
            )

            admin = None
            if requesting_user_id is not None:
                admin = await self.user_repository.find_by_id_with_communities(requesting_user_id)

            if admin is not None:
                admin.community_ids.add(community.community_id)
                community.admins = {admin.user_id: admin}
            else:
                logger.warning(
                    f"Requesting user {requesting_user_id} not found, "
                    f"creating community {community.community_id} without admins"
                )

            saved = await self.community_repository.save(community)

        logger.info(f"Created community {saved.community_id} ({saved.name})")
        return saved

    async def add_admins_to_community(
        self, community_id: str, admin_ids: Iterable[str]
    ) -> Optional[Community]:
        """
        Make existing users admins of a community.

        Unknown user ids are skipped.

        Returns:
            The saved Community, or None if the community does not exist
        """
        async with self.unit_of_work.transaction():
            community = await self.community_repository.find_by_id(community_id)
            if community is None:
                logger.debug(f"Cannot add admins, community not found: {community_id}")
                return None

            for admin_id in admin_ids:
                admin = await self.user_repository.find_by_id_with_communities(admin_id)
                if admin is None:
                    logger.warning(f"Skipping unknown admin {admin_id} for community {community_id}")
                    continue
                admin.community_ids.add(community.community_id)
                community.add_admin(await self.user_repository.save(admin))

            saved = await self.community_repository.save(community)

        logger.info(f"Community {community_id} now has {len(saved.admins)} admins")
        return saved

    async def remove_admin_from_community(self, community_id: str, admin_id: str) -> bool:
        """
        Returns:
            True only if the user was an admin of the community and was removed
        """
        async with self.unit_of_work.transaction():
            community = await self.community_repository.find_by_id(community_id)
            if community is None:
                logger.debug(f"Cannot remove admin, community not found: {community_id}")
                return False

            if not community.remove_admin(admin_id):
                logger.debug(f"User {admin_id} is not an admin of community {community_id}")
                return False

            await self.community_repository.save(community)

        logger.info(f"Removed admin {admin_id} from community {community_id}")
        return True

    # =========================================================================
    # HOUSES
    # =========================================================================

    async def add_houses_to_community(
        self, community_id: str, houses: Iterable[Optional[CommunityHouse]]
    ) -> Set[str]:
        """
        Store new houses in a community.

        A candidate that is a resubmission of a house already in the community
        (same ``house_id`` and name) is skipped. Every other candidate gets a fresh
        ``house_id`` and the community reference. ``None`` entries are ignored.

        Returns:
            Ids of the houses created; empty if the community does not exist
        """
        added_ids: Set[str] = set()

        async with self.unit_of_work.transaction():
            community = await self.community_repository.find_by_id_with_houses(community_id)
            if community is None:
                logger.debug(f"Cannot add houses, community not found: {community_id}")
                return added_ids

            for house in houses:
                if house is None:
                    continue
                if community.contains_house(house):
                    logger.info(f"House {house.house_id} already in community {community_id}, skipping")
                    continue

                house.house_id = self._generate_id()
                house.community_id = community.community_id
                saved = await self.house_repository.save(house)
                community.add_house(saved)
                added_ids.add(saved.house_id)

            await self.community_repository.save(community)

        logger.info(f"Added {len(added_ids)} houses to community {community_id}")
        return added_ids

    async def remove_house_from_community_by_house_id(
        self, community: Optional[Community], house_id: str
    ) -> bool:
        """
        Remove a house: detach all its members, then delete the house row.

        Args:
            community: Community the house is removed from (already loaded)
            house_id: House to remove

        Returns:
            False if ``community`` is None or the house does not exist
        """
        if community is None:
            return False

        async with self.unit_of_work.transaction():
            house = await self.house_repository.find_by_id_with_relations(house_id)
            if house is None:
                logger.debug(f"Cannot remove house, not found: {house_id}")
                return False

            community.remove_house(house_id)

            for member_id in list(house.members):
                await self.house_service.delete_member_from_house(house_id, member_id)

            await self.community_repository.save(community)
            await self.house_repository.delete_by_id(house_id)

        logger.info(f"Removed house {house_id} from community {community.community_id}")
        return True

    async def delete_community(self, community_id: str) -> bool:
        """
        Delete a community with all of its houses. Members are detached, not deleted.

        The whole cascade is one unit of work: on failure nothing changes.

        Returns:
            False if the community does not exist
        """
        async with self.unit_of_work.transaction():
            community = await self.community_repository.find_by_id_with_houses(community_id)
            if community is None:
                logger.debug(f"Cannot delete community, not found: {community_id}")
                return False

            for house_id in list(community.house_ids):
                await self.remove_house_from_community_by_house_id(community, house_id)

            await self.community_repository.delete_by_id(community_id)

        logger.info(f"Deleted community {community_id}")
        return True

    # =========================================================================
    # QUERIES
    # =========================================================================

    async def list_all(self, page: Optional[PageRequest] = None) -> List[Community]:
        communities = await self.community_repository.find_all(page)
        logger.debug(f"Listed {len(communities)} communities")
        return communities

    async def get_community_details_by_id(self, community_id: str) -> Optional[Community]:
        return await self.community_repository.find_by_id(community_id)

    async def get_community_details_by_id_with_admins(self, community_id: str) -> Optional[Community]:
        # admins are part of every community lookup
        return await self.community_repository.find_by_id(community_id)

    async def find_community_admin_by_id(self, admin_id: str) -> Optional[User]:
        return await self.user_repository.find_by_id(admin_id)

    async def find_community_houses_by_id(
        self, community_id: str, page: Optional[PageRequest] = None
    ) -> Optional[List[CommunityHouse]]:
        """
        Returns:
            None if the community does not exist, otherwise its houses (possibly empty)
        """
        if not await self.community_repository.exists_by_id(community_id):
            logger.debug(f"Community not found: {community_id}")
            return None
        return await self.house_repository.find_all_by_community_id(community_id, page)

    async def find_community_admins_by_id(
        self, community_id: str, page: Optional[PageRequest] = None
    ) -> Optional[List[User]]:
        """
        Returns:
            None if the community does not exist, otherwise its admins (possibly empty)
        """
        if not await self.community_repository.exists_by_id(community_id):
            logger.debug(f"Community not found: {community_id}")
            return None
        return await self.user_repository.find_all_by_community_id(community_id, page)
