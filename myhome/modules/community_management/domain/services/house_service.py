# 📄 File: myhome/modules/community_management/domain/services/house_service.py
# 🧭 Purpose (Layman Explanation):
# Handles the rules for who lives in which house: moving people into a house,
# taking them out again, and listing residents.
# 🧪 Purpose (Technical Summary):
# House lifecycle domain service. Adds members under freshly generated ids, detaches
# members from houses, and serves house/member lookups. Every mutation runs inside a
# unit of work so it joins any enclosing cascade.
# 🔗 Dependencies:
# Domain models, repository interfaces, UnitOfWork, id generator, PageRequest
# 🔄 Connected Modules / Calls From:
# CommunityService (house removal cascade), presentation dependencies

import logging
from typing import Iterable, List, Optional

from myhome.shared.core.identifiers import IdGenerator, generate_unique_id
from myhome.shared.infrastructure.database.unit_of_work import UnitOfWork
from myhome.shared.utils.pagination import PageRequest

from ..models.house import CommunityHouse, HouseMember
from ..repositories.community_house_repository import CommunityHouseRepository
from ..repositories.house_member_repository import HouseMemberRepository
from ..repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class HouseService:
    """
    Domain service for houses and their members.

    Not-found conditions are reported through empty/False/None results, never
    raised. Repository errors propagate unchanged.
    """

    def __init__(
        self,
        house_repository: CommunityHouseRepository,
        member_repository: HouseMemberRepository,
        user_repository: UserRepository,
        unit_of_work: UnitOfWork,
        id_generator: IdGenerator = generate_unique_id,
    ):
        self.house_repository = house_repository
        self.member_repository = member_repository
        self.user_repository = user_repository
        self.unit_of_work = unit_of_work
        self._generate_id = id_generator

    # =========================================================================
    # QUERIES
    # =========================================================================

    async def list_all_houses(self, page: Optional[PageRequest] = None) -> List[CommunityHouse]:
        houses = await self.house_repository.find_all(page)
        logger.debug(f"Listed {len(houses)} houses")
        return houses

    async def get_house_details_by_id(self, house_id: str) -> Optional[CommunityHouse]:
        return await self.house_repository.find_by_id(house_id)

    async def get_house_members_by_id(
        self, house_id: str, page: Optional[PageRequest] = None
    ) -> Optional[List[HouseMember]]:
        """
        List the members of a house.

        Returns:
            None if the house does not exist, otherwise its members (possibly empty)
        """
        if not await self.house_repository.exists_by_id(house_id):
            logger.debug(f"House not found: {house_id}")
            return None
        return await self.member_repository.find_all_by_house_id(house_id, page)

    async def list_house_members_for_houses_of_user_id(
        self, user_id: str, page: Optional[PageRequest] = None
    ) -> Optional[List[HouseMember]]:
        """
        List members of every house in every community administered by a user.

        Returns:
            None if the user does not exist, otherwise the members (possibly empty)
        """
        if not await self.user_repository.exists_by_id(user_id):
            logger.debug(f"User not found: {user_id}")
            return None
        return await self.member_repository.find_all_by_community_admin_id(user_id, page)

    # =========================================================================
    # MEMBERSHIP
    # =========================================================================

    async def add_house_members(
        self, house_id: str, members: Iterable[HouseMember]
    ) -> List[HouseMember]:
        """
        Store new members in a house.

        Every candidate gets a freshly generated ``member_id`` (any id it carries is
        overwritten) and its house reference set to this house.

        Args:
            house_id: Target house
            members: Candidate members

        Returns:
            The stored members; empty if the house does not exist
        """
        async with self.unit_of_work.transaction():
            house = await self.house_repository.find_by_id_with_relations(house_id)
            if house is None:
                logger.debug(f"Cannot add members, house not found: {house_id}")
                return []

            # the same object passed twice is one candidate
            candidates = list({id(member): member for member in members}.values())
            for member in candidates:
                member.member_id = self._generate_id()
                member.house_id = house.house_id

            saved_members = await self.member_repository.save_all(candidates)
            for member in saved_members:
                house.add_member(member)
            await self.house_repository.save(house)

        logger.info(f"Added {len(saved_members)} members to house {house_id}")
        return saved_members

    async def delete_member_from_house(self, house_id: str, member_id: str) -> bool:
        """
        Detach a member from a house. The member record itself is kept.

        Returns:
            True if the member was in the house and has been detached
        """
        async with self.unit_of_work.transaction():
            house = await self.house_repository.find_by_id_with_relations(house_id)
            if house is None:
                logger.debug(f"Cannot detach member {member_id}, house not found: {house_id}")
                return False

            member = house.remove_member(member_id)
            if member is None:
                logger.debug(f"Member {member_id} is not in house {house_id}")
                return False

            await self.house_repository.save(house)
            member.house_id = None
            await self.member_repository.save(member)

        logger.info(f"Detached member {member_id} from house {house_id}")
        return True
