# 📄 File: myhome/modules/community_management/infrastructure/database/community_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Reads and writes communities and their list of managers in the database.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy implementation of CommunityRepository. Loads admins with every community,
# optionally houses and members, and synchronises the community_admins link on save.
#
# 🔗 Dependencies:
# - community_management.domain.repositories.community_repository (interface)
# - community_management.infrastructure.database.models (ORM models)
# - SQLAlchemy async session, selectinload
#
# 🔄 Connected Modules / Calls From:
# - CommunityService
# - presentation/dependencies.py (construction)

import logging
from typing import Dict, Iterable, List, Optional, Set

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from myhome.modules.community_management.domain.models.community import Community
from myhome.modules.community_management.domain.models.house import CommunityHouse, HouseMember
from myhome.modules.community_management.domain.models.user import User
from myhome.modules.community_management.domain.repositories.community_repository import (
    CommunityRepository,
)
from myhome.modules.community_management.infrastructure.database.models import (
    CommunityHouseModel,
    CommunityModel,
    UserModel,
    community_admins,
)
from myhome.shared.core.exceptions import ConflictError, RepositoryError
from myhome.shared.utils.pagination import PageRequest

logger = logging.getLogger(__name__)


class CommunityRepositoryImpl(CommunityRepository):
    """
    SQLAlchemy implementation of the CommunityRepository interface.

    Lookups use ``populate_existing`` so that collections already held by the
    session's identity map are refreshed from the rows written earlier in the
    same transaction.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    # =========================================================================
    # LOOKUPS
    # =========================================================================

    def _select(self, *options):
        return (
            select(CommunityModel)
            .options(
                selectinload(CommunityModel.admins),
                *options,
            )
            .execution_options(populate_existing=True)
        )

    async def _fetch_one(self, community_id: str, *options) -> Optional[CommunityModel]:
        stmt = self._select(*options).where(CommunityModel.community_id == community_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def _find(self, community_id: str, *options, with_houses: bool = False,
                    with_members: bool = False) -> Optional[Community]:
        try:
            model = await self._fetch_one(community_id, *options)
            admin_communities = await self._admin_community_ids([model]) if model else {}
        except SQLAlchemyError as e:
            logger.error(f"Database error retrieving community {community_id}: {str(e)}")
            raise RepositoryError(
                f"Failed to retrieve community: {str(e)}", operation="find", entity="Community"
            ) from e

        if model is None:
            logger.debug(f"Community not found: {community_id}")
            return None
        return self._model_to_domain(
            model, admin_communities, with_houses=with_houses, with_members=with_members
        )

    async def find_by_id(self, community_id: str) -> Optional[Community]:
        return await self._find(community_id)

    async def find_by_id_with_houses(self, community_id: str) -> Optional[Community]:
        return await self._find(
            community_id,
            selectinload(CommunityModel.houses),
            with_houses=True,
        )

    async def find_by_id_with_relations(self, community_id: str) -> Optional[Community]:
        return await self._find(
            community_id,
            selectinload(CommunityModel.houses).selectinload(CommunityHouseModel.members),
            with_houses=True,
            with_members=True,
        )

    async def find_all(self, page: Optional[PageRequest] = None) -> List[Community]:
        try:
            stmt = self._select().order_by(CommunityModel.id)
            if page is not None:
                stmt = stmt.offset(page.offset).limit(page.limit)
            result = await self._session.execute(stmt)
            models = result.scalars().all()
            admin_communities = await self._admin_community_ids(models)
        except SQLAlchemyError as e:
            logger.error(f"Database error listing communities: {str(e)}")
            raise RepositoryError(
                f"Failed to list communities: {str(e)}", operation="find_all", entity="Community"
            ) from e

        return [self._model_to_domain(model, admin_communities) for model in models]

    async def exists_by_id(self, community_id: str) -> bool:
        try:
            stmt = select(func.count(CommunityModel.id)).where(
                CommunityModel.community_id == community_id
            )
            result = await self._session.execute(stmt)
            return result.scalar_one() > 0
        except SQLAlchemyError as e:
            logger.error(f"Database error checking community {community_id}: {str(e)}")
            raise RepositoryError(
                f"Failed to check community: {str(e)}", operation="exists", entity="Community"
            ) from e

    # =========================================================================
    # WRITES
    # =========================================================================

    async def save(self, community: Community) -> Community:
        try:
            admins = await self._load_admins(community.admin_ids)

            model = await self._fetch_one(community.community_id)
            if model is None:
                model = CommunityModel(
                    community_id=community.community_id,
                    name=community.name,
                    district=community.district,
                    admins=admins,
                )
                self._session.add(model)
            else:
                model.name = community.name
                model.district = community.district
                model.admins = admins

            await self._session.flush()

        except IntegrityError as e:
            logger.warning(f"Community save violated a constraint: {community.community_id}")
            raise ConflictError(
                f"Community {community.community_id} conflicts with stored data",
                entity="Community",
                entity_id=community.community_id,
            ) from e

        except SQLAlchemyError as e:
            logger.error(f"Database error saving community {community.community_id}: {str(e)}")
            raise RepositoryError(
                f"Failed to save community: {str(e)}", operation="save", entity="Community"
            ) from e

        logger.debug(f"Saved community {community.community_id} with {len(admins)} admins")
        return await self.find_by_id(community.community_id)

    async def save_all(self, communities: Iterable[Community]) -> List[Community]:
        return [await self.save(community) for community in communities]

    async def _load_admins(self, admin_ids: Iterable[str]) -> List[UserModel]:
        admin_ids = set(admin_ids)
        if not admin_ids:
            return []

        stmt = select(UserModel).where(UserModel.user_id.in_(admin_ids)).order_by(UserModel.id)
        result = await self._session.execute(stmt)
        users = list(result.scalars().all())

        missing = admin_ids - {user.user_id for user in users}
        if missing:
            raise ConflictError(
                f"Admins do not exist: {sorted(missing)}", entity="User"
            )
        return users

    async def _admin_community_ids(self, models: Iterable[CommunityModel]) -> Dict[str, Set[str]]:
        """Map each loaded admin to every community it administers."""
        user_ids = {user.user_id for model in models for user in model.admins}
        if not user_ids:
            return {}

        stmt = select(community_admins.c.user_id, community_admins.c.community_id).where(
            community_admins.c.user_id.in_(user_ids)
        )
        result = await self._session.execute(stmt)
        linked: Dict[str, Set[str]] = {user_id: set() for user_id in user_ids}
        for user_id, community_id in result.all():
            linked[user_id].add(community_id)
        return linked

    async def delete_by_id(self, community_id: str) -> bool:
        try:
            await self._session.execute(
                delete(community_admins).where(community_admins.c.community_id == community_id)
            )
            result = await self._session.execute(
                delete(CommunityModel).where(CommunityModel.community_id == community_id)
            )

        except IntegrityError as e:
            logger.warning(f"Community {community_id} still referenced, not deleted")
            raise ConflictError(
                f"Community {community_id} still has houses",
                entity="Community",
                entity_id=community_id,
            ) from e

        except SQLAlchemyError as e:
            logger.error(f"Database error deleting community {community_id}: {str(e)}")
            raise RepositoryError(
                f"Failed to delete community: {str(e)}", operation="delete", entity="Community"
            ) from e

        deleted = result.rowcount > 0
        logger.debug(f"Deleted community {community_id}: {deleted}")
        return deleted

    # =========================================================================
    # MAPPING
    # =========================================================================

    def _model_to_domain(self, model: CommunityModel, admin_communities: Dict[str, Set[str]],
                         with_houses: bool = False, with_members: bool = False) -> Community:
        community = Community(
            community_id=model.community_id,
            name=model.name,
            district=model.district,
        )

        for user_model in model.admins:
            community.add_admin(
                User(
                    user_id=user_model.user_id,
                    name=user_model.name,
                    email=user_model.email,
                    encrypted_password=user_model.encrypted_password,
                    email_confirmed=user_model.email_confirmed,
                    community_ids=admin_communities.get(user_model.user_id, set()),
                )
            )

        if with_houses:
            for house_model in model.houses:
                house = CommunityHouse(
                    house_id=house_model.house_id,
                    name=house_model.name,
                    community_id=house_model.community_id,
                )
                if with_members:
                    for member_model in house_model.members:
                        house.add_member(
                            HouseMember(
                                member_id=member_model.member_id,
                                name=member_model.name,
                                house_id=member_model.house_id,
                                document_id=member_model.document_id,
                            )
                        )
                community.add_house(house)

        return community
