# 📄 File: myhome/modules/community_management/infrastructure/database/community_house_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Reads and writes houses in the database.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy implementation of CommunityHouseRepository. The owning community is set
# on insert and never changed by later saves.
#
# 🔗 Dependencies:
# - community_management.domain.repositories.community_house_repository (interface)
# - community_management.infrastructure.database.models (ORM models)
#
# 🔄 Connected Modules / Calls From:
# - HouseService, CommunityService

import logging
from typing import Iterable, List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from myhome.modules.community_management.domain.models.house import CommunityHouse, HouseMember
from myhome.modules.community_management.domain.repositories.community_house_repository import (
    CommunityHouseRepository,
)
from myhome.modules.community_management.infrastructure.database.models import (
    CommunityHouseModel,
)
from myhome.shared.core.exceptions import ConflictError, RepositoryError
from myhome.shared.utils.pagination import PageRequest

logger = logging.getLogger(__name__)


class CommunityHouseRepositoryImpl(CommunityHouseRepository):
    """SQLAlchemy implementation of the CommunityHouseRepository interface."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _select(self, *options):
        return (
            select(CommunityHouseModel)
            .options(*options)
            .execution_options(populate_existing=True)
        )

    async def _fetch_one(self, house_id: str, *options) -> Optional[CommunityHouseModel]:
        stmt = self._select(*options).where(CommunityHouseModel.house_id == house_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_by_id(self, house_id: str) -> Optional[CommunityHouse]:
        try:
            model = await self._fetch_one(house_id)
        except SQLAlchemyError as e:
            logger.error(f"Database error retrieving house {house_id}: {str(e)}")
            raise RepositoryError(
                f"Failed to retrieve house: {str(e)}", operation="find", entity="CommunityHouse"
            ) from e

        if model is None:
            logger.debug(f"House not found: {house_id}")
            return None
        return self._model_to_domain(model)

    async def find_by_id_with_relations(self, house_id: str) -> Optional[CommunityHouse]:
        try:
            model = await self._fetch_one(house_id, selectinload(CommunityHouseModel.members))
        except SQLAlchemyError as e:
            logger.error(f"Database error retrieving house {house_id}: {str(e)}")
            raise RepositoryError(
                f"Failed to retrieve house: {str(e)}", operation="find", entity="CommunityHouse"
            ) from e

        if model is None:
            logger.debug(f"House not found: {house_id}")
            return None
        return self._model_to_domain(model, with_members=True)

    async def find_all(self, page: Optional[PageRequest] = None) -> List[CommunityHouse]:
        return await self._list(None, page)

    async def find_all_by_community_id(
        self, community_id: str, page: Optional[PageRequest] = None
    ) -> List[CommunityHouse]:
        return await self._list(community_id, page)

    async def _list(self, community_id: Optional[str], page: Optional[PageRequest]) -> List[CommunityHouse]:
        try:
            stmt = self._select().order_by(CommunityHouseModel.id)
            if community_id is not None:
                stmt = stmt.where(CommunityHouseModel.community_id == community_id)
            if page is not None:
                stmt = stmt.offset(page.offset).limit(page.limit)
            result = await self._session.execute(stmt)
            models = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error(f"Database error listing houses: {str(e)}")
            raise RepositoryError(
                f"Failed to list houses: {str(e)}", operation="find_all", entity="CommunityHouse"
            ) from e

        return [self._model_to_domain(model) for model in models]

    async def exists_by_id(self, house_id: str) -> bool:
        try:
            stmt = select(func.count(CommunityHouseModel.id)).where(
                CommunityHouseModel.house_id == house_id
            )
            result = await self._session.execute(stmt)
            return result.scalar_one() > 0
        except SQLAlchemyError as e:
            logger.error(f"Database error checking house {house_id}: {str(e)}")
            raise RepositoryError(
                f"Failed to check house: {str(e)}", operation="exists", entity="CommunityHouse"
            ) from e

    async def save(self, house: CommunityHouse) -> CommunityHouse:
        try:
            model = await self._fetch_one(house.house_id)
            if model is None:
                model = CommunityHouseModel(
                    house_id=house.house_id,
                    name=house.name,
                    community_id=house.community_id,
                )
                self._session.add(model)
            else:
                model.name = house.name
            await self._session.flush()

        except IntegrityError as e:
            logger.warning(f"House save violated a constraint: {house.house_id}")
            raise ConflictError(
                f"House {house.house_id} conflicts with stored data",
                entity="CommunityHouse",
                entity_id=house.house_id,
            ) from e

        except SQLAlchemyError as e:
            logger.error(f"Database error saving house {house.house_id}: {str(e)}")
            raise RepositoryError(
                f"Failed to save house: {str(e)}", operation="save", entity="CommunityHouse"
            ) from e

        logger.debug(f"Saved house {house.house_id} in community {model.community_id}")
        return self._model_to_domain(model)

    async def save_all(self, houses: Iterable[CommunityHouse]) -> List[CommunityHouse]:
        return [await self.save(house) for house in houses]

    async def delete_by_id(self, house_id: str) -> bool:
        try:
            result = await self._session.execute(
                delete(CommunityHouseModel).where(CommunityHouseModel.house_id == house_id)
            )

        except IntegrityError as e:
            logger.warning(f"House {house_id} still has members, not deleted")
            raise ConflictError(
                f"House {house_id} still has members",
                entity="CommunityHouse",
                entity_id=house_id,
            ) from e

        except SQLAlchemyError as e:
            logger.error(f"Database error deleting house {house_id}: {str(e)}")
            raise RepositoryError(
                f"Failed to delete house: {str(e)}", operation="delete", entity="CommunityHouse"
            ) from e

        deleted = result.rowcount > 0
        logger.debug(f"Deleted house {house_id}: {deleted}")
        return deleted

    def _model_to_domain(self, model: CommunityHouseModel, with_members: bool = False) -> CommunityHouse:
        house = CommunityHouse(
            house_id=model.house_id,
            name=model.name,
            community_id=model.community_id,
        )
        if with_members:
            for member_model in model.members:
                house.add_member(
                    HouseMember(
                        member_id=member_model.member_id,
                        name=member_model.name,
                        house_id=member_model.house_id,
                        document_id=member_model.document_id,
                    )
                )
        return house
