# 📄 File: myhome/modules/community_management/infrastructure/database/house_member_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Reads and writes residents in the database, including which house they live in
# and which document belongs to them.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy implementation of HouseMemberRepository, including the admin-scoped
# listing that joins members through houses to the community_admins link.
#
# 🔗 Dependencies:
# - community_management.domain.repositories.house_member_repository (interface)
# - community_management.infrastructure.database.models (ORM models)
#
# 🔄 Connected Modules / Calls From:
# - HouseService, HouseMemberDocumentService

import logging
from typing import Iterable, List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from myhome.modules.community_management.domain.models.house import HouseMember
from myhome.modules.community_management.domain.repositories.house_member_repository import (
    HouseMemberRepository,
)
from myhome.modules.community_management.infrastructure.database.models import (
    CommunityHouseModel,
    HouseMemberModel,
    community_admins,
)
from myhome.shared.core.exceptions import ConflictError, RepositoryError
from myhome.shared.utils.pagination import PageRequest

logger = logging.getLogger(__name__)


class HouseMemberRepositoryImpl(HouseMemberRepository):
    """SQLAlchemy implementation of the HouseMemberRepository interface."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def _fetch_one(self, member_id: str) -> Optional[HouseMemberModel]:
        stmt = (
            select(HouseMemberModel)
            .where(HouseMemberModel.member_id == member_id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_by_id(self, member_id: str) -> Optional[HouseMember]:
        try:
            model = await self._fetch_one(member_id)
        except SQLAlchemyError as e:
            logger.error(f"Database error retrieving member {member_id}: {str(e)}")
            raise RepositoryError(
                f"Failed to retrieve member: {str(e)}", operation="find", entity="HouseMember"
            ) from e

        if model is None:
            logger.debug(f"Member not found: {member_id}")
            return None
        return self._model_to_domain(model)

    async def find_by_id_with_relations(self, member_id: str) -> Optional[HouseMember]:
        return await self.find_by_id(member_id)

    async def find_all(self, page: Optional[PageRequest] = None) -> List[HouseMember]:
        return await self._list(select(HouseMemberModel), page)

    async def find_all_by_house_id(
        self, house_id: str, page: Optional[PageRequest] = None
    ) -> List[HouseMember]:
        stmt = select(HouseMemberModel).where(HouseMemberModel.house_id == house_id)
        return await self._list(stmt, page)

    async def find_all_by_community_admin_id(
        self, user_id: str, page: Optional[PageRequest] = None
    ) -> List[HouseMember]:
        administered = select(community_admins.c.community_id).where(
            community_admins.c.user_id == user_id
        )
        stmt = (
            select(HouseMemberModel)
            .join(CommunityHouseModel, HouseMemberModel.house_id == CommunityHouseModel.house_id)
            .where(CommunityHouseModel.community_id.in_(administered))
        )
        return await self._list(stmt, page)

    async def _list(self, stmt, page: Optional[PageRequest]) -> List[HouseMember]:
        try:
            stmt = stmt.order_by(HouseMemberModel.id).execution_options(populate_existing=True)
            if page is not None:
                stmt = stmt.offset(page.offset).limit(page.limit)
            result = await self._session.execute(stmt)
            models = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error(f"Database error listing members: {str(e)}")
            raise RepositoryError(
                f"Failed to list members: {str(e)}", operation="find_all", entity="HouseMember"
            ) from e

        return [self._model_to_domain(model) for model in models]

    async def exists_by_id(self, member_id: str) -> bool:
        try:
            stmt = select(func.count(HouseMemberModel.id)).where(
                HouseMemberModel.member_id == member_id
            )
            result = await self._session.execute(stmt)
            return result.scalar_one() > 0
        except SQLAlchemyError as e:
            logger.error(f"Database error checking member {member_id}: {str(e)}")
            raise RepositoryError(
                f"Failed to check member: {str(e)}", operation="exists", entity="HouseMember"
            ) from e

    async def save(self, member: HouseMember) -> HouseMember:
        try:
            model = await self._fetch_one(member.member_id)
            if model is None:
                model = self._domain_to_model(member)
                self._session.add(model)
            else:
                model.name = member.name
                model.house_id = member.house_id
                model.document_id = member.document_id
            await self._session.flush()

        except IntegrityError as e:
            logger.warning(f"Member save violated a constraint: {member.member_id}")
            raise ConflictError(
                f"Member {member.member_id} conflicts with stored data",
                entity="HouseMember",
                entity_id=member.member_id,
            ) from e

        except SQLAlchemyError as e:
            logger.error(f"Database error saving member {member.member_id}: {str(e)}")
            raise RepositoryError(
                f"Failed to save member: {str(e)}", operation="save", entity="HouseMember"
            ) from e

        logger.debug(f"Saved member {member.member_id} (house={member.house_id})")
        return self._model_to_domain(model)

    async def save_all(self, members: Iterable[HouseMember]) -> List[HouseMember]:
        return [await self.save(member) for member in members]

    async def delete_by_id(self, member_id: str) -> bool:
        try:
            result = await self._session.execute(
                delete(HouseMemberModel).where(HouseMemberModel.member_id == member_id)
            )
        except SQLAlchemyError as e:
            logger.error(f"Database error deleting member {member_id}: {str(e)}")
            raise RepositoryError(
                f"Failed to delete member: {str(e)}", operation="delete", entity="HouseMember"
            ) from e

        return result.rowcount > 0

    def _domain_to_model(self, member: HouseMember) -> HouseMemberModel:
        return HouseMemberModel(
            member_id=member.member_id,
            name=member.name,
            house_id=member.house_id,
            document_id=member.document_id,
        )

    def _model_to_domain(self, model: HouseMemberModel) -> HouseMember:
        return HouseMember(
            member_id=model.member_id,
            name=model.name,
            house_id=model.house_id,
            document_id=model.document_id,
        )
