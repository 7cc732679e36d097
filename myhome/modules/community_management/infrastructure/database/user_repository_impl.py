# 📄 File: myhome/modules/community_management/infrastructure/database/user_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Looks up and saves user accounts, and lists who manages a given community.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy implementation of UserRepository. Saves user columns only; the
# community_admins link is written by CommunityRepositoryImpl.
#
# 🔗 Dependencies:
# - community_management.domain.repositories.user_repository (interface)
# - community_management.infrastructure.database.models (ORM models)
#
# 🔄 Connected Modules / Calls From:
# - CommunityService, HouseService

import logging
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from myhome.modules.community_management.domain.models.user import User
from myhome.modules.community_management.domain.repositories.user_repository import UserRepository
from myhome.modules.community_management.infrastructure.database.models import (
    UserModel,
    community_admins,
)
from myhome.shared.core.exceptions import ConflictError, RepositoryError
from myhome.shared.utils.pagination import PageRequest

logger = logging.getLogger(__name__)


class UserRepositoryImpl(UserRepository):
    """SQLAlchemy implementation of the UserRepository interface."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def _fetch_one(self, user_id: str, with_communities: bool = False) -> Optional[UserModel]:
        stmt = select(UserModel).where(UserModel.user_id == user_id)
        if with_communities:
            stmt = stmt.options(selectinload(UserModel.communities))
        stmt = stmt.execution_options(populate_existing=True)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def _find(self, user_id: str, with_communities: bool) -> Optional[User]:
        try:
            model = await self._fetch_one(user_id, with_communities)
        except SQLAlchemyError as e:
            logger.error(f"Database error retrieving user {user_id}: {str(e)}")
            raise RepositoryError(
                f"Failed to retrieve user: {str(e)}", operation="find", entity="User"
            ) from e

        if model is None:
            logger.debug(f"User not found: {user_id}")
            return None
        return self._model_to_domain(model, with_communities)

    async def find_by_id(self, user_id: str) -> Optional[User]:
        return await self._find(user_id, with_communities=False)

    async def find_by_id_with_communities(self, user_id: str) -> Optional[User]:
        return await self._find(user_id, with_communities=True)

    async def find_all_by_community_id(
        self, community_id: str, page: Optional[PageRequest] = None
    ) -> List[User]:
        try:
            stmt = (
                select(UserModel)
                .join(community_admins, community_admins.c.user_id == UserModel.user_id)
                .where(community_admins.c.community_id == community_id)
                .options(selectinload(UserModel.communities))
                .order_by(UserModel.id)
                .execution_options(populate_existing=True)
            )
            if page is not None:
                stmt = stmt.offset(page.offset).limit(page.limit)
            result = await self._session.execute(stmt)
            models = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error(f"Database error listing admins of community {community_id}: {str(e)}")
            raise RepositoryError(
                f"Failed to list community admins: {str(e)}", operation="find_all", entity="User"
            ) from e

        return [self._model_to_domain(model, with_communities=True) for model in models]

    async def exists_by_id(self, user_id: str) -> bool:
        try:
            stmt = select(func.count(UserModel.id)).where(UserModel.user_id == user_id)
            result = await self._session.execute(stmt)
            return result.scalar_one() > 0
        except SQLAlchemyError as e:
            logger.error(f"Database error checking user {user_id}: {str(e)}")
            raise RepositoryError(
                f"Failed to check user: {str(e)}", operation="exists", entity="User"
            ) from e

    async def save(self, user: User) -> User:
        try:
            model = await self._fetch_one(user.user_id)
            if model is None:
                model = UserModel(
                    user_id=user.user_id,
                    name=user.name,
                    email=user.email.lower(),
                    encrypted_password=user.encrypted_password,
                    email_confirmed=user.email_confirmed,
                )
                self._session.add(model)
            else:
                model.name = user.name
                model.email = user.email.lower()
                model.encrypted_password = user.encrypted_password
                model.email_confirmed = user.email_confirmed
            await self._session.flush()

        except IntegrityError as e:
            logger.warning(f"User save failed - email or id already taken: {user.email}")
            raise ConflictError(
                f"User with email {user.email} already exists",
                entity="User",
                entity_id=user.user_id,
            ) from e

        except SQLAlchemyError as e:
            logger.error(f"Database error saving user {user.user_id}: {str(e)}")
            raise RepositoryError(
                f"Failed to save user: {str(e)}", operation="save", entity="User"
            ) from e

        logger.debug(f"Saved user {user.user_id}")
        return await self.find_by_id_with_communities(user.user_id)

    def _model_to_domain(self, model: UserModel, with_communities: bool = False) -> User:
        community_ids = set()
        if with_communities:
            community_ids = {community.community_id for community in model.communities}

        return User(
            user_id=model.user_id,
            name=model.name,
            email=model.email,
            encrypted_password=model.encrypted_password,
            email_confirmed=model.email_confirmed,
            community_ids=community_ids,
        )
