# 📄 File: myhome/modules/community_management/infrastructure/database/house_member_document_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Stores and fetches the identity documents residents upload.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy implementation of HouseMemberDocumentRepository.
#
# 🔗 Dependencies:
# - community_management.domain.repositories.house_member_document_repository (interface)
# - community_management.infrastructure.database.models (ORM models)
#
# 🔄 Connected Modules / Calls From:
# - HouseMemberDocumentService

import logging
from typing import Iterable, List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from myhome.modules.community_management.domain.models.house import HouseMemberDocument
from myhome.modules.community_management.domain.repositories.house_member_document_repository import (
    HouseMemberDocumentRepository,
)
from myhome.modules.community_management.infrastructure.database.models import (
    HouseMemberDocumentModel,
)
from myhome.shared.core.exceptions import ConflictError, RepositoryError

logger = logging.getLogger(__name__)


class HouseMemberDocumentRepositoryImpl(HouseMemberDocumentRepository):
    """SQLAlchemy implementation of the HouseMemberDocumentRepository interface."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def _fetch_one(self, document_id: str) -> Optional[HouseMemberDocumentModel]:
        stmt = select(HouseMemberDocumentModel).where(
            HouseMemberDocumentModel.document_id == document_id
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_by_id(self, document_id: str) -> Optional[HouseMemberDocument]:
        try:
            model = await self._fetch_one(document_id)
        except SQLAlchemyError as e:
            logger.error(f"Database error retrieving document {document_id}: {str(e)}")
            raise RepositoryError(
                f"Failed to retrieve document: {str(e)}", operation="find", entity="HouseMemberDocument"
            ) from e

        if model is None:
            return None
        return self._model_to_domain(model)

    async def find_by_id_with_relations(self, document_id: str) -> Optional[HouseMemberDocument]:
        return await self.find_by_id(document_id)

    async def exists_by_id(self, document_id: str) -> bool:
        try:
            stmt = select(func.count(HouseMemberDocumentModel.id)).where(
                HouseMemberDocumentModel.document_id == document_id
            )
            result = await self._session.execute(stmt)
            return result.scalar_one() > 0
        except SQLAlchemyError as e:
            logger.error(f"Database error checking document {document_id}: {str(e)}")
            raise RepositoryError(
                f"Failed to check document: {str(e)}", operation="exists", entity="HouseMemberDocument"
            ) from e

    async def save(self, document: HouseMemberDocument) -> HouseMemberDocument:
        try:
            model = await self._fetch_one(document.document_id)
            if model is None:
                model = HouseMemberDocumentModel(
                    document_id=document.document_id,
                    filename=document.filename,
                    content=document.content,
                )
                self._session.add(model)
            else:
                model.filename = document.filename
                model.content = document.content
            await self._session.flush()

        except IntegrityError as e:
            logger.warning(f"Document save violated a constraint: {document.document_id}")
            raise ConflictError(
                f"Document {document.document_id} conflicts with stored data",
                entity="HouseMemberDocument",
                entity_id=document.document_id,
            ) from e

        except SQLAlchemyError as e:
            logger.error(f"Database error saving document {document.document_id}: {str(e)}")
            raise RepositoryError(
                f"Failed to save document: {str(e)}", operation="save", entity="HouseMemberDocument"
            ) from e

        logger.debug(f"Saved document {document.document_id} ({document.size} bytes)")
        return self._model_to_domain(model)

    async def save_all(self, documents: Iterable[HouseMemberDocument]) -> List[HouseMemberDocument]:
        return [await self.save(document) for document in documents]

    async def delete_by_id(self, document_id: str) -> bool:
        try:
            result = await self._session.execute(
                delete(HouseMemberDocumentModel).where(
                    HouseMemberDocumentModel.document_id == document_id
                )
            )

        except IntegrityError as e:
            logger.warning(f"Document {document_id} is still linked to a member")
            raise ConflictError(
                f"Document {document_id} is still linked to a member",
                entity="HouseMemberDocument",
                entity_id=document_id,
            ) from e

        except SQLAlchemyError as e:
            logger.error(f"Database error deleting document {document_id}: {str(e)}")
            raise RepositoryError(
                f"Failed to delete document: {str(e)}", operation="delete", entity="HouseMemberDocument"
            ) from e

        return result.rowcount > 0

    def _model_to_domain(self, model: HouseMemberDocumentModel) -> HouseMemberDocument:
        return HouseMemberDocument(
            document_id=model.document_id,
            filename=model.filename,
            content=model.content,
        )
