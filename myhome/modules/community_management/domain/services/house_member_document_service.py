# 📄 File: myhome/modules/community_management/domain/services/house_member_document_service.py
# 🧭 Purpose (Layman Explanation):
# Lets a resident's identity document be uploaded, replaced, looked at or unlinked.
# 🧪 Purpose (Technical Summary):
# Member document domain service. Stores uploaded bytes as a new document under a
# fresh id, enforces the configured size limit and maintains the member's document
# reference. Unlinking keeps the document row.
# 🔗 Dependencies:
# Domain models, repository interfaces, UnitOfWork, settings, id generator
# 🔄 Connected Modules / Calls From:
# Presentation dependencies, transport layers

import logging
from typing import Optional

from myhome.shared.config.settings import get_settings
from myhome.shared.core.identifiers import IdGenerator, generate_unique_id
from myhome.shared.infrastructure.database.unit_of_work import UnitOfWork

from ..models.house import HouseMemberDocument
from ..repositories.house_member_document_repository import HouseMemberDocumentRepository
from ..repositories.house_member_repository import HouseMemberRepository

logger = logging.getLogger(__name__)


def document_filename(member_id: str) -> str:
    return f"member_{member_id}_document.jpg"


class HouseMemberDocumentService:
    """Domain service for house member identity documents."""

    def __init__(
        self,
        member_repository: HouseMemberRepository,
        document_repository: HouseMemberDocumentRepository,
        unit_of_work: UnitOfWork,
        id_generator: IdGenerator = generate_unique_id,
        max_document_size_bytes: Optional[int] = None,
    ):
        self.member_repository = member_repository
        self.document_repository = document_repository
        self.unit_of_work = unit_of_work
        self._generate_id = id_generator
        if max_document_size_bytes is None:
            max_document_size_bytes = get_settings().document_max_size_bytes
        self.max_document_size_bytes = max_document_size_bytes

    async def find_house_member_document(self, member_id: str) -> Optional[HouseMemberDocument]:
        member = await self.member_repository.find_by_id(member_id)
        if member is None or member.document_id is None:
            logger.debug(f"No document for member {member_id}")
            return None
        return await self.document_repository.find_by_id(member.document_id)

    async def delete_house_member_document(self, member_id: str) -> bool:
        """
        Unlink a member's document. The document record is not deleted.

        Returns:
            True only if the member exists and had a document
        """
        async with self.unit_of_work.transaction():
            member = await self.member_repository.find_by_id(member_id)
            if member is None or member.document_id is None:
                return False

            document_id = member.document_id
            member.document_id = None
            await self.member_repository.save(member)

        logger.info(f"Unlinked document {document_id} from member {member_id}")
        return True

    async def create_house_member_document(
        self, member_id: str, content: bytes
    ) -> Optional[HouseMemberDocument]:
        """
        Store ``content`` as the member's document.

        Returns:
            The stored document, or None if the member does not exist or the
            content is larger than the configured limit
        """
        return await self._attach_document(member_id, content)

    async def update_house_member_document(
        self, member_id: str, content: bytes
    ) -> Optional[HouseMemberDocument]:
        """Replace the member's document with a new one holding ``content``."""
        return await self._attach_document(member_id, content)

    async def _attach_document(self, member_id: str, content: bytes) -> Optional[HouseMemberDocument]:
        async with self.unit_of_work.transaction():
            member = await self.member_repository.find_by_id(member_id)
            if member is None:
                logger.debug(f"Cannot attach document, member not found: {member_id}")
                return None

            if len(content) > self.max_document_size_bytes:
                logger.warning(
                    f"Document for member {member_id} is {len(content)} bytes, "
                    f"limit is {self.max_document_size_bytes}"
                )
                return None

            document = HouseMemberDocument(
                document_id=self._generate_id(),
                filename=document_filename(member_id),
                content=content,
            )
            saved = await self.document_repository.save(document)

            member.document_id = saved.document_id
            await self.member_repository.save(member)

        logger.info(f"Stored document {saved.document_id} for member {member_id}")
        return saved
