# 📄 File: myhome/modules/community_management/domain/repositories/house_member_document_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines how uploaded identity documents are stored and fetched.
# 🧪 Purpose (Technical Summary):
# Repository interface for HouseMemberDocument entities.
# 🔗 Dependencies:
# Domain models (HouseMemberDocument), typing, abc
# 🔄 Connected Modules / Calls From:
# HouseMemberDocumentService, infrastructure implementation

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from ..models.house import HouseMemberDocument


class HouseMemberDocumentRepository(ABC):
    """Repository interface for HouseMemberDocument data access operations."""

    @abstractmethod
    async def find_by_id(self, document_id: str) -> Optional[HouseMemberDocument]:
        pass

    @abstractmethod
    async def find_by_id_with_relations(self, document_id: str) -> Optional[HouseMemberDocument]:
        pass

    @abstractmethod
    async def exists_by_id(self, document_id: str) -> bool:
        pass

    @abstractmethod
    async def save(self, document: HouseMemberDocument) -> HouseMemberDocument:
        """
        Insert or update a document.

        Raises:
            ConflictError: If a constraint is violated
            RepositoryError: If the database operation fails
        """
        pass

    @abstractmethod
    async def save_all(self, documents: Iterable[HouseMemberDocument]) -> List[HouseMemberDocument]:
        pass

    @abstractmethod
    async def delete_by_id(self, document_id: str) -> bool:
        pass
