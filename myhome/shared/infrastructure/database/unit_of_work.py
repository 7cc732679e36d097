# 📄 File: myhome/shared/infrastructure/database/unit_of_work.py
#
# 🧭 Purpose (Layman Explanation):
# Groups several database changes so they succeed or fail together. When deleting a
# community touches many houses and residents, either every change is kept or none is.
#
# 🧪 Purpose (Technical Summary):
# Unit-of-work abstraction and its SQLAlchemy implementation. A unit opened while a
# transaction is already active becomes a SAVEPOINT, so cascades that call into other
# services join the outer unit and roll back as one.
#
# 🔗 Dependencies:
# - sqlalchemy.ext.asyncio (AsyncSession)
#
# 🔄 Connected Modules / Calls From:
# - CommunityService, HouseService, HouseMemberDocumentService (multi-step mutations)
# - community_management/presentation/dependencies.py (wiring)

import logging
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


class UnitOfWork(ABC):
    """Atomic scope for a multi-step mutation."""

    @abstractmethod
    def transaction(self):
        """
        Async context manager: every write made inside is committed together
        on normal exit and rolled back if the block raises. Nested use joins
        the enclosing unit.
        """


class SqlAlchemyUnitOfWork(UnitOfWork):
    """Unit of work bound to one AsyncSession."""

    def __init__(self, session: AsyncSession):
        self._session = session

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        if self._session.in_transaction():
            logger.debug("Joining active transaction with a savepoint")
            async with self._session.begin_nested():
                yield self._session
        else:
            logger.debug("Starting new transaction")
            async with self._session.begin():
                yield self._session
