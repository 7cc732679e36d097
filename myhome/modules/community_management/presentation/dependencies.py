# 📄 File: myhome/modules/community_management/presentation/dependencies.py
# 🧭 Purpose (Layman Explanation):
# Hands a ready-to-use community, house or document service to whatever web
# endpoint needs one, all sharing the same database conversation for a request.
# 🧪 Purpose (Technical Summary):
# FastAPI dependency providers. Each request gets one AsyncSession (get_db_session);
# repositories, the unit of work and the services are built over that session.
# 🔗 Dependencies:
# FastAPI Depends, SQLAlchemy AsyncSession, repository implementations, domain services
# 🔄 Connected Modules / Calls From:
# Transport layers (route handlers) built on top of this module

"""
Community Management Module Dependencies

Usage:
    @router.delete("/communities/{community_id}")
    async def delete_community(
        community_id: str,
        service: CommunityService = Depends(get_community_service),
    ):
        if not await service.delete_community(community_id):
            raise HTTPException(status_code=404)
"""


from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from myhome.modules.community_management.domain.services.community_service import CommunityService
from myhome.modules.community_management.domain.services.house_member_document_service import (
    HouseMemberDocumentService,
)
from myhome.modules.community_management.domain.services.house_service import HouseService
from myhome.modules.community_management.infrastructure.database.community_house_repository_impl import (
    CommunityHouseRepositoryImpl,
)
from myhome.modules.community_management.infrastructure.database.community_repository_impl import (
    CommunityRepositoryImpl,
)
from myhome.modules.community_management.infrastructure.database.house_member_document_repository_impl import (
    HouseMemberDocumentRepositoryImpl,
)
from myhome.modules.community_management.infrastructure.database.house_member_repository_impl import (
    HouseMemberRepositoryImpl,
)
from myhome.modules.community_management.infrastructure.database.user_repository_impl import (
    UserRepositoryImpl,
)
from myhome.shared.infrastructure.database.session import get_db_session
from myhome.shared.infrastructure.database.unit_of_work import SqlAlchemyUnitOfWork



# =========================================================================
# SERVICE FACTORIES
# =========================================================================

def build_house_service(session: AsyncSession) -> HouseService:
    return HouseService(
        house_repository=CommunityHouseRepositoryImpl(session),
        member_repository=HouseMemberRepositoryImpl(session),
        user_repository=UserRepositoryImpl(session),
        unit_of_work=SqlAlchemyUnitOfWork(session),
    )


def build_community_service(session: AsyncSession) -> CommunityService:
    """Build a CommunityService whose house cascade shares the same session."""
    return CommunityService(
        community_repository=CommunityRepositoryImpl(session),
        house_repository=CommunityHouseRepositoryImpl(session),
        user_repository=UserRepositoryImpl(session),
        house_service=build_house_service(session),
        unit_of_work=SqlAlchemyUnitOfWork(session),
    )


def build_house_member_document_service(session: AsyncSession) -> HouseMemberDocumentService:
    return HouseMemberDocumentService(
        member_repository=HouseMemberRepositoryImpl(session),
        document_repository=HouseMemberDocumentRepositoryImpl(session),
        unit_of_work=SqlAlchemyUnitOfWork(session),
    )


# =========================================================================
# FASTAPI DEPENDENCIES
# =========================================================================

async def get_community_service(
    session: AsyncSession = Depends(get_db_session),
) -> CommunityService:
    return build_community_service(session)


async def get_house_service(
    session: AsyncSession = Depends(get_db_session),
) -> HouseService:
    return build_house_service(session)


async def get_house_member_document_service(
    session: AsyncSession = Depends(get_db_session),
) -> HouseMemberDocumentService:
    return build_house_member_document_service(session)
