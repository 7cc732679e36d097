# 📄 File: tests/test_repositories.py
# 🧭 Purpose (Layman Explanation):
# Checks that the database layer refuses broken data and stores documents correctly.
# 🧪 Purpose (Technical Summary):
# Integration tests for the SQLAlchemy repositories and the member document service
# on aiosqlite: constraint errors, savepoint rollback, document storage.

import pytest

from myhome.modules.community_management.domain.models.community import Community
from myhome.modules.community_management.domain.models.house import (
    CommunityHouse,
    HouseMember,
    HouseMemberDocument,
)
from myhome.modules.community_management.domain.models.user import User
from myhome.modules.community_management.domain.services.house_member_document_service import (
    HouseMemberDocumentService,
)
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
from myhome.shared.core.exceptions import ConflictError
from myhome.shared.infrastructure.database.unit_of_work import SqlAlchemyUnitOfWork
from myhome.shared.utils.pagination import PageRequest


async def store_house_with_member(session, community_id="c1", house_id="h1", member_id="m1"):
    async with SqlAlchemyUnitOfWork(session).transaction():
        await CommunityRepositoryImpl(session).save(
            Community(community_id=community_id, name="Maple Grove", district="North")
        )
        await CommunityHouseRepositoryImpl(session).save(
            CommunityHouse(house_id=house_id, name="House 1", community_id=community_id)
        )
        await HouseMemberRepositoryImpl(session).save(
            HouseMember(member_id=member_id, name="Ann", house_id=house_id)
        )


@pytest.mark.asyncio
async def test_duplicate_email_is_a_conflict(session, make_user):
    await make_user("u1")

    with pytest.raises(ConflictError):
        async with SqlAlchemyUnitOfWork(session).transaction():
            await UserRepositoryImpl(session).save(User(user_id="u2", name="Other", email="u1@myhome.io"))

    assert await UserRepositoryImpl(session).exists_by_id("u2") is False


@pytest.mark.asyncio
async def test_house_with_members_cannot_be_deleted(session):
    await store_house_with_member(session)
    houses = CommunityHouseRepositoryImpl(session)

    with pytest.raises(ConflictError):
        async with SqlAlchemyUnitOfWork(session).transaction():
            await houses.delete_by_id("h1")

    assert await houses.exists_by_id("h1") is True


@pytest.mark.asyncio
async def test_house_requires_existing_community(session):
    with pytest.raises(ConflictError):
        async with SqlAlchemyUnitOfWork(session).transaction():
            await CommunityHouseRepositoryImpl(session).save(
                CommunityHouse(house_id="h1", name="House 1", community_id="missing")
            )


@pytest.mark.asyncio
async def test_saving_house_never_moves_it_to_another_community(session):
    await store_house_with_member(session)
    houses = CommunityHouseRepositoryImpl(session)

    async with SqlAlchemyUnitOfWork(session).transaction():
        await CommunityRepositoryImpl(session).save(Community(community_id="c2", name="Oak", district="South"))
        saved = await houses.save(CommunityHouse(house_id="h1", name="Renamed", community_id="c2"))

    assert saved.name == "Renamed"
    assert saved.community_id == "c1"


@pytest.mark.asyncio
async def test_saving_house_does_not_touch_members(session):
    await store_house_with_member(session)
    houses = CommunityHouseRepositoryImpl(session)

    async with SqlAlchemyUnitOfWork(session).transaction():
        await houses.save(CommunityHouse(house_id="h1", name="House 1", community_id="c1"))

    house = await houses.find_by_id_with_relations("h1")
    assert list(house.members) == ["m1"]


@pytest.mark.asyncio
async def test_nested_unit_rolls_back_to_savepoint(session):
    await store_house_with_member(session)
    members = HouseMemberRepositoryImpl(session)
    unit = SqlAlchemyUnitOfWork(session)

    async with unit.transaction():
        await members.save(HouseMember(member_id="m2", name="Bob", house_id="h1"))
        with pytest.raises(ConflictError):
            async with unit.transaction():
                await members.save(HouseMember(member_id="m3", name="Cid", house_id="no-such-house"))

    assert await members.exists_by_id("m2") is True
    assert await members.exists_by_id("m3") is False


@pytest.mark.asyncio
async def test_community_admin_must_exist(session):
    with pytest.raises(ConflictError):
        async with SqlAlchemyUnitOfWork(session).transaction():
            community = Community(community_id="c1", name="Maple Grove", district="North")
            community.add_admin(User(user_id="ghost", name="Ghost", email="ghost@myhome.io"))
            await CommunityRepositoryImpl(session).save(community)


@pytest.mark.asyncio
async def test_administered_community_loads_admin_with_all_links(session, make_user):
    admin = await make_user("u1")
    communities = CommunityRepositoryImpl(session)
    async with SqlAlchemyUnitOfWork(session).transaction():
        for community_id in ("c1", "c2"):
            community = Community(community_id=community_id, name="Maple Grove", district="North")
            community.add_admin(admin)
            await communities.save(community)

    for loaded in (
        await communities.find_by_id("c1"),
        await communities.find_by_id_with_houses("c1"),
        await communities.find_by_id_with_relations("c1"),
    ):
        assert loaded.admin_ids == {"u1"}
        assert loaded.admins["u1"].community_ids == {"c1", "c2"}

    listed = await communities.find_all()
    assert [c.admins["u1"].community_ids for c in listed] == [{"c1", "c2"}, {"c1", "c2"}]


@pytest.mark.asyncio
async def test_community_listing_is_paged_in_insert_order(session):
    communities = CommunityRepositoryImpl(session)
    async with SqlAlchemyUnitOfWork(session).transaction():
        for i in range(5):
            await communities.save(Community(community_id=f"c{i}", name=f"C{i}", district="North"))

    second_page = await communities.find_all(PageRequest(page=1, size=2))

    assert [c.community_id for c in second_page] == ["c2", "c3"]
    assert len(await communities.find_all()) == 5


@pytest.mark.asyncio
async def test_community_with_relations_loads_members(session):
    await store_house_with_member(session)

    community = await CommunityRepositoryImpl(session).find_by_id_with_relations("c1")

    assert list(community.houses) == ["h1"]
    assert list(community.houses["h1"].members) == ["m1"]


# =============================================================================
# MEMBER DOCUMENTS
# =============================================================================

def document_service(session, max_bytes=64):
    return HouseMemberDocumentService(
        member_repository=HouseMemberRepositoryImpl(session),
        document_repository=HouseMemberDocumentRepositoryImpl(session),
        unit_of_work=SqlAlchemyUnitOfWork(session),
        max_document_size_bytes=max_bytes,
    )


@pytest.mark.asyncio
async def test_document_attach_replace_detach(session):
    await store_house_with_member(session)
    service = document_service(session)

    first = await service.create_house_member_document("m1", b"first")
    assert first.filename == "member_m1_document.jpg"
    assert (await service.find_house_member_document("m1")).content == b"first"

    second = await service.update_house_member_document("m1", b"second")
    assert second.document_id != first.document_id
    assert (await service.find_house_member_document("m1")).content == b"second"

    assert await service.delete_house_member_document("m1") is True
    assert await service.find_house_member_document("m1") is None
    assert await service.delete_house_member_document("m1") is False

    # unlinking keeps the stored rows
    documents = HouseMemberDocumentRepositoryImpl(session)
    assert await documents.exists_by_id(first.document_id) is True
    assert await documents.exists_by_id(second.document_id) is True


@pytest.mark.asyncio
async def test_oversized_document_is_rejected(session):
    await store_house_with_member(session)
    service = document_service(session, max_bytes=4)

    assert await service.create_house_member_document("m1", b"too large") is None
    assert await service.find_house_member_document("m1") is None


@pytest.mark.asyncio
async def test_document_for_unknown_member(session):
    service = document_service(session)

    assert await service.create_house_member_document("ghost", b"x") is None
    assert await service.find_house_member_document("ghost") is None
    assert await service.delete_house_member_document("ghost") is False


@pytest.mark.asyncio
async def test_save_all_and_leaf_relation_loads(session):
    async with SqlAlchemyUnitOfWork(session).transaction():
        saved = await CommunityRepositoryImpl(session).save_all([
            Community(community_id="c1", name="Maple Grove", district="North"),
            Community(community_id="c2", name="Oak Park", district="South"),
        ])
        await HouseMemberDocumentRepositoryImpl(session).save_all([
            HouseMemberDocument(document_id="d1", filename="a.jpg", content=b"a"),
            HouseMemberDocument(document_id="d2", filename="b.jpg", content=b"bb"),
        ])

    assert [c.community_id for c in saved] == ["c1", "c2"]
    documents = HouseMemberDocumentRepositoryImpl(session)
    loaded = await documents.find_by_id_with_relations("d2")
    assert loaded.content == b"bb"
    assert await documents.find_by_id_with_relations("missing") is None

    await store_house_with_member(session, community_id="c3")
    member = await HouseMemberRepositoryImpl(session).find_by_id_with_relations("m1")
    assert member.house_id == "h1"
