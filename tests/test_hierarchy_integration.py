# 📄 File: tests/test_hierarchy_integration.py
# 🧭 Purpose (Layman Explanation):
# Runs the real community, house and resident rules against a real (in-memory)
# database and checks the end results, including that a failed teardown leaves
# everything as it was.
# 🧪 Purpose (Technical Summary):
# Integration tests: services built by the presentation factories over an aiosqlite
# session with the SQLAlchemy repositories. Covers the creation, house addition,
# member detach, cascade delete, not-found, admin and rollback behaviours.

import pytest
import pytest_asyncio

from myhome.modules.community_management.domain.models.house import CommunityHouse, HouseMember
from myhome.modules.community_management.domain.services.community_service import CommunityService
from myhome.modules.community_management.infrastructure.database.community_house_repository_impl import (
    CommunityHouseRepositoryImpl,
)
from myhome.modules.community_management.infrastructure.database.community_repository_impl import (
    CommunityRepositoryImpl,
)
from myhome.modules.community_management.infrastructure.database.house_member_repository_impl import (
    HouseMemberRepositoryImpl,
)
from myhome.modules.community_management.infrastructure.database.user_repository_impl import (
    UserRepositoryImpl,
)
from myhome.modules.community_management.presentation.dependencies import (
    build_community_service,
    build_house_service,
)
from myhome.shared.core.exceptions import RepositoryError
from myhome.shared.infrastructure.database.unit_of_work import SqlAlchemyUnitOfWork
from myhome.shared.utils.pagination import PageRequest


@pytest.fixture
def community_service(session):
    return build_community_service(session)


@pytest.fixture
def house_service(session):
    return build_house_service(session)


@pytest.fixture
def members(session):
    return HouseMemberRepositoryImpl(session)


@pytest.fixture
def users(session):
    return UserRepositoryImpl(session)


@pytest_asyncio.fixture
async def populated(community_service, house_service, make_user):
    """Community administered by u1 with houses h1 (Ann, Bob) and h2 (Cid)."""
    await make_user("u1")
    community = await community_service.create_community("Maple Grove", "North", requesting_user_id="u1")
    house_ids = await community_service.add_houses_to_community(
        community.community_id, [CommunityHouse(name="House 1"), CommunityHouse(name="House 2")]
    )
    houses = {h.name: h.house_id for h in await community_service.find_community_houses_by_id(community.community_id)}
    assert set(houses.values()) == house_ids

    first = await house_service.add_house_members(houses["House 1"], [HouseMember(name="Ann"), HouseMember(name="Bob")])
    second = await house_service.add_house_members(houses["House 2"], [HouseMember(name="Cid")])
    return {
        "community_id": community.community_id,
        "h1": houses["House 1"],
        "h2": houses["House 2"],
        "member_ids": [m.member_id for m in first + second],
    }


class FailOnSecondDeleteHouseRepository(CommunityHouseRepositoryImpl):
    def __init__(self, session):
        super().__init__(session)
        self.deletes = 0

    async def delete_by_id(self, house_id: str) -> bool:
        self.deletes += 1
        if self.deletes == 2:
            raise RepositoryError("house delete failed", operation="delete", entity="CommunityHouse")
        return await super().delete_by_id(house_id)


# =============================================================================
# CREATION AND ADMINS
# =============================================================================

@pytest.mark.asyncio
async def test_create_community_with_requesting_user(community_service, users, make_user):
    await make_user("u1")

    community = await community_service.create_community("Maple Grove", "North", requesting_user_id="u1")

    assert community.name == "Maple Grove"
    assert community.district == "North"
    assert list(community.admins) == ["u1"]
    assert community.community_id in community.admins["u1"].community_ids

    admin = await users.find_by_id_with_communities("u1")
    assert admin.community_ids == {community.community_id}


@pytest.mark.asyncio
async def test_create_community_generates_distinct_ids(community_service):
    first = await community_service.create_community("A", "North")
    second = await community_service.create_community("A", "North")

    assert first.community_id != second.community_id
    assert first.admins == {}
    assert len(await community_service.list_all()) == 2


@pytest.mark.asyncio
async def test_added_admin_is_linked_both_ways(community_service, users, make_user):
    await make_user("u1")
    await make_user("u2")
    community = await community_service.create_community("Maple Grove", "North", requesting_user_id="u1")

    updated = await community_service.add_admins_to_community(community.community_id, ["u2", "ghost"])

    assert set(updated.admins) == {"u1", "u2"}
    assert community.community_id in updated.admins["u2"].community_ids
    u2 = await users.find_by_id_with_communities("u2")
    assert u2.community_ids == {community.community_id}
    admins = await community_service.find_community_admins_by_id(community.community_id)
    assert [a.user_id for a in admins] == ["u1", "u2"]


@pytest.mark.asyncio
async def test_remove_unknown_admin_keeps_admin_set(community_service, make_user):
    await make_user("u1")
    community = await community_service.create_community("Maple Grove", "North", requesting_user_id="u1")

    removed = await community_service.remove_admin_from_community(community.community_id, "nonexistent-admin-id")

    assert removed is False
    stored = await community_service.get_community_details_by_id_with_admins(community.community_id)
    assert list(stored.admins) == ["u1"]


@pytest.mark.asyncio
async def test_remove_admin_unlinks_user(community_service, users, make_user):
    await make_user("u1")
    community = await community_service.create_community("Maple Grove", "North", requesting_user_id="u1")

    assert await community_service.remove_admin_from_community(community.community_id, "u1") is True

    stored = await community_service.get_community_details_by_id(community.community_id)
    assert stored.admins == {}
    assert (await users.find_by_id_with_communities("u1")).community_ids == set()


# =============================================================================
# HOUSES AND MEMBERS
# =============================================================================

@pytest.mark.asyncio
async def test_add_two_houses_to_empty_community(community_service):
    community = await community_service.create_community("Maple Grove", "North")

    ids = await community_service.add_houses_to_community(
        community.community_id, [CommunityHouse(name="House 1"), CommunityHouse(name="House 2")]
    )

    assert len(ids) == 2
    houses = await community_service.find_community_houses_by_id(community.community_id)
    assert len(houses) == 2
    assert {h.house_id for h in houses} == ids
    assert all(h.community_id == community.community_id for h in houses)


@pytest.mark.asyncio
async def test_same_name_house_is_added_but_resubmission_is_not(community_service):
    community = await community_service.create_community("Maple Grove", "North")
    (first_id,) = await community_service.add_houses_to_community(
        community.community_id, [CommunityHouse(name="House 1")]
    )

    same_name = await community_service.add_houses_to_community(
        community.community_id, [CommunityHouse(name="House 1")]
    )
    resubmitted = await community_service.add_houses_to_community(
        community.community_id, [CommunityHouse(house_id=first_id, name="House 1")]
    )

    assert len(same_name) == 1
    assert first_id not in same_name
    assert resubmitted == set()
    assert len(await community_service.find_community_houses_by_id(community.community_id)) == 2


@pytest.mark.asyncio
async def test_detached_member_survives_without_house(community_service, house_service, members):
    community = await community_service.create_community("Maple Grove", "North")
    (house_id,) = await community_service.add_houses_to_community(
        community.community_id, [CommunityHouse(name="House 1")]
    )
    added = await house_service.add_house_members(
        house_id, [HouseMember(name="Ann"), HouseMember(name="Bob"), HouseMember(name="Cid")]
    )
    m2 = added[1].member_id

    assert await house_service.delete_member_from_house(house_id, m2) is True

    remaining = await house_service.get_house_members_by_id(house_id)
    assert [m.name for m in remaining] == ["Ann", "Cid"]
    detached = await members.find_by_id(m2)
    assert detached is not None
    assert detached.house_id is None


@pytest.mark.asyncio
async def test_caller_supplied_member_ids_are_replaced(community_service, house_service, members):
    community = await community_service.create_community("Maple Grove", "North")
    (house_id,) = await community_service.add_houses_to_community(
        community.community_id, [CommunityHouse(name="House 1")]
    )

    added = await house_service.add_house_members(house_id, [HouseMember(member_id="chosen", name="Ann")])

    assert added[0].member_id != "chosen"
    assert await members.find_by_id("chosen") is None
    assert (await members.find_by_id(added[0].member_id)).house_id == house_id


@pytest.mark.asyncio
async def test_members_of_houses_administered_by_user(populated, community_service, house_service, make_user):
    await make_user("u2")
    other = await community_service.create_community("Oak Park", "South", requesting_user_id="u2")
    (other_house,) = await community_service.add_houses_to_community(
        other.community_id, [CommunityHouse(name="Elsewhere")]
    )
    await house_service.add_house_members(other_house, [HouseMember(name="Dee")])

    u1_members = await house_service.list_house_members_for_houses_of_user_id("u1")
    first_page = await house_service.list_house_members_for_houses_of_user_id("u1", PageRequest(page=0, size=2))

    assert sorted(m.name for m in u1_members) == ["Ann", "Bob", "Cid"]
    assert len(first_page) == 2
    assert await house_service.list_house_members_for_houses_of_user_id("ghost") is None


# =============================================================================
# CASCADES
# =============================================================================

@pytest.mark.asyncio
async def test_delete_community_cascades_and_keeps_members(populated, community_service, house_service, members):
    community_id = populated["community_id"]

    assert await community_service.delete_community(community_id) is True

    assert await community_service.get_community_details_by_id(community_id) is None
    assert await house_service.get_house_details_by_id(populated["h1"]) is None
    assert await house_service.get_house_details_by_id(populated["h2"]) is None
    for member_id in populated["member_ids"]:
        member = await members.find_by_id(member_id)
        assert member is not None
        assert member.house_id is None
    assert await house_service.list_all_houses() == []


@pytest.mark.asyncio
async def test_remove_single_house_from_community(populated, session, community_service):
    community = await CommunityRepositoryImpl(session).find_by_id_with_houses(populated["community_id"])

    assert await community_service.remove_house_from_community_by_house_id(community, populated["h1"]) is True

    houses = await community_service.find_community_houses_by_id(populated["community_id"])
    assert [h.house_id for h in houses] == [populated["h2"]]
    assert populated["h1"] not in community.houses


@pytest.mark.asyncio
async def test_failed_cascade_leaves_hierarchy_untouched(populated, session, house_service, members):
    await session.commit()
    failing_houses = FailOnSecondDeleteHouseRepository(session)
    service = CommunityService(
        community_repository=CommunityRepositoryImpl(session),
        house_repository=failing_houses,
        user_repository=UserRepositoryImpl(session),
        house_service=house_service,
        unit_of_work=SqlAlchemyUnitOfWork(session),
    )

    with pytest.raises(RepositoryError):
        await service.delete_community(populated["community_id"])

    community = await service.get_community_details_by_id(populated["community_id"])
    assert community is not None
    assert list(community.admins) == ["u1"]
    houses = await service.find_community_houses_by_id(populated["community_id"])
    assert {h.house_id for h in houses} == {populated["h1"], populated["h2"]}
    assert len(await house_service.get_house_members_by_id(populated["h1"])) == 2
    assert len(await house_service.get_house_members_by_id(populated["h2"])) == 1
    for member_id in populated["member_ids"]:
        assert (await members.find_by_id(member_id)).house_id is not None


# =============================================================================
# NOT FOUND
# =============================================================================

@pytest.mark.asyncio
async def test_operations_on_missing_ids_write_nothing(community_service, house_service, members, make_user):
    await make_user("u1")

    assert await community_service.add_houses_to_community("nope", [CommunityHouse(name="House 1")]) == set()
    assert await community_service.add_admins_to_community("nope", ["u1"]) is None
    assert await community_service.delete_community("nope") is False
    assert await community_service.remove_admin_from_community("nope", "u1") is False
    assert await community_service.find_community_houses_by_id("nope") is None
    assert await community_service.find_community_admins_by_id("nope") is None
    assert await house_service.add_house_members("nope", [HouseMember(name="Ann")]) == []
    assert await house_service.delete_member_from_house("nope", "m1") is False
    assert await house_service.get_house_members_by_id("nope") is None

    assert await community_service.list_all() == []
    assert await house_service.list_all_houses() == []
    assert await members.find_all() == []
