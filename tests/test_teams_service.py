import pytest
from sqlalchemy.exc import IntegrityError

from errors import DomainError, ErrorKind
from schemas import TeamMember
from services import teams as team_service
from services import users as user_service


def member(user_id, username=None, is_active=True):
    return TeamMember(user_id=user_id, username=username or user_id.upper(), is_active=is_active)


@pytest.mark.asyncio
async def test_add_and_get_team(db):
    created = await team_service.add_team("core", [member("u2"), member("u1", is_active=False)])

    assert created == {
        "team_name": "core",
        "members": [
            {"user_id": "u1", "username": "U1", "is_active": False},
            {"user_id": "u2", "username": "U2", "is_active": True},
        ]
    }
    assert await team_service.get_team("core") == created


@pytest.mark.asyncio
async def test_team_name_is_unique(db):
    await team_service.add_team("core", [member("u1")])

    with pytest.raises(DomainError) as exc_info:
        await team_service.add_team("core", [member("u9")])
    assert exc_info.value.kind is ErrorKind.TEAM_EXISTS

    # the rejected payload left no users behind
    with pytest.raises(DomainError):
        await user_service.get_user("u9")


@pytest.mark.asyncio
async def test_unknown_team(db):
    with pytest.raises(DomainError) as exc_info:
        await team_service.get_team("missing")
    assert exc_info.value.kind is ErrorKind.TEAM_NOT_FOUND


@pytest.mark.asyncio
async def test_readding_user_moves_and_overwrites_it(db):
    await team_service.add_team("old", [member("u1", "Alice"), member("u2")])
    await team_service.add_team("new", [member("u1", "Alice B.", is_active=False)])

    user = await user_service.get_user("u1")
    assert user == {"user_id": "u1", "username": "Alice B.", "team_name": "new", "is_active": False}

    old_team = await team_service.get_team("old")
    assert [m["user_id"] for m in old_team["members"]] == ["u2"]


@pytest.mark.asyncio
async def test_duplicate_member_in_payload_keeps_last(db):
    created = await team_service.add_team("core", [member("u1", "First"), member("u1", "Second")])

    assert created["members"] == [{"user_id": "u1", "username": "Second", "is_active": True}]


@pytest.mark.asyncio
async def test_member_conflict_is_not_reported_as_team_exists(db, monkeypatch):
    async def conflicting_upsert(session, team_name, member):
        raise IntegrityError("INSERT INTO users", {}, Exception("duplicate key value violates users_pkey"))

    monkeypatch.setattr(team_service, "_upsert_member", conflicting_upsert)

    with pytest.raises(IntegrityError):
        await team_service.add_team("fresh", [member("u1")])

    # nothing was committed
    with pytest.raises(DomainError) as exc_info:
        await team_service.get_team("fresh")
    assert exc_info.value.kind is ErrorKind.TEAM_NOT_FOUND
