from models.models import *
from models import database
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from typing import List, Dict

from errors import DomainError, ErrorKind
from logging_config import get_logger
from schemas import TeamMember as TeamMemberSchema
from services.users import get_user_by_id


logger = get_logger(__name__)


async def get_team_by_name(session, team_name: str):
    result = await session.execute(
        select(Team).where(Team.team_name == team_name)
    )
    return result.scalar_one_or_none()


async def _upsert_member(session, team_name: str, member: TeamMemberSchema) -> User:
    """Create the user or move an existing one into `team_name`, overwriting name and flag"""
    user = await get_user_by_id(session, member.user_id)

    if user:
        if user.team_name != team_name:
            logger.warning("user_moved_between_teams", user_id=user.user_id,
                           from_team=user.team_name, to_team=team_name)
        user.team_name = team_name
        user.name = member.username
        user.isActive = member.is_active
    else:
        user = User(user_id=member.user_id, name=member.username,
                    team_name=team_name, isActive=member.is_active)
        session.add(user)

    await session.flush()
    return user


async def _load_team(session, team_name: str) -> Dict:
    team = await get_team_by_name(session, team_name)
    if not team:
        raise DomainError(ErrorKind.TEAM_NOT_FOUND)

    result = await session.execute(
        select(User)
        .where(User.team_name == team_name)
        .order_by(User.user_id)
        .execution_options(populate_existing=True)
    )

    return {
        "team_name": team.team_name,
        "members": [
            {
                "user_id": user.user_id,
                "username": user.name,
                "is_active": user.isActive
            }
            for user in result.scalars().all()
        ]
    }


async def add_team(team_name: str, members: List[TeamMemberSchema]) -> Dict:
    """
    POST /team/add
    Create a team and upsert its members in one transaction.
    Members already on another team are moved here.
    """
    async with database.async_session_maker() as session:
        if await get_team_by_name(session, team_name):
            raise DomainError(ErrorKind.TEAM_EXISTS)

        try:
            session.add(Team(team_name=team_name))
            await session.flush()
        except IntegrityError:
            await session.rollback()
            raise DomainError(ErrorKind.TEAM_EXISTS)

        for member in members:
            await _upsert_member(session, team_name, member)

        await session.commit()

        logger.info("team_created", team_name=team_name, members=len(members))
        return await _load_team(session, team_name)


async def get_team(team_name: str) -> Dict:
    async with database.async_session_maker() as session:
        return await _load_team(session, team_name)
