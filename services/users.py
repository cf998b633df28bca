from models.models import *
from models import database
from sqlalchemy import select, update, desc
from typing import List, Optional, Dict

from errors import DomainError, ErrorKind
from logging_config import get_logger


logger = get_logger(__name__)


async def get_user_by_id(session, user_id: str) -> Optional[User]:
    result = await session.execute(
        select(User).where(User.user_id == user_id)
    )
    return result.scalar_one_or_none()


async def get_active_team_members(session, team_name: str, exclude_user_id: Optional[str] = None) -> List[User]:
    """Active members of a team, optionally without one user"""
    query = select(User).where(User.team_name == team_name, User.isActive == True)
    if exclude_user_id is not None:
        query = query.where(User.user_id != exclude_user_id)
    result = await session.execute(query.order_by(User.user_id))
    return list(result.scalars().all())


def user_to_dict(user: User) -> Dict:
    return {
        "user_id": user.user_id,
        "username": user.name,
        "team_name": user.team_name,
        "is_active": user.isActive
    }


async def get_user(user_id: str) -> Dict:
    async with database.async_session_maker() as session:
        user = await get_user_by_id(session, user_id)
        if not user:
            raise DomainError(ErrorKind.USER_NOT_FOUND)
        return user_to_dict(user)


async def get_review(user_id: str) -> List[Dict]:
    """
    GET /users/getReview
    PRs (any status) where the user is an assigned reviewer, newest first.
    Unknown users simply have no reviews.
    """
    async with database.async_session_maker() as session:
        result = await session.execute(
            select(PullRequest)
            .join(Reviewers, PullRequest.pull_request_id == Reviewers.pr_id)
            .where(Reviewers.reviewer_id == user_id)
            .order_by(desc(PullRequest.createdAt), desc(PullRequest.pull_request_id))
        )

        return [
            {
                "pull_request_id": pr.pull_request_id,
                "pull_request_name": pr.name,
                "author_id": pr.author_id,
                "status": pr.status
            }
            for pr in result.scalars().all()
        ]


async def set_is_active(user_id: str, is_active: bool) -> Dict:
    """
    POST /users/setIsActive
    Only flips the flag, existing reviewer assignments are left as they are.
    """
    async with database.async_session_maker() as session:
        result = await session.execute(
            update(User)
            .where(User.user_id == user_id)
            .values(isActive=is_active)
        )
        if result.rowcount == 0:
            raise DomainError(ErrorKind.USER_NOT_FOUND)

        user = await get_user_by_id(session, user_id)
        await session.commit()

        logger.info("user_activity_changed", user_id=user_id, is_active=is_active)
        return user_to_dict(user)
