from models.models import *
from models import database
from sqlalchemy import select, func, case
from typing import Dict, List, Optional

from errors import DomainError, ErrorKind


def _review_counts_query():
    return (
        select(Reviewers.reviewer_id, func.count().label("n"))
        .group_by(Reviewers.reviewer_id)
    )


def _active_review_counts_query():
    return (
        select(Reviewers.reviewer_id, func.count().label("n"))
        .join(PullRequest, PullRequest.pull_request_id == Reviewers.pr_id)
        .where(PullRequest.status == PRStatus.OPEN.value)
        .group_by(Reviewers.reviewer_id)
    )


def _authored_counts_query():
    return (
        select(PullRequest.author_id, func.count().label("n"))
        .group_by(PullRequest.author_id)
    )


async def _user_stats(session, user_id: Optional[str] = None) -> List[Dict]:
    reviews = _review_counts_query().subquery()
    active = _active_review_counts_query().subquery()
    authored = _authored_counts_query().subquery()

    review_assignments = func.coalesce(reviews.c.n, 0)
    query = (
        select(
            User.user_id,
            User.name,
            review_assignments.label("review_assignments"),
            func.coalesce(authored.c.n, 0).label("authored_prs"),
            func.coalesce(active.c.n, 0).label("active_reviews"),
        )
        .outerjoin(reviews, reviews.c.reviewer_id == User.user_id)
        .outerjoin(active, active.c.reviewer_id == User.user_id)
        .outerjoin(authored, authored.c.author_id == User.user_id)
        .order_by(review_assignments.desc(), User.user_id)
    )
    if user_id is not None:
        query = query.where(User.user_id == user_id)

    result = await session.execute(query)
    return [
        {
            "user_id": row.user_id,
            "username": row.name,
            "review_assignments": row.review_assignments,
            "authored_prs": row.authored_prs,
            "active_reviews": row.active_reviews
        }
        for row in result.all()
    ]


async def get_stats() -> Dict:
    """GET /stats"""
    async with database.async_session_maker() as session:
        user_stats = await _user_stats(session)

        pr_row = (await session.execute(
            select(
                func.count(),
                func.count(case((PullRequest.status == PRStatus.OPEN.value, 1))),
                func.count(case((PullRequest.status == PRStatus.MERGED.value, 1))),
            ).select_from(PullRequest)
        )).one()
        total_reviewers = (await session.execute(
            select(func.count()).select_from(Reviewers)
        )).scalar_one()

        return {
            "user_stats": user_stats,
            "pr_stats": {
                "total_prs": pr_row[0],
                "open_prs": pr_row[1],
                "merged_prs": pr_row[2],
                "total_reviewers": total_reviewers
            }
        }


async def get_user_stats(user_id: str) -> Dict:
    """GET /stats/user"""
    async with database.async_session_maker() as session:
        rows = await _user_stats(session, user_id)
        if not rows:
            raise DomainError(ErrorKind.USER_NOT_FOUND)
        return rows[0]
