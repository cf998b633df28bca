from models.models import *
from models import database
from sqlalchemy import select, update, exists
from sqlalchemy.exc import IntegrityError
from typing import Dict, List, Tuple
from datetime import datetime, timezone

from errors import DomainError, ErrorKind
from logging_config import get_logger
from services.reviewer_selector import ReviewerSelector, MAX_REVIEWERS
from services.users import get_user_by_id, get_active_team_members


logger = get_logger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


async def _get_pr(session, pull_request_id: str, for_update: bool = False) -> PullRequest:
    query = (
        select(PullRequest)
        .where(PullRequest.pull_request_id == pull_request_id)
        .execution_options(populate_existing=True)
    )
    if for_update:
        query = query.with_for_update()
    result = await session.execute(query)
    pr = result.scalar_one_or_none()
    if not pr:
        raise DomainError(ErrorKind.PR_NOT_FOUND)
    return pr


async def _get_reviewer_ids(session, pull_request_id: str) -> List[str]:
    """Assigned reviewers in slot order"""
    result = await session.execute(
        select(Reviewers.reviewer_id)
        .where(Reviewers.pr_id == pull_request_id)
        .order_by(Reviewers.slot)
    )
    return list(result.scalars().all())


async def _load_pull_request(session, pull_request_id: str) -> Dict:
    pr = await _get_pr(session, pull_request_id)
    return {
        "pull_request_id": pr.pull_request_id,
        "pull_request_name": pr.name,
        "author_id": pr.author_id,
        "status": pr.status,
        "assigned_reviewers": await _get_reviewer_ids(session, pull_request_id),
        "createdAt": pr.createdAt,
        "mergedAt": pr.mergedAt
    }


async def get_pull_request(pull_request_id: str) -> Dict:
    async with database.async_session_maker() as session:
        return await _load_pull_request(session, pull_request_id)


async def create_pull_request(pull_request_id: str, pull_request_name: str, author_id: str,
                              selector: ReviewerSelector) -> Dict:
    """
    POST /pullRequest/create
    Create an OPEN PR and assign up to 2 active reviewers from the author's team.
    The PR row and its reviewer rows are committed together.
    """
    async with database.async_session_maker() as session:
        existing = await session.execute(
            select(PullRequest.pull_request_id).where(PullRequest.pull_request_id == pull_request_id)
        )
        if existing.first():
            raise DomainError(ErrorKind.PR_EXISTS)

        author = await get_user_by_id(session, author_id)
        if not author:
            raise DomainError(ErrorKind.USER_NOT_FOUND, "author not found")

        candidates = await get_active_team_members(session, author.team_name, exclude_user_id=author.user_id)
        reviewer_ids = selector.select_reviewers(candidates, MAX_REVIEWERS)

        created_at = _now()
        session.add(PullRequest(
            pull_request_id=pull_request_id,
            name=pull_request_name,
            author_id=author.user_id,
            status=PRStatus.OPEN.value,
            createdAt=created_at
        ))
        try:
            # PR row must exist before reviewer rows reference it
            await session.flush()
            session.add_all([
                Reviewers(pr_id=pull_request_id, reviewer_id=reviewer_id, slot=slot, assignedAt=created_at)
                for slot, reviewer_id in enumerate(reviewer_ids)
            ])
            await session.commit()
        except IntegrityError:
            await session.rollback()
            raise DomainError(ErrorKind.PR_EXISTS)

        logger.info("pr_created", pull_request_id=pull_request_id, author_id=author_id,
                    reviewers=reviewer_ids)
        return await _load_pull_request(session, pull_request_id)


async def merge_pull_request(pull_request_id: str) -> Dict:
    """
    POST /pullRequest/merge
    Idempotent: the conditional update only touches OPEN rows, so mergedAt
    is written once no matter how many merges race.
    """
    async with database.async_session_maker() as session:
        result = await session.execute(
            update(PullRequest)
            .where(
                PullRequest.pull_request_id == pull_request_id,
                PullRequest.status == PRStatus.OPEN.value
            )
            .values(status=PRStatus.MERGED.value, mergedAt=_now())
            .execution_options(synchronize_session=False)
        )
        pr = await _load_pull_request(session, pull_request_id)
        await session.commit()

        if result.rowcount:
            logger.info("pr_merged", pull_request_id=pull_request_id)
        return pr


async def reassign_reviewer(pull_request_id: str, old_user_id: str,
                            selector: ReviewerSelector) -> Tuple[Dict, str]:
    """
    POST /pullRequest/reassign
    Replace one reviewer with an active member of that reviewer's team who is
    neither the author nor already reviewing this PR. The other slot keeps
    its position.
    Returns (pr, new reviewer id).
    """
    async with database.async_session_maker() as session:
        # merges of this PR wait until the reassignment commits
        pr = await _get_pr(session, pull_request_id, for_update=True)
        if pr.status == PRStatus.MERGED.value:
            raise DomainError(ErrorKind.PR_MERGED)

        current_reviewers = await _get_reviewer_ids(session, pull_request_id)
        if old_user_id not in current_reviewers:
            raise DomainError(ErrorKind.NOT_ASSIGNED)

        old_reviewer = await get_user_by_id(session, old_user_id)
        if not old_reviewer:
            raise DomainError(ErrorKind.USER_NOT_FOUND, "reviewer not found")

        candidates = await get_active_team_members(session, old_reviewer.team_name)
        new_reviewer_id = selector.select_replacement(
            candidates, excluded=[*current_reviewers, pr.author_id]
        )

        still_open = exists().where(
            PullRequest.pull_request_id == pull_request_id,
            PullRequest.status == PRStatus.OPEN.value
        )
        try:
            result = await session.execute(
                update(Reviewers)
                .where(
                    Reviewers.pr_id == pull_request_id,
                    Reviewers.reviewer_id == old_user_id,
                    still_open
                )
                .values(reviewer_id=new_reviewer_id, assignedAt=_now())
                .execution_options(synchronize_session=False)
            )
        except IntegrityError:
            # the replacement was assigned to this PR concurrently
            await session.rollback()
            raise DomainError(ErrorKind.NOT_ASSIGNED)

        if result.rowcount == 0:
            # lost a race: someone merged the PR or replaced this reviewer first
            await session.rollback()
            pr = await _get_pr(session, pull_request_id)
            if pr.status == PRStatus.MERGED.value:
                raise DomainError(ErrorKind.PR_MERGED)
            raise DomainError(ErrorKind.NOT_ASSIGNED)

        pr = await _load_pull_request(session, pull_request_id)
        await session.commit()

        logger.info("reviewer_reassigned", pull_request_id=pull_request_id,
                    old_reviewer_id=old_user_id, new_reviewer_id=new_reviewer_id)
        return pr, new_reviewer_id
