"""
Bearer token issuing and verification.

Tokens are HS256 JWTs carrying the user id and the user's team at login time.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

from config import get_settings
from errors import DomainError, ErrorKind
from logging_config import get_logger
from models import database
from services.users import get_user_by_id

logger = get_logger(__name__)


@dataclass(frozen=True)
class Claims:
    user_id: str
    team_name: str


def issue_token(user_id: str, team_name: str) -> str:
    settings = get_settings()
    now = datetime.now(timezone.utc)
    payload = {
        "user_id": user_id,
        "team_name": team_name,
        "iat": now,
        "exp": now + timedelta(hours=settings.jwt_expiration_hours),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


async def login(user_id: str) -> str:
    """
    POST /auth/login
    Issue a token for an existing user.
    """
    async with database.async_session_maker() as session:
        user = await get_user_by_id(session, user_id)
        if not user:
            raise DomainError(ErrorKind.USER_NOT_FOUND)

    logger.info("user_logged_in", user_id=user.user_id)
    return issue_token(user.user_id, user.team_name)


def authenticate(token: str) -> Claims:
    """Recover the caller from a token, or raise UNAUTHORIZED"""
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "iat"]},
        )
    except jwt.ExpiredSignatureError:
        raise DomainError(ErrorKind.UNAUTHORIZED, "token expired")
    except jwt.InvalidTokenError:
        raise DomainError(ErrorKind.UNAUTHORIZED, "invalid token")

    user_id = payload.get("user_id")
    if not user_id:
        raise DomainError(ErrorKind.UNAUTHORIZED, "invalid token")
    return Claims(user_id=user_id, team_name=payload.get("team_name", ""))
