"""FastAPI dependencies shared by the routers."""
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from errors import DomainError, ErrorKind
from services.auth import Claims, authenticate
from services.reviewer_selector import ReviewerSelector


_bearer = HTTPBearer(auto_error=False)
_selector = ReviewerSelector()


def get_reviewer_selector() -> ReviewerSelector:
    return _selector


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
) -> Claims:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise DomainError(ErrorKind.UNAUTHORIZED, "missing or malformed authorization header")
    return authenticate(credentials.credentials)
