from enum import Enum
from typing import Optional

from fastapi import status


class ErrorKind(str, Enum):
    """Expected failures of valid requests, mapped to API codes in main.py"""
    TEAM_EXISTS = "TEAM_EXISTS"
    PR_EXISTS = "PR_EXISTS"
    PR_MERGED = "PR_MERGED"
    NOT_ASSIGNED = "NOT_ASSIGNED"
    NO_CANDIDATE = "NO_CANDIDATE"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    TEAM_NOT_FOUND = "TEAM_NOT_FOUND"
    PR_NOT_FOUND = "PR_NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    BAD_REQUEST = "BAD_REQUEST"

    @property
    def code(self) -> str:
        return _CODES.get(self, self.value)

    @property
    def http_status(self) -> int:
        return _STATUSES[self]

    @property
    def default_message(self) -> str:
        return _MESSAGES[self]


_CODES = {
    ErrorKind.USER_NOT_FOUND: "NOT_FOUND",
    ErrorKind.TEAM_NOT_FOUND: "NOT_FOUND",
    ErrorKind.PR_NOT_FOUND: "NOT_FOUND",
}

_STATUSES = {
    ErrorKind.TEAM_EXISTS: status.HTTP_400_BAD_REQUEST,
    ErrorKind.PR_EXISTS: status.HTTP_409_CONFLICT,
    ErrorKind.PR_MERGED: status.HTTP_409_CONFLICT,
    ErrorKind.NOT_ASSIGNED: status.HTTP_409_CONFLICT,
    ErrorKind.NO_CANDIDATE: status.HTTP_409_CONFLICT,
    ErrorKind.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.TEAM_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.PR_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
}

_MESSAGES = {
    ErrorKind.TEAM_EXISTS: "team_name already exists",
    ErrorKind.PR_EXISTS: "PR id already exists",
    ErrorKind.PR_MERGED: "cannot reassign on merged PR",
    ErrorKind.NOT_ASSIGNED: "reviewer is not assigned to this PR",
    ErrorKind.NO_CANDIDATE: "no active replacement candidate in team",
    ErrorKind.USER_NOT_FOUND: "user not found",
    ErrorKind.TEAM_NOT_FOUND: "team not found",
    ErrorKind.PR_NOT_FOUND: "PR not found",
    ErrorKind.UNAUTHORIZED: "unauthorized",
    ErrorKind.BAD_REQUEST: "invalid request",
}


class DomainError(ValueError):
    """A named outcome of a valid request against the current state."""

    def __init__(self, kind: ErrorKind, message: Optional[str] = None):
        self.kind = kind
        self.message = message or kind.default_message
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"DomainError({self.kind.value}, {self.message!r})"
