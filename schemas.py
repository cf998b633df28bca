from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


class ErrorDetail(BaseModel):
    code: str
    message: str


class ErrorResponse(BaseModel):
    error: ErrorDetail


class HealthResponse(BaseModel):
    status: str


class LoginRequest(BaseModel):
    user_id: str = Field(min_length=1)


class LoginResponse(BaseModel):
    token: str


class TeamMember(BaseModel):
    user_id: str = Field(min_length=1)
    username: str = Field(min_length=1)
    is_active: bool


class TeamRequest(BaseModel):
    team_name: str = Field(min_length=1)
    members: List[TeamMember]


class TeamResponse(BaseModel):
    team_name: str
    members: List[TeamMember]


class TeamCreateResponse(BaseModel):
    team: TeamResponse


class UserResponse(BaseModel):
    user_id: str
    username: str
    team_name: str
    is_active: bool


class UserUpdateResponse(BaseModel):
    user: UserResponse


class SetIsActiveRequest(BaseModel):
    user_id: str = Field(min_length=1)
    is_active: bool


class PullRequestShort(BaseModel):
    pull_request_id: str
    pull_request_name: str
    author_id: str
    status: str


class PullRequestResponse(BaseModel):
    pull_request_id: str
    pull_request_name: str
    author_id: str
    status: str
    assigned_reviewers: List[str]
    createdAt: Optional[datetime] = None
    mergedAt: Optional[datetime] = None


class PullRequestCreateRequest(BaseModel):
    pull_request_id: str = Field(min_length=1)
    pull_request_name: str = Field(min_length=1)
    author_id: str = Field(min_length=1)


class PullRequestCreateResponse(BaseModel):
    pr: PullRequestResponse


class PullRequestMergeRequest(BaseModel):
    pull_request_id: str = Field(min_length=1)


class PullRequestMergeResponse(BaseModel):
    pr: PullRequestResponse


class PullRequestReassignRequest(BaseModel):
    pull_request_id: str = Field(min_length=1)
    old_user_id: str = Field(min_length=1)


class PullRequestReassignResponse(BaseModel):
    pr: PullRequestResponse
    replaced_by: str


class GetReviewResponse(BaseModel):
    user_id: str
    pull_requests: List[PullRequestShort]


class UserStats(BaseModel):
    user_id: str
    username: str
    review_assignments: int
    authored_prs: int
    active_reviews: int


class PRStats(BaseModel):
    total_prs: int
    open_prs: int
    merged_prs: int
    total_reviewers: int


class StatsResponse(BaseModel):
    user_stats: List[UserStats]
    pr_stats: PRStats
