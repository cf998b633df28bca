from fastapi import APIRouter, Depends, status
from schemas import (
    PullRequestCreateRequest, PullRequestCreateResponse,
    PullRequestMergeRequest, PullRequestMergeResponse,
    PullRequestReassignRequest, PullRequestReassignResponse,
    ErrorResponse
)
from dependencies import get_current_user, get_reviewer_selector
from services import pull_request as pr_service
from services.reviewer_selector import ReviewerSelector


router = APIRouter(prefix="/pullRequest", dependencies=[Depends(get_current_user)],
                   responses={401: {"model": ErrorResponse}})


@router.post("/create", status_code=status.HTTP_201_CREATED,
                summary="Создать PR и автоматически назначить до 2 ревьюверов из команды автора",
                response_model=PullRequestCreateResponse,
                responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}})
async def create(request: PullRequestCreateRequest,
                 selector: ReviewerSelector = Depends(get_reviewer_selector)):
    pr = await pr_service.create_pull_request(
        request.pull_request_id,
        request.pull_request_name,
        request.author_id,
        selector
    )
    return PullRequestCreateResponse(pr=pr)


@router.post("/merge", status_code=status.HTTP_200_OK,
                summary="Пометить PR как MERGED (идемпотентная операция)",
                response_model=PullRequestMergeResponse,
                responses={404: {"model": ErrorResponse}})
async def merge(request: PullRequestMergeRequest):
    pr = await pr_service.merge_pull_request(request.pull_request_id)
    return PullRequestMergeResponse(pr=pr)


@router.post("/reassign", status_code=status.HTTP_200_OK,
                summary="Переназначить конкретного ревьювера на другого из его команды",
                response_model=PullRequestReassignResponse,
                responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}})
async def reassign(request: PullRequestReassignRequest,
                   selector: ReviewerSelector = Depends(get_reviewer_selector)):
    pr, replaced_by = await pr_service.reassign_reviewer(
        request.pull_request_id,
        request.old_user_id,
        selector
    )
    return PullRequestReassignResponse(pr=pr, replaced_by=replaced_by)
