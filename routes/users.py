from fastapi import APIRouter, Depends, status, Query
from schemas import (
    SetIsActiveRequest, UserUpdateResponse, GetReviewResponse,
    ErrorResponse
)
from dependencies import get_current_user
from services import users as user_service


router = APIRouter(prefix="/users", dependencies=[Depends(get_current_user)],
                   responses={401: {"model": ErrorResponse}})


@router.post("/setIsActive", status_code=status.HTTP_200_OK,
                   summary="Установить флаг активности пользователя",
                   response_model=UserUpdateResponse,
                   responses={404: {"model": ErrorResponse}})
async def setIsActive(request: SetIsActiveRequest):
    user = await user_service.set_is_active(request.user_id, request.is_active)
    return UserUpdateResponse(user=user)


@router.get("/getReview", status_code=status.HTTP_200_OK,
                  summary="Получить PR'ы, где пользователь назначен ревьювером",
                  response_model=GetReviewResponse)
async def getReview(user_id: str = Query(..., min_length=1, description="Идентификатор пользователя")):
    pull_requests = await user_service.get_review(user_id)
    return GetReviewResponse(
        user_id=user_id,
        pull_requests=pull_requests
    )
