from fastapi import APIRouter, Depends, status, Query
from schemas import StatsResponse, UserStats, ErrorResponse
from dependencies import get_current_user
from services import stats as stats_service


router = APIRouter(prefix="/stats", dependencies=[Depends(get_current_user)],
                   responses={401: {"model": ErrorResponse}})


@router.get("", status_code=status.HTTP_200_OK,
                summary="Статистика назначений по пользователям и PR",
                response_model=StatsResponse)
async def get_stats():
    return StatsResponse(**await stats_service.get_stats())


@router.get("/user", status_code=status.HTTP_200_OK,
                summary="Статистика назначений пользователя",
                response_model=UserStats,
                responses={404: {"model": ErrorResponse}})
async def get_user_stats(user_id: str = Query(..., min_length=1, description="Идентификатор пользователя")):
    return UserStats(**await stats_service.get_user_stats(user_id))
