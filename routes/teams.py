from fastapi import APIRouter, Depends, status, Query
from schemas import (
    TeamRequest, TeamCreateResponse, TeamResponse,
    ErrorResponse
)
from dependencies import get_current_user
from services import teams as team_service


router = APIRouter(prefix="/team")


@router.post("/add", status_code=status.HTTP_201_CREATED,
                  summary="Создать команду с участниками (создаёт/обновляет пользователей)",
                  response_model=TeamCreateResponse,
                  responses={400: {"model": ErrorResponse}})
async def add(request: TeamRequest):
    team = await team_service.add_team(request.team_name, request.members)
    return TeamCreateResponse(team=team)


@router.get("/get", status_code=status.HTTP_200_OK,
                 summary="Получить команду с участниками",
                 response_model=TeamResponse,
                 dependencies=[Depends(get_current_user)],
                 responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}})
async def get(team_name: str = Query(..., min_length=1, description="Уникальное имя команды")):
    team = await team_service.get_team(team_name)
    return TeamResponse(**team)
