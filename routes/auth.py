from fastapi import APIRouter, status
from schemas import LoginRequest, LoginResponse, ErrorResponse
from services import auth as auth_service


router = APIRouter(prefix="/auth")


@router.post("/login", status_code=status.HTTP_200_OK,
                summary="Выдать JWT токен для пользователя",
                response_model=LoginResponse,
                responses={404: {"model": ErrorResponse}})
async def login(request: LoginRequest):
    token = await auth_service.login(request.user_id)
    return LoginResponse(token=token)
