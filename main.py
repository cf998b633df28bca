from contextlib import asynccontextmanager
from models import database
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import uvicorn

from config import get_settings
from errors import DomainError, ErrorKind
from logging_config import get_logger, setup_logging
from routes import auth, users, teams, pull_request, stats
from schemas import HealthResponse


setup_logging()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("starting", host=get_settings().host, port=get_settings().port)
    await database.init_db()

    yield

    await database.close_db()
    logger.info("stopped")


def error_body(code: str, message: str) -> dict:
    return {"error": {"code": code, "message": message}}


app = FastAPI(title="PR Reviewer Assignment Service", lifespan=lifespan)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    logger.info("request_rejected", path=request.url.path, code=exc.kind.code, reason=exc.message)
    return JSONResponse(
        status_code=exc.kind.http_status,
        content=error_body(exc.kind.code, exc.message)
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in errors
    ) or ErrorKind.BAD_REQUEST.default_message
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(ErrorKind.BAD_REQUEST.code, message)
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_exception", path=request.url.path, method=request.method,
                     error_type=type(exc).__name__)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("INTERNAL_ERROR", "internal server error")
    )


@app.get("/health", response_model=HealthResponse, summary="Проверка доступности сервиса")
async def health():
    return HealthResponse(status="ok")


app.include_router(auth.router)
app.include_router(users.router)
app.include_router(teams.router)
app.include_router(pull_request.router)
app.include_router(stats.router)


if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)
