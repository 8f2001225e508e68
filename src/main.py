"""FastAPI demo application wired with the request logger.

Run with: uvicorn src.main:app --reload --port 8000
"""

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse

from config.settings import settings
from src.common.errors import AppError, NotFoundError, UpstreamUnavailableError
from src.common.response import ApiResponse, error_response, success_response
from src.reqlog.config import RequestLoggerParams
from src.reqlog.errors import record_error
from src.reqlog.logging_config import setup_logging
from src.reqlog.middleware import REQUEST_ID_HEADER, RequestLoggerMiddleware

router = APIRouter()

# In-memory fixture data for the demo routes
_USERS: dict[str, dict[str, str]] = {
    "1": {"id": "1", "name": "alice"},
    "2": {"id": "2", "name": "bob"},
}


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}


@router.get("/users/{user_id}")
async def get_user(user_id: str, request: Request) -> ApiResponse:
    user = _USERS.get(user_id)
    if user is None:
        raise NotFoundError("user", user_id)
    return success_response(user, request.headers.get(REQUEST_ID_HEADER, ""))


@router.get("/upstream")
async def upstream() -> ApiResponse:
    raise UpstreamUnavailableError("inventory")


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    record_error(request, str(exc))
    resp = error_response(exc.code, exc.message, request.headers.get(REQUEST_ID_HEADER, ""))
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


def create_app(skip_paths: list[str] | None = None) -> FastAPI:
    """Build the app; `skip_paths` defaults to settings.LOG_SKIP_PATHS."""
    if skip_paths is None:
        skip_paths = settings.LOG_SKIP_PATHS

    application = FastAPI(
        title=settings.APP_NAME,
        version="0.1.0",
        debug=settings.DEBUG,
    )
    application.add_middleware(
        RequestLoggerMiddleware,
        params=RequestLoggerParams(skip_paths=skip_paths),
    )
    application.add_exception_handler(AppError, app_error_handler)
    application.include_router(router)
    return application


setup_logging(level=settings.LOG_LEVEL)

app = create_app()
