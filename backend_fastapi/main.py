import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend_fastapi.api.routes.tareas import router as tareas_router
from backend_fastapi.middleware import CORSHeadersMiddleware
from core.domain.errors import (
    InvalidIdError,
    NotFoundError,
    PersistenceError,
    TareaError,
    ValidationError,
)
from infrastructure.config import Settings
from infrastructure.logging_setup import setup_logging
from infrastructure.mongo.session.client import close_client, get_db, open_client, ping

logger = logging.getLogger(__name__)

# NotFoundError se mantiene en 400: los clientes existentes dependen de ello.
ERROR_STATUS: dict[type[TareaError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    InvalidIdError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_400_BAD_REQUEST,
    PersistenceError: status.HTTP_400_BAD_REQUEST,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings: Settings = app.state.settings
    client = open_client(settings)
    app.state.mongo_client = client
    app.state.db = get_db(client, settings)
    try:
        yield
    finally:
        close_client(client)


async def tarea_error_handler(request: Request, exc: TareaError) -> JSONResponse:
    status_code = ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
    logger.warning(
        f"{request.method} {request.url.path} -> {status_code}: {exc.message}"
    )
    return JSONResponse(status_code=status_code, content=jsonable_encoder(exc.to_dict()))


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    error = ValidationError(
        "Peticion invalida", details=jsonable_encoder(exc.errors())
    )
    return await tarea_error_handler(request, error)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    logger.warning(
        f"{request.method} {request.url.path} -> {exc.status_code}: {exc.detail}"
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "message": f"{request.method} {request.url.path}: {exc.detail}",
            "details": {"status_code": exc.status_code},
        },
        headers=exc.headers,
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    setup_logging(settings.log_level)

    app = FastAPI(title="Tareas API", lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(CORSHeadersMiddleware, settings=settings)
    app.add_exception_handler(TareaError, tarea_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    @app.get("/health", include_in_schema=False)
    def health() -> JSONResponse:
        if ping(app.state.mongo_client):
            return JSONResponse({"status": "ok", "database": "ok"})
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "degraded", "database": "unavailable"},
        )

    app.include_router(tareas_router)
    return app


app = create_app()
