from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from backend_fastapi.api.headers import JSON_MEDIA_TYPE
from infrastructure.config import Settings


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """
    Finaliza todas las respuestas (éxito, error, 405 u OPTIONS) con las
    cabeceras CORS configuradas y Content-Type JSON por defecto.
    """

    def __init__(self, app: ASGIApp, settings: Settings) -> None:
        super().__init__(app)
        self._origins = settings.cors_origins
        self._headers = {
            "Access-Control-Allow-Credentials": str(
                settings.cors_allow_credentials
            ).lower(),
            "Access-Control-Allow-Headers": ",".join(settings.cors_allow_headers),
            "Access-Control-Allow-Methods": ",".join(settings.cors_allow_methods),
        }

    def _allow_origin(self, request: Request) -> str | None:
        if "*" in self._origins:
            return "*"
        origin = request.headers.get("origin")
        return origin if origin in self._origins else None

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        response = await call_next(request)

        allow_origin = self._allow_origin(request)
        if allow_origin is not None:
            response.headers["Access-Control-Allow-Origin"] = allow_origin
            if allow_origin != "*":
                response.headers["Vary"] = "Origin"
        response.headers.update(self._headers)
        response.headers.setdefault("Content-Type", JSON_MEDIA_TYPE)
        return response
