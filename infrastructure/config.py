import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _as_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _as_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    """
    Configuración del servicio leída de variables de entorno (y de `.env`).
    """

    host: str = "127.0.0.1"
    port: int = 8000
    reload: bool = True
    log_level: str = "info"

    mongo_uri: str = "mongodb://localhost:27017"
    mongo_db_name: str = "mi_proyecto"
    mongo_timeout_ms: int = 5000

    cors_origins: tuple[str, ...] = ("*",)
    cors_allow_credentials: bool = True
    cors_allow_headers: tuple[str, ...] = ("Accept", "Content-Type")
    cors_allow_methods: tuple[str, ...] = ("OPTIONS", "GET", "POST", "PUT", "DELETE")

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            host=os.getenv("HOST", cls.host),
            port=int(os.getenv("PORT", str(cls.port))),
            reload=_as_bool(os.getenv("RELOAD", "true")),
            log_level=os.getenv("LOG_LEVEL", cls.log_level).lower(),
            mongo_uri=os.getenv("MONGO_URI", cls.mongo_uri),
            mongo_db_name=os.getenv("MONGO_DB_NAME", cls.mongo_db_name),
            mongo_timeout_ms=int(os.getenv("MONGO_TIMEOUT_MS", str(cls.mongo_timeout_ms))),
            cors_origins=tuple(_as_list(os.getenv("CORS_ORIGINS", "*"))),
            cors_allow_credentials=_as_bool(os.getenv("CORS_ALLOW_CREDENTIALS", "true")),
            cors_allow_headers=tuple(
                _as_list(os.getenv("CORS_ALLOW_HEADERS", "Accept,Content-Type"))
            ),
            cors_allow_methods=tuple(
                _as_list(
                    os.getenv("CORS_ALLOW_METHODS", "OPTIONS,GET,POST,PUT,DELETE")
                )
            ),
        )
