import logging
from typing import Any

from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from infrastructure.config import Settings

logger = logging.getLogger(__name__)


def open_client(settings: Settings) -> MongoClient[Any]:
    """
    Crea el cliente de MongoDB. La conexión real se establece de forma
    perezosa en la primera operación.

    Argumentos:
        settings (Settings): Configuración con `mongo_uri` y timeout.

    Retorna:
        MongoClient: Cliente listo para usar; quien lo abre debe cerrarlo.
    """
    logger.info(f"Abriendo cliente MongoDB en {settings.mongo_uri}")
    return MongoClient(
        settings.mongo_uri,
        tz_aware=True,
        serverSelectionTimeoutMS=settings.mongo_timeout_ms,
    )


def get_db(client: MongoClient[Any], settings: Settings) -> Database[Any]:
    return client[settings.mongo_db_name]


def close_client(client: MongoClient[Any]) -> None:
    logger.info("Cerrando cliente MongoDB")
    client.close()


def ping(client: MongoClient[Any]) -> bool:
    """
    Hace ping a MongoDB.

    Retorna:
        bool: True si la BDD responde, False en caso contrario.
    """
    try:
        client.admin.command("ping")
        return True
    except PyMongoError as e:
        logger.error(f"Mongo no disponible: {e}")
        return False
