import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

from bson import ObjectId
from pydantic import ValidationError as PydanticValidationError
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

from core.domain.errors import (
    InvalidIdError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from core.domain.models.tarea import EstadoTarea, Tarea
from core.domain.ports.tarea_repository import TareaRepository
from infrastructure.mongo.models.tarea import TareaMongo

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MongoTareaRepository(TareaRepository):
    """
    Implementación de TareaRepository usando MongoDB (Synchronous).

    Los ids son ObjectId generados por MongoDB y se exponen como str.
    Cualquier PyMongoError se traduce a PersistenceError.
    """

    def __init__(
        self, db: Database[Any], clock: Callable[[], datetime] = _utcnow
    ) -> None:
        """
        Argumentos:
            db (Database): Base de datos abierta por quien gestiona el ciclo de vida del cliente.
            clock (Callable): Fuente de la hora actual (UTC, con tzinfo).
        """
        self.collection: Collection[Any] = db.tareas
        self._clock = clock

    @staticmethod
    def _object_id(tarea_id: str) -> ObjectId:
        if not isinstance(tarea_id, str) or not ObjectId.is_valid(tarea_id):
            logger.warning(f"Id de tarea con formato invalido: {tarea_id!r}")
            raise InvalidIdError(tarea_id)
        return ObjectId(tarea_id)

    @staticmethod
    def _to_domain(doc: dict[str, Any]) -> Tarea:
        # Documentos escritos por otros clientes pueden no respetar el esquema.
        try:
            return TareaMongo(**doc).to_domain()
        except (PydanticValidationError, ValueError) as e:
            logger.error(f"Documento de tarea con formato invalido {doc.get('_id')}: {e}")
            raise PersistenceError(f"leer la tarea {doc.get('_id')}", e) from e

    def _next_date(self, previous: datetime | None) -> datetime:
        # MongoDB guarda milisegundos; la fecha siempre debe avanzar respecto a la anterior.
        now = self._clock()
        now = now.replace(microsecond=now.microsecond // 1000 * 1000)
        if previous is not None:
            if previous.tzinfo is None:
                previous = previous.replace(tzinfo=timezone.utc)
            if now <= previous:
                now = previous + timedelta(milliseconds=1)
        return now

    def create(self, fields: dict[str, Any]) -> Tarea:
        """
        Crea una tarea en estado PENDIENTE, ignorando cualquier estado recibido.

        Argumentos:
            fields (dict): Debe incluir `description`.

        Retorna:
            Tarea: La tarea guardada, con su id asignado.
        """
        description = fields.get("description")
        if description is None:
            raise ValidationError(
                "La descripcion de la tarea es obligatoria",
                details={"field": "description"},
            )

        tarea = Tarea(id=None, description=description, status=EstadoTarea.PENDIENTE)
        try:
            result = self.collection.insert_one(
                TareaMongo.from_domain(tarea).to_document()
            )
        except PyMongoError as e:
            logger.error(f"No se pudo crear la tarea: {e}")
            raise PersistenceError("crear la tarea", e) from e

        tarea.id = str(result.inserted_id)
        logger.info(f"Tarea {tarea.id} creada exitosamente.")
        return tarea

    def get_all(self) -> list[Tarea]:
        try:
            docs = list(self.collection.find())
        except PyMongoError as e:
            logger.error(f"No se pudieron obtener las tareas: {e}")
            raise PersistenceError("obtener las tareas", e) from e

        tareas = [self._to_domain(doc) for doc in docs]
        logger.info(f"Se obtuvieron {len(tareas)} tareas.")
        return tareas

    def get_one(self, tarea_id: str) -> Tarea:
        """
        Obtiene una tarea por su ID.

        Argumentos:
            tarea_id (str): ObjectId en hexadecimal.

        Retorna:
            Tarea: La tarea encontrada.

        Lanza:
            InvalidIdError: Si el id no es un ObjectId válido.
            NotFoundError: Si no existe ninguna tarea con ese id.
            PersistenceError: Si falla MongoDB.
        """
        logger.debug(f"Obteniendo tarea con id {tarea_id}")
        oid = self._object_id(tarea_id)
        try:
            doc = self.collection.find_one({"_id": oid})
        except PyMongoError as e:
            logger.error(f"No se pudo obtener la tarea con id {tarea_id}, detalles {e}")
            raise PersistenceError(f"obtener la tarea {tarea_id}", e) from e

        if doc is None:
            logger.info(f"No existe la tarea con id {tarea_id}")
            raise NotFoundError(tarea_id)

        logger.info(f"Se obtuvo la tarea con id {tarea_id}")
        return self._to_domain(doc)

    def get_last(self) -> Tarea:
        """Última tarea insertada (orden natural descendente)."""
        try:
            doc = self.collection.find_one({}, sort=[("$natural", -1)])
        except PyMongoError as e:
            logger.error(f"No se pudo obtener la ultima tarea: {e}")
            raise PersistenceError("obtener la ultima tarea", e) from e

        if doc is None:
            raise NotFoundError()
        return self._to_domain(doc)

    def update(self, tarea_id: str, fields: dict[str, Any]) -> Tarea:
        """
        Actualiza los campos informados de una tarea y fija `date` a la hora actual.

        Argumentos:
            tarea_id (str): ID de la tarea.
            fields (dict): `description` y/o `status`; los ausentes no cambian.

        Retorna:
            Tarea: La tarea actualizada.
        """
        tarea = self.get_one(tarea_id)

        changes: dict[str, Any] = {}
        if fields.get("description") is not None:
            changes["description"] = fields["description"]
        if fields.get("status") is not None:
            try:
                changes["status"] = EstadoTarea(fields["status"]).value
            except ValueError as e:
                raise ValidationError(
                    f"Estado invalido: {fields['status']!r}",
                    details={"allowed": [estado.value for estado in EstadoTarea]},
                ) from e
        changes["date"] = self._next_date(tarea.date)

        try:
            result = self.collection.update_one(
                {"_id": ObjectId(tarea_id)}, {"$set": changes}
            )
        except PyMongoError as e:
            logger.error(f"Error al intentar actualizar {tarea_id}: {e}")
            raise PersistenceError(f"actualizar la tarea {tarea_id}", e) from e

        if result.matched_count == 0:
            # Borrada entre la lectura y la escritura.
            raise NotFoundError(tarea_id)

        tarea.description = changes.get("description", tarea.description)
        tarea.status = EstadoTarea(changes.get("status", tarea.status.value))
        tarea.date = changes["date"]
        logger.info(f"Tarea {tarea_id} actualizada: {sorted(changes)}")
        return tarea

    def delete(self, tarea_id: str) -> bool:
        """
        Elimina una tarea por su ID. Borrar un id inexistente no es un error.

        Argumentos:
            tarea_id (str): El ID de la tarea a eliminar.

        Retorna:
            bool: True si se eliminó un documento.
        """
        oid = self._object_id(tarea_id)
        try:
            result = self.collection.delete_one({"_id": oid})
        except PyMongoError as e:
            logger.error(f"Error al intentar borrar {tarea_id}: {e}")
            raise PersistenceError(f"borrar la tarea {tarea_id}", e) from e

        deleted = bool(result.deleted_count)
        if deleted:
            logger.info(f"Tarea {tarea_id} eliminada.")
        else:
            logger.info(f"La tarea {tarea_id} no existia; nada que eliminar.")
        return deleted
