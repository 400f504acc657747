from typing import Any

from pymongo.database import Database

from core.application.crear_tarea import CrearTareaUseCase
from core.application.editar_tarea import EditarTareaUseCase
from core.application.eliminar_tarea import EliminarTareaUseCase
from core.application.listar_tareas import ListarTareasUseCase
from core.application.obtener_tarea import ObtenerTareaUseCase
from core.domain.ports.tarea_repository import TareaRepository
from infrastructure.mongo.repository.tarea_repository import MongoTareaRepository


def get_tarea_repository(db: Database[Any]) -> TareaRepository:
    return MongoTareaRepository(db)


def get_crear_tarea_use_case(repository: TareaRepository) -> CrearTareaUseCase:
    return CrearTareaUseCase(repository=repository)


def get_editar_tarea_use_case(repository: TareaRepository) -> EditarTareaUseCase:
    return EditarTareaUseCase(repository=repository)


def get_eliminar_tarea_use_case(repository: TareaRepository) -> EliminarTareaUseCase:
    return EliminarTareaUseCase(repository=repository)


def get_listar_tareas_use_case(repository: TareaRepository) -> ListarTareasUseCase:
    return ListarTareasUseCase(repository=repository)


def get_obtener_tarea_use_case(repository: TareaRepository) -> ObtenerTareaUseCase:
    return ObtenerTareaUseCase(repository=repository)
