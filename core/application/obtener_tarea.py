from core.domain.models.tarea import Tarea
from core.domain.ports.tarea_repository import TareaRepository


class ObtenerTareaUseCase:
    def __init__(self, repository: TareaRepository) -> None:
        self._repository = repository

    def execute(self, tarea_id: str) -> Tarea:
        return self._repository.get_one(tarea_id)

    def ultima(self) -> Tarea:
        return self._repository.get_last()
