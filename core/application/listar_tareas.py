from core.domain.models.tarea import Tarea
from core.domain.ports.tarea_repository import TareaRepository


class ListarTareasUseCase:
    def __init__(self, repository: TareaRepository) -> None:
        self._repository = repository

    def execute(self) -> list[Tarea]:
        return self._repository.get_all()
