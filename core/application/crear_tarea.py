from dataclasses import dataclass

from core.domain.models.tarea import Tarea
from core.domain.ports.tarea_repository import TareaRepository


@dataclass(slots=True)
class CrearTareaCommand:
    description: str


class CrearTareaUseCase:
    def __init__(self, repository: TareaRepository) -> None:
        self._repository = repository

    def execute(self, cmd: CrearTareaCommand) -> Tarea:
        # El estado inicial lo fija siempre el repositorio.
        return self._repository.create({"description": cmd.description})
