from dataclasses import dataclass

from core.domain.ports.tarea_repository import TareaRepository


@dataclass(slots=True)
class EliminarTareaCommand:
    id: str


class EliminarTareaUseCase:
    def __init__(self, repository: TareaRepository) -> None:
        self._repository = repository

    def execute(self, cmd: EliminarTareaCommand) -> bool:
        """
        Elimina la tarea indicada.

        Retorna:
            bool: True si se borró un documento, False si no existía.
        """
        return self._repository.delete(cmd.id)
