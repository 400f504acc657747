from dataclasses import dataclass
from typing import Any

from core.domain.models.tarea import EstadoTarea, Tarea
from core.domain.ports.tarea_repository import TareaRepository


@dataclass(slots=True)
class EditarTareaCommand:
    description: str | None = None
    status: EstadoTarea | None = None

    def changes(self) -> dict[str, Any]:
        """Solo los campos informados; los ausentes conservan su valor."""
        fields: dict[str, Any] = {}
        if self.description is not None:
            fields["description"] = self.description
        if self.status is not None:
            fields["status"] = self.status
        return fields


class EditarTareaUseCase:
    def __init__(self, repository: TareaRepository) -> None:
        self._repository = repository

    def execute(self, tarea_id: str, cmd: EditarTareaCommand) -> Tarea:
        return self._repository.update(tarea_id, cmd.changes())
