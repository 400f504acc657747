from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from core.domain.models.tarea import EstadoTarea, Tarea


class TareaMongo(BaseModel):
    """
    Modelo de Tarea para MongoDB.
    Representa cómo se almacena la tarea en la colección `tareas`.
    """

    id: str | None = Field(default=None, alias="_id")
    description: str
    status: str = EstadoTarea.PENDIENTE.value
    date: datetime | None = None

    model_config = {"populate_by_name": True}

    @field_validator("id", mode="before")
    @classmethod
    def _object_id_a_str(cls, value: Any) -> str | None:
        return None if value is None else str(value)

    def to_domain(self) -> Tarea:
        """
        Convierte el documento de MongoDB al modelo de dominio.

        Retorna:
            Tarea: La entidad de dominio.
        """
        return Tarea(
            id=self.id,
            description=self.description,
            status=EstadoTarea(self.status),
            date=self.date,
        )

    @classmethod
    def from_domain(cls, tarea: Tarea) -> "TareaMongo":
        return cls(
            id=tarea.id,
            description=tarea.description,
            status=tarea.status.value,
            date=tarea.date,
        )

    def to_document(self) -> dict[str, Any]:
        """Documento a insertar; el `_id` lo genera MongoDB."""
        return self.model_dump(exclude={"id"}, exclude_none=True)
