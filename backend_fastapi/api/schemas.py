from typing import Any

from pydantic import BaseModel, Field

from core.domain.models.tarea import EstadoTarea


class CrearTareaRequest(BaseModel):
    """Cuerpo de POST /tareas. Un `status` recibido se ignora."""

    description: str = Field(min_length=1)


class EditarTareaRequest(BaseModel):
    description: str | None = Field(default=None, min_length=1)
    status: EstadoTarea | None = None


class EliminarTareaResponse(BaseModel):
    id: str
    deleted: bool


class ErrorResponse(BaseModel):
    message: str
    details: Any = None
