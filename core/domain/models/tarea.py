from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class EstadoTarea(Enum):
    PENDIENTE = "PENDIENTE"
    EN_PROGRESO = "EN_PROGRESO"
    COMPLETADA = "COMPLETADA"


@dataclass(slots=True)
class Tarea:
    id: str | None
    description: str
    status: EstadoTarea = EstadoTarea.PENDIENTE
    date: datetime | None = None
