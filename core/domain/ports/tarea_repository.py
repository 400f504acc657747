from abc import ABC, abstractmethod
from typing import Any

from core.domain.models.tarea import Tarea


class TareaRepository(ABC):
    @abstractmethod
    def create(self, fields: dict[str, Any]) -> Tarea:
        raise NotImplementedError

    @abstractmethod
    def get_all(self) -> list[Tarea]:
        raise NotImplementedError

    @abstractmethod
    def get_one(self, tarea_id: str) -> Tarea:
        raise NotImplementedError

    @abstractmethod
    def get_last(self) -> Tarea:
        raise NotImplementedError

    @abstractmethod
    def update(self, tarea_id: str, fields: dict[str, Any]) -> Tarea:
        raise NotImplementedError

    @abstractmethod
    def delete(self, tarea_id: str) -> bool:
        raise NotImplementedError
