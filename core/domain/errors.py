from typing import Any


class TareaError(Exception):
    """
    Error base del dominio de tareas.

    Argumentos:
        message (str): Mensaje legible para el cliente.
        details (Any): Información adicional (errores de validación, error del driver...).
    """

    def __init__(self, message: str, details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message, "details": self.details}


class ValidationError(TareaError):
    pass


class InvalidIdError(TareaError):
    def __init__(self, tarea_id: str) -> None:
        super().__init__(
            f"Id invalido: {tarea_id!r} no es un identificador de tarea",
            details={"id": tarea_id},
        )


class NotFoundError(TareaError):
    def __init__(self, tarea_id: str | None = None) -> None:
        if tarea_id is None:
            message = "No existen tareas registradas"
        else:
            message = f"Id invalido: no existe la tarea {tarea_id}"
        super().__init__(message, details={"id": tarea_id})


class PersistenceError(TareaError):
    def __init__(self, operacion: str, error: Exception) -> None:
        super().__init__(
            f"Error al intentar {operacion}: {error}",
            details=type(error).__name__,
        )
