from typing import Any

from fastapi import Depends, Header, Request
from fastapi.encoders import jsonable_encoder
from pydantic import ValidationError as PydanticValidationError

from backend_fastapi.api.headers import valid_accept_header, valid_content_type_header
from backend_fastapi.api.schemas import CrearTareaRequest, EditarTareaRequest
from core.application.crear_tarea import CrearTareaCommand, CrearTareaUseCase
from core.application.editar_tarea import EditarTareaCommand, EditarTareaUseCase
from core.application.eliminar_tarea import EliminarTareaUseCase
from core.application.listar_tareas import ListarTareasUseCase
from core.application.obtener_tarea import ObtenerTareaUseCase
from core.domain.errors import ValidationError
from core.domain.ports.tarea_repository import TareaRepository
from infrastructure.container import (
    get_crear_tarea_use_case,
    get_editar_tarea_use_case,
    get_eliminar_tarea_use_case,
    get_listar_tareas_use_case,
    get_obtener_tarea_use_case,
    get_tarea_repository,
)


def tarea_repository(request: Request) -> TareaRepository:
    return get_tarea_repository(request.app.state.db)


def crear_tarea_use_case(
    repository: TareaRepository = Depends(tarea_repository),
) -> CrearTareaUseCase:
    return get_crear_tarea_use_case(repository)


def editar_tarea_use_case(
    repository: TareaRepository = Depends(tarea_repository),
) -> EditarTareaUseCase:
    return get_editar_tarea_use_case(repository)


def eliminar_tarea_use_case(
    repository: TareaRepository = Depends(tarea_repository),
) -> EliminarTareaUseCase:
    return get_eliminar_tarea_use_case(repository)


def listar_tareas_use_case(
    repository: TareaRepository = Depends(tarea_repository),
) -> ListarTareasUseCase:
    return get_listar_tareas_use_case(repository)


def obtener_tarea_use_case(
    repository: TareaRepository = Depends(tarea_repository),
) -> ObtenerTareaUseCase:
    return get_obtener_tarea_use_case(repository)


def require_json_accept(accept: str | None = Header(default=None)) -> None:
    if not valid_accept_header(accept):
        raise ValidationError(
            "La cabecera Accept debe admitir application/json",
            details={"accept": accept},
        )


async def json_body(
    request: Request, content_type: str | None = Header(default=None)
) -> dict[str, Any]:
    """
    Valida Content-Type y retorna el cuerpo de la petición como objeto JSON.
    """
    if not valid_content_type_header(content_type):
        raise ValidationError(
            "La cabecera Content-Type debe ser application/json",
            details={"content_type": content_type},
        )
    try:
        body = await request.json()
    except ValueError as e:
        raise ValidationError(
            "El cuerpo de la peticion no es JSON valido", details=str(e)
        ) from e
    if not isinstance(body, dict):
        raise ValidationError(
            "El cuerpo de la peticion debe ser un objeto JSON",
            details={"type": type(body).__name__},
        )
    return body


def _invalid_body(e: PydanticValidationError) -> ValidationError:
    return ValidationError(
        "Cuerpo de la peticion invalido", details=jsonable_encoder(e.errors())
    )


def crear_tarea_command(body: dict[str, Any] = Depends(json_body)) -> CrearTareaCommand:
    try:
        payload = CrearTareaRequest.model_validate(body)
    except PydanticValidationError as e:
        raise _invalid_body(e) from e
    return CrearTareaCommand(description=payload.description)


def editar_tarea_command(
    body: dict[str, Any] = Depends(json_body),
) -> EditarTareaCommand:
    try:
        payload = EditarTareaRequest.model_validate(body)
    except PydanticValidationError as e:
        raise _invalid_body(e) from e
    return EditarTareaCommand(description=payload.description, status=payload.status)
