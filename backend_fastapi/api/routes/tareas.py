from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from backend_fastapi.api.deps import (
    crear_tarea_command,
    crear_tarea_use_case,
    editar_tarea_command,
    editar_tarea_use_case,
    eliminar_tarea_use_case,
    listar_tareas_use_case,
    obtener_tarea_use_case,
    require_json_accept,
)
from backend_fastapi.api.schemas import EliminarTareaResponse, ErrorResponse
from core.application.crear_tarea import CrearTareaCommand, CrearTareaUseCase
from core.application.editar_tarea import EditarTareaCommand, EditarTareaUseCase
from core.application.eliminar_tarea import EliminarTareaCommand, EliminarTareaUseCase
from core.application.listar_tareas import ListarTareasUseCase
from core.application.obtener_tarea import ObtenerTareaUseCase
from core.domain.models.tarea import Tarea

router = APIRouter(
    prefix="/tareas",
    tags=["tareas"],
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
)


def _metodo_no_soportado(request: Request, allow: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        content={
            "message": f"{request.method} method is not supported on {request.url.path}",
            "details": {"allow": allow},
        },
        headers={"Allow": allow},
    )


@router.options("", include_in_schema=False)
@router.options("/{tarea_id}", include_in_schema=False)
def opciones() -> Response:
    """Respuesta a preflight CORS: solo cabeceras, sin cuerpo."""
    return Response(status_code=status.HTTP_200_OK)


@router.get(
    "",
    response_model=list[Tarea],
    dependencies=[Depends(require_json_accept)],
    summary="Listar todas las tareas",
)
def listar_tareas(
    use_case: ListarTareasUseCase = Depends(listar_tareas_use_case),
) -> list[Tarea]:
    """
    Obtiene una lista de todas las tareas registradas.
    """
    return use_case.execute()


@router.post(
    "",
    response_model=Tarea,
    summary="Crear una nueva tarea",
)
def crear_tarea(
    cmd: CrearTareaCommand = Depends(crear_tarea_command),
    use_case: CrearTareaUseCase = Depends(crear_tarea_use_case),
) -> Tarea:
    """
    Crea una nueva tarea y la retorna con un id válido.

    - **description**: Descripción de la tarea (obligatoria).

    El estado inicial es siempre PENDIENTE.
    """
    return use_case.execute(cmd)


@router.put("", include_in_schema=False)
@router.delete("", include_in_schema=False)
def coleccion_no_soportado(request: Request) -> JSONResponse:
    return _metodo_no_soportado(request, allow="OPTIONS,GET,POST")


@router.get(
    "/ultima",
    response_model=Tarea,
    dependencies=[Depends(require_json_accept)],
    summary="Obtener la última tarea creada",
)
def obtener_ultima_tarea(
    use_case: ObtenerTareaUseCase = Depends(obtener_tarea_use_case),
) -> Tarea:
    return use_case.ultima()


@router.get(
    "/{tarea_id}",
    response_model=Tarea,
    dependencies=[Depends(require_json_accept)],
    summary="Obtener una tarea",
)
def obtener_tarea(
    tarea_id: str,
    use_case: ObtenerTareaUseCase = Depends(obtener_tarea_use_case),
) -> Tarea:
    """
    Obtiene una tarea dado su identificador.

    - **tarea_id**: ObjectId de la tarea.
    """
    return use_case.execute(tarea_id)


@router.put(
    "/{tarea_id}",
    response_model=Tarea,
    summary="Editar una tarea existente",
)
def editar_tarea(
    tarea_id: str,
    cmd: EditarTareaCommand = Depends(editar_tarea_command),
    use_case: EditarTareaUseCase = Depends(editar_tarea_use_case),
) -> Tarea:
    """
    Modifica los datos de una tarea existente.

    - **tarea_id**: ObjectId de la tarea a modificar.
    - **description**: Nueva descripción (opcional).
    - **status**: Nuevo estado (opcional).
    """
    return use_case.execute(tarea_id, cmd)


@router.delete(
    "/{tarea_id}",
    response_model=EliminarTareaResponse,
    summary="Eliminar una tarea",
)
def eliminar_tarea(
    tarea_id: str,
    use_case: EliminarTareaUseCase = Depends(eliminar_tarea_use_case),
) -> EliminarTareaResponse:
    """
    Elimina una tarea del sistema. Eliminar una tarea inexistente no es un error.

    - **tarea_id**: ObjectId de la tarea a eliminar.
    """
    deleted = use_case.execute(EliminarTareaCommand(id=tarea_id))
    return EliminarTareaResponse(id=tarea_id, deleted=deleted)


@router.post("/{tarea_id}", include_in_schema=False)
def recurso_no_soportado(request: Request) -> JSONResponse:
    return _metodo_no_soportado(request, allow="OPTIONS,GET,PUT,DELETE")
