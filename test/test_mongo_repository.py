from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest
from bson import ObjectId
from pymongo.errors import PyMongoError, ServerSelectionTimeoutError

from core.domain.errors import (
    InvalidIdError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from core.domain.models.tarea import EstadoTarea
from infrastructure.mongo.models.tarea import TareaMongo
from infrastructure.mongo.repository.tarea_repository import MongoTareaRepository

AHORA = datetime(2026, 10, 19, 12, 0, 0, 123456, tzinfo=timezone.utc)


@pytest.fixture
def mock_mongo_collection():
    collection = MagicMock()
    return collection


@pytest.fixture
def mongo_repository(mock_mongo_collection):
    repo = MongoTareaRepository(MagicMock(), clock=lambda: AHORA)
    repo.collection = mock_mongo_collection
    return repo


def _doc(oid=None, **overrides):
    doc = {
        "_id": oid or ObjectId(),
        "description": "Found Tarea",
        "status": "PENDIENTE",
    }
    doc.update(overrides)
    return doc


def test_usa_la_coleccion_tareas():
    db = MagicMock()

    repo = MongoTareaRepository(db)

    assert repo.collection is db.tareas


def test_create_tarea_fuerza_estado_pendiente(mongo_repository, mock_mongo_collection):
    oid = ObjectId()
    mock_mongo_collection.insert_one.return_value.inserted_id = oid

    tarea = mongo_repository.create({"description": "Nueva", "status": "COMPLETADA"})

    mock_mongo_collection.insert_one.assert_called_once_with(
        {"description": "Nueva", "status": "PENDIENTE"}
    )
    assert tarea.id == str(oid)
    assert tarea.status == EstadoTarea.PENDIENTE
    assert tarea.date is None


def test_create_sin_descripcion(mongo_repository, mock_mongo_collection):
    with pytest.raises(ValidationError):
        mongo_repository.create({"status": "PENDIENTE"})

    mock_mongo_collection.insert_one.assert_not_called()


def test_create_traduce_error_de_mongo(mongo_repository, mock_mongo_collection):
    mock_mongo_collection.insert_one.side_effect = PyMongoError("disco lleno")

    with pytest.raises(PersistenceError) as exc_info:
        mongo_repository.create({"description": "x"})

    assert "disco lleno" in exc_info.value.message
    assert exc_info.value.details == "PyMongoError"


def test_get_tarea_found(mongo_repository, mock_mongo_collection):
    oid = ObjectId()
    mock_mongo_collection.find_one.return_value = _doc(oid, __v=0)

    result = mongo_repository.get_one(str(oid))

    mock_mongo_collection.find_one.assert_called_once_with({"_id": oid})
    assert result.id == str(oid)
    assert result.description == "Found Tarea"
    assert result.status == EstadoTarea.PENDIENTE


def test_get_tarea_not_found(mongo_repository, mock_mongo_collection):
    mock_mongo_collection.find_one.return_value = None

    with pytest.raises(NotFoundError) as exc_info:
        mongo_repository.get_one(str(ObjectId()))

    assert exc_info.value.message.startswith("Id invalido")


@pytest.mark.parametrize("tarea_id", ["", "123", "zzzzzzzzzzzzzzzzzzzzzzzz", "abcdefabcdef"])
def test_get_tarea_id_invalido(mongo_repository, mock_mongo_collection, tarea_id):
    with pytest.raises(InvalidIdError):
        mongo_repository.get_one(tarea_id)

    mock_mongo_collection.find_one.assert_not_called()


def test_get_tarea_error_de_mongo(mongo_repository, mock_mongo_collection):
    mock_mongo_collection.find_one.side_effect = ServerSelectionTimeoutError("timeout")

    with pytest.raises(PersistenceError):
        mongo_repository.get_one(str(ObjectId()))


def test_list_tareas(mongo_repository, mock_mongo_collection):
    mock_mongo_collection.find.return_value = [
        _doc(description="Tarea 1"),
        _doc(description="Tarea 2", status="COMPLETADA"),
    ]

    results = mongo_repository.get_all()

    assert len(results) == 2
    assert results[0].description == "Tarea 1"
    assert results[1].status == EstadoTarea.COMPLETADA


def test_list_tareas_error_de_mongo(mongo_repository, mock_mongo_collection):
    mock_mongo_collection.find.side_effect = PyMongoError("caido")

    with pytest.raises(PersistenceError):
        mongo_repository.get_all()


def test_get_last(mongo_repository, mock_mongo_collection):
    oid = ObjectId()
    mock_mongo_collection.find_one.return_value = _doc(oid)

    result = mongo_repository.get_last()

    mock_mongo_collection.find_one.assert_called_once_with({}, sort=[("$natural", -1)])
    assert result.id == str(oid)


def test_get_last_coleccion_vacia(mongo_repository, mock_mongo_collection):
    mock_mongo_collection.find_one.return_value = None

    with pytest.raises(NotFoundError):
        mongo_repository.get_last()


def test_update_reemplaza_campos_y_fija_fecha(mongo_repository, mock_mongo_collection):
    oid = ObjectId()
    mock_mongo_collection.find_one.return_value = _doc(oid)

    tarea = mongo_repository.update(
        str(oid), {"description": "Editada", "status": EstadoTarea.COMPLETADA}
    )

    fecha = AHORA.replace(microsecond=123000)
    mock_mongo_collection.update_one.assert_called_once_with(
        {"_id": oid},
        {"$set": {"description": "Editada", "status": "COMPLETADA", "date": fecha}},
    )
    assert tarea.description == "Editada"
    assert tarea.status == EstadoTarea.COMPLETADA
    assert tarea.date == fecha


def test_update_parcial_no_toca_descripcion(mongo_repository, mock_mongo_collection):
    oid = ObjectId()
    mock_mongo_collection.find_one.return_value = _doc(oid, description="Original")

    tarea = mongo_repository.update(str(oid), {"status": "EN_PROGRESO"})

    _, update = mock_mongo_collection.update_one.call_args.args
    assert "description" not in update["$set"]
    assert tarea.description == "Original"
    assert tarea.status == EstadoTarea.EN_PROGRESO


def test_update_fecha_siempre_avanza(mongo_repository, mock_mongo_collection):
    oid = ObjectId()
    anterior = AHORA + timedelta(seconds=5)
    mock_mongo_collection.find_one.return_value = _doc(oid, date=anterior)

    tarea = mongo_repository.update(str(oid), {"description": "x"})

    assert tarea.date == anterior + timedelta(milliseconds=1)


def test_update_fecha_anterior_sin_zona_horaria(mongo_repository, mock_mongo_collection):
    oid = ObjectId()
    anterior = (AHORA + timedelta(seconds=1)).replace(tzinfo=None)
    mock_mongo_collection.find_one.return_value = _doc(oid, date=anterior)

    tarea = mongo_repository.update(str(oid), {})

    assert tarea.date > anterior.replace(tzinfo=timezone.utc)


def test_update_tarea_inexistente(mongo_repository, mock_mongo_collection):
    mock_mongo_collection.find_one.return_value = None

    with pytest.raises(NotFoundError):
        mongo_repository.update(str(ObjectId()), {"description": "x"})

    mock_mongo_collection.update_one.assert_not_called()


def test_update_estado_invalido(mongo_repository, mock_mongo_collection):
    mock_mongo_collection.find_one.return_value = _doc()

    with pytest.raises(ValidationError):
        mongo_repository.update(str(ObjectId()), {"status": "TERMINADA"})

    mock_mongo_collection.update_one.assert_not_called()


def test_update_borrada_entre_lectura_y_escritura(mongo_repository, mock_mongo_collection):
    mock_mongo_collection.find_one.return_value = _doc()
    mock_mongo_collection.update_one.return_value.matched_count = 0

    with pytest.raises(NotFoundError):
        mongo_repository.update(str(ObjectId()), {"description": "x"})


def test_update_error_de_mongo(mongo_repository, mock_mongo_collection):
    mock_mongo_collection.find_one.return_value = _doc()
    mock_mongo_collection.update_one.side_effect = PyMongoError("write concern")

    with pytest.raises(PersistenceError) as exc_info:
        mongo_repository.update(str(ObjectId()), {"description": "x"})

    assert "write concern" in exc_info.value.message


def test_eliminar_tarea(mongo_repository, mock_mongo_collection):
    oid = ObjectId()
    mock_mongo_collection.delete_one.return_value.deleted_count = 1

    assert mongo_repository.delete(str(oid)) is True
    mock_mongo_collection.delete_one.assert_called_once_with({"_id": oid})


def test_eliminar_tarea_inexistente(mongo_repository, mock_mongo_collection):
    mock_mongo_collection.delete_one.return_value.deleted_count = 0

    assert mongo_repository.delete(str(ObjectId())) is False


def test_eliminar_id_invalido(mongo_repository, mock_mongo_collection):
    with pytest.raises(InvalidIdError):
        mongo_repository.delete("no-valido")

    mock_mongo_collection.delete_one.assert_not_called()


def test_eliminar_error_de_mongo(mongo_repository, mock_mongo_collection):
    mock_mongo_collection.delete_one.side_effect = PyMongoError("caido")

    with pytest.raises(PersistenceError):
        mongo_repository.delete(str(ObjectId()))


def test_tarea_mongo_convierte_object_id_y_aplica_defaults():
    oid = ObjectId()

    tarea = TareaMongo(**{"_id": oid, "description": "legacy"}).to_domain()

    assert tarea.id == str(oid)
    assert tarea.status == EstadoTarea.PENDIENTE
    assert tarea.date is None


@pytest.mark.parametrize(
    "doc",
    [
        {"_id": ObjectId(), "description": "x", "status": "HECHA"},
        {"_id": ObjectId(), "status": "PENDIENTE"},
    ],
)
def test_documento_con_formato_invalido(mongo_repository, mock_mongo_collection, doc):
    mock_mongo_collection.find.return_value = [doc]
    mock_mongo_collection.find_one.return_value = doc

    with pytest.raises(PersistenceError) as exc_info:
        mongo_repository.get_all()
    assert exc_info.value.message.startswith("Error al intentar leer la tarea")

    with pytest.raises(PersistenceError):
        mongo_repository.get_one(str(doc["_id"]))
    with pytest.raises(PersistenceError):
        mongo_repository.get_last()
