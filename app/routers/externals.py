# app/routers/externals.py
"""External visitors (empresas_exteriores): people from outside companies."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.middlewares.validate_date import validate_dates
from app.middlewares.validate_jwt import require_token, entry_token
from app.schemas.external_visitor import (
    ExternalVisitorOut, ExternalVisitorRequest, ExternalGatehouseUpdate, EXTERNAL_DATE_FIELDS,
)
from app.services import externals_service
from app.utils.errors import NotFoundError, ValidationError, handle_errors, parse_body, parse_id

router = APIRouter()


def _listing(rows) -> dict:
    return {
        "ok": True,
        "cantidad": len(rows),
        "externas": [ExternalVisitorOut.model_validate(row) for row in rows],
    }


def _not_found(visitor_id) -> NotFoundError:
    return NotFoundError({"ok": False, "mensaje": f"Empresa exterior con id {visitor_id} no se encuentra"})


@router.post("/new_externa", status_code=201, summary="Register an external visitor")
@handle_errors("Error inesperado al guardar la externa")
def create_visitor(
    usuario: int = Depends(entry_token),
    body: dict = Depends(validate_dates(*EXTERNAL_DATE_FIELDS)),
    db: Session = Depends(get_db),
):
    data = parse_body(ExternalVisitorRequest, body)
    if data.missing():
        raise ValidationError({"ok": False, "mensaje": "Datos de persona exterior incompletos"})

    visitor = externals_service.create_visitor(db, data, usuario)
    return {"ok": True, "externa": visitor.id}


@router.get("/externas_hoy", summary="Visitors who came in today")
@handle_errors("Error al obtener externas del día")
def list_today(usuario: int = Depends(require_token), db: Session = Depends(get_db)):
    return _listing(externals_service.list_today(db))


@router.get("/porteria", summary="Visitors pending at the gatehouse")
@handle_errors("Error al obtener externas de portería")
def list_gatehouse(usuario: int = Depends(require_token), db: Session = Depends(get_db)):
    return _listing(externals_service.list_pending_gatehouse(db))


@router.put("/porteria", summary="Gatehouse checks a visitor out")
@handle_errors("Error inesperado al actualizar la entrada de portería")
def update_gatehouse(
    usuario: int = Depends(entry_token),
    body: dict = Depends(validate_dates("fechaSalida", "fecha_salida")),
    db: Session = Depends(get_db),
):
    data = parse_body(ExternalGatehouseUpdate, body)
    if not data.id:
        raise ValidationError({"ok": False, "mensaje": "El campo id es obligatorio"})
    if data.recepcion is None:
        raise ValidationError({"ok": False, "mensaje": "El campo recepcion es obligatorio"})

    visitor = externals_service.get_visitor(db, data.id, lock=True)
    if visitor is None:
        raise _not_found(data.id)

    externals_service.set_gatehouse(db, visitor, data.recepcion, data.fecha_salida, usuario)
    return {
        "ok": True,
        "mensaje": "Entrada de portería actualizada satisfactoriamente",
        "externa": ExternalVisitorOut.model_validate(visitor),
    }


@router.put("/buscar_externa", summary="Search visitors")
@handle_errors("Error inesperado en la selección de externas.")
def search_visitors(
    usuario: int = Depends(require_token),
    body: dict = Depends(validate_dates(*EXTERNAL_DATE_FIELDS)),
    db: Session = Depends(get_db),
):
    """Lower entry bound is mandatory; the upper bound defaults to now."""
    criteria = parse_body(ExternalVisitorRequest, body)
    if criteria.fecha_entrada is None:
        raise ValidationError({"ok": False, "mensaje": "El campo fecha_entrada es obligatorio para la búsqueda."})
    return _listing(externals_service.search(db, criteria))


@router.get("/by-nombreConductor/{nombre}", summary="Latest visit of a person")
@handle_errors("Error inesperado al buscar la última entrada.")
def latest_by_name(nombre: str, usuario: int = Depends(require_token), db: Session = Depends(get_db)):
    visitor = externals_service.latest_by_name(db, nombre)
    if visitor is None:
        raise NotFoundError({"ok": False, "mensaje": f"No se encontraron entradas para el conductor: {nombre}"})
    return {"ok": True, "externa": ExternalVisitorOut.model_validate(visitor)}


@router.delete("/externa/{id}", summary="Delete a visitor record")
@handle_errors("Error al eliminar externa")
def delete_visitor(id: str, usuario: int = Depends(entry_token), db: Session = Depends(get_db)):
    visitor_id = parse_id(id)
    visitor = externals_service.get_visitor(db, visitor_id, lock=True)
    if visitor is None:
        return {"id": visitor_id, "mensaje": f"Persona externa con id {visitor_id} no se encuentra"}

    externals_service.delete_visitor(db, visitor)
    return {"ok": True, "mensaje": f"Persona externa {visitor_id} eliminada satisfactoriamente"}


@router.get("/{id}", summary="Get a visitor record")
@handle_errors("Error al obtener externa")
def get_visitor(id: str, usuario: int = Depends(require_token), db: Session = Depends(get_db)):
    visitor_id = parse_id(id)
    visitor = externals_service.get_visitor(db, visitor_id)
    if visitor is None:
        return {"id": visitor_id, "mensaje": f"persona externa con id {visitor_id} no se encuentra"}
    return {"ok": True, "externa": ExternalVisitorOut.model_validate(visitor)}


@router.put("/{id}", summary="Edit a visitor record")
@handle_errors("Error inesperado al modificar la externa")
def update_visitor(
    id: str,
    usuario: int = Depends(entry_token),
    body: dict = Depends(validate_dates(*EXTERNAL_DATE_FIELDS)),
    db: Session = Depends(get_db),
):
    visitor_id = parse_id(id)
    data = parse_body(ExternalVisitorRequest, body)
    visitor = externals_service.get_visitor(db, visitor_id, lock=True)
    if visitor is None:
        raise _not_found(visitor_id)

    externals_service.update_visitor(db, visitor, data, usuario)
    return {"ok": True, "mensaje": f"Empresa exterior con id: {visitor_id} modificada satisfactoriamente"}
