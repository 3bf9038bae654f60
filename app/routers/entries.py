# app/routers/entries.py
"""
Vehicle entries (entradas_vehiculos): truck/van arrivals checked in at the
gatehouse, validated by the warehouse (recepcion) and let out again by the
gatehouse (vigilancia + fecha_salida).
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.middlewares.request_body import json_body
from app.middlewares.validate_date import validate_dates
from app.middlewares.validate_jwt import require_token, entry_token
from app.schemas.vehicle_entry import (
    VehicleEntryOut, VehicleEntryCreated, VehicleEntryCreate, VehicleEntryUpdate,
    ReceptionUpdate, GatehouseUpdate, VehicleEntrySearch,
)
from app.services import entries_service
from app.utils.errors import NotFoundError, ValidationError, handle_errors, parse_body, parse_id

router = APIRouter()


def _listing(rows) -> dict:
    return {
        "ok": True,
        "cantidad": len(rows),
        "entradas": [VehicleEntryOut.model_validate(row) for row in rows],
    }


def _not_found(entry_id) -> NotFoundError:
    return NotFoundError({"ok": False, "mensaje": f"No se encontró ninguna entrada con el id {entry_id}."})


# ── Listings ─────────────────────────────────────────────────────────────────

@router.get("", summary="Vehicles currently inside")
@handle_errors("Error al obtener las entradas")
def list_entries(usuario: int = Depends(require_token), db: Session = Depends(get_db)):
    """Entered during the last 12 hours, or not gone out yet. Newest first."""
    return _listing(entries_service.list_inside(db))


@router.get("/almacen", summary="Entries waiting for warehouse reception")
@handle_errors("Error al obtener entradas de almacén")
def list_warehouse(usuario: int = Depends(require_token), db: Session = Depends(get_db)):
    return _listing(entries_service.list_pending_reception(db))


@router.get("/porteria", summary="Entries received, waiting to leave")
@handle_errors("Error al obtener entradas de portería")
def list_gatehouse(usuario: int = Depends(require_token), db: Session = Depends(get_db)):
    return _listing(entries_service.list_pending_gatehouse(db))


@router.get("/by-matricula/{matricula}", summary="Latest entry of a plate")
@handle_errors("Error inesperado, contacte al administrador.")
def latest_by_plate(matricula: str, usuario: int = Depends(require_token), db: Session = Depends(get_db)):
    entry = entries_service.latest_by_plate(db, matricula)
    if entry is None:
        raise NotFoundError({"ok": False, "mensaje": f"No se encontró entrada para la matrícula {matricula}"})
    return {"ok": True, "entrada": VehicleEntryOut.model_validate(entry)}


# ── Writes ───────────────────────────────────────────────────────────────────

@router.post("", summary="Register a vehicle entry")
@handle_errors("Error al crear la entrada")
def create_entry(
    usuario: int = Depends(entry_token),
    body: dict = Depends(validate_dates("fecha_entrada")),
    db: Session = Depends(get_db),
):
    data = parse_body(VehicleEntryCreate, body)
    if data.missing():
        raise ValidationError({"ok": False, "mensaje": "Datos enviados nulos o incompletos"})

    entry = entries_service.create_entry(db, data, usuario)
    return {"ok": True, "entrada": VehicleEntryCreated.model_validate(entry)}


@router.put("/recepcion", summary="Warehouse validates an entry")
@handle_errors("Error inesperado al actualizar la entrada.")
def update_reception(
    usuario: int = Depends(entry_token),
    body: dict = Depends(json_body),
    db: Session = Depends(get_db),
):
    data = parse_body(ReceptionUpdate, body)
    if data.missing():
        raise ValidationError({"ok": False, "mensaje": "Los campos id y recepcion son obligatorios."})

    entry = entries_service.get_entry(db, data.id, lock=True)
    if entry is None:
        raise _not_found(data.id)

    entries_service.set_reception(db, entry, data.recepcion, usuario)
    return {"ok": True, "mensaje": "El estado de recepción de la entrada ha sido actualizado correctamente."}


@router.put("/porteria", summary="Gatehouse lets a vehicle out")
@handle_errors("Error inesperado al actualizar la entrada de portería.")
def update_gatehouse(
    usuario: int = Depends(entry_token),
    body: dict = Depends(validate_dates("fecha")),
    db: Session = Depends(get_db),
):
    data = parse_body(GatehouseUpdate, body)
    if data.missing():
        raise ValidationError({"ok": False, "mensaje": "Los campos id, vigilancia y fecha son obligatorios."})

    entry = entries_service.get_entry(db, data.id, lock=True)
    if entry is None:
        raise _not_found(data.id)

    entries_service.set_gatehouse(db, entry, data.vigilancia, data.fecha, usuario)
    return {"ok": True, "mensaje": "El estado de portería de la entrada ha sido actualizado correctamente."}


@router.put("/select", summary="Search entries")
@handle_errors("Error inesperado en la selección de entradas.")
def search_entries(
    usuario: int = Depends(require_token),
    body: dict = Depends(validate_dates("fecha_entrada1", "fecha_entrada2")),
    db: Session = Depends(get_db),
):
    """
    Optional ILIKE filters on driver, company, plate and cargo type.
    fecha_entrada1 is mandatory; fecha_entrada2 defaults to now.
    """
    criteria = parse_body(VehicleEntrySearch, body)
    if criteria.fecha_entrada1 is None:
        raise ValidationError({"ok": False, "mensaje": "El campo fecha_entrada1 es obligatorio para la búsqueda."})
    return _listing(entries_service.search(db, criteria))


# ── By id ────────────────────────────────────────────────────────────────────

@router.get("/{id}", summary="Get an entry")
@handle_errors("Error al obtener la entrada")
def get_entry(id: str, usuario: int = Depends(require_token), db: Session = Depends(get_db)):
    entry_id = parse_id(id)
    entry = entries_service.get_entry(db, entry_id)
    if entry is None:
        return {"id": entry_id, "mensaje": f"entrada con id {entry_id} no se encuentra"}
    return {"ok": True, "entrada": VehicleEntryOut.model_validate(entry)}


@router.delete("/{id}", summary="Delete an entry")
@handle_errors("Error inesperado al eliminar la entrada.")
def delete_entry(id: str, usuario: int = Depends(require_token), db: Session = Depends(get_db)):
    entry_id = parse_id(id)
    entry = entries_service.get_entry(db, entry_id, lock=True)
    if entry is None:
        raise _not_found(entry_id)

    deleted = VehicleEntryOut.model_validate(entry)
    entries_service.delete_entry(db, entry)
    return {"ok": True, "mensaje": "La entrada ha sido eliminada correctamente.", "entrada": deleted}


@router.put("/{id}", summary="Edit an entry")
@handle_errors("Error al actualizar la entrada")
def update_entry(
    id: str,
    usuario: int = Depends(entry_token),
    body: dict = Depends(validate_dates("fecha_entrada", "fecha_salida")),
    db: Session = Depends(get_db),
):
    entry_id = parse_id(id)
    data = parse_body(VehicleEntryUpdate, body)
    entry = entries_service.get_entry(db, entry_id, lock=True)
    if entry is None:
        return {"id": entry_id, "mensaje": f"Entrada con id {entry_id} no se encuentra"}

    entries_service.update_entry(db, entry, data, usuario)
    return {"ok": True, "mensaje": f"Entrada {entry_id} modificada satisfactoriamente"}
