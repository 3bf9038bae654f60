# app/routers/turnstiles.py
"""Turnstile crossings (salidas_tornos)."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.middlewares.request_body import json_body
from app.middlewares.validate_date import DATE_ERROR, validate_dates
from app.middlewares.validate_jwt import require_token, turnstile_token
from app.schemas.turnstile_record import TurnstileRecordOut, TurnstileRecordNamed, TurnstileRecordWrite, TurnstileSearch
from app.schemas.user import EmployeeCodeRequest
from app.services import turnstiles_service, users_service
from app.utils.errors import ConflictError, NotFoundError, ValidationError, handle_errors, parse_body, parse_id

router = APIRouter()

INVERTED_RECORD = "La fecha de entrada no puede ser posterior a la fecha de salida."


def _named(rows) -> list[TurnstileRecordNamed]:
    return [
        TurnstileRecordNamed.model_validate(row["record"]).model_copy(update={"nombre_persona": row["nombre_persona"]})
        for row in rows
    ]


def _check_order(fecha_entrada, fecha_salida):
    if fecha_entrada and fecha_salida and fecha_entrada > fecha_salida:
        raise ConflictError({"ok": False, "mensaje": INVERTED_RECORD})


def _not_found(record_id) -> NotFoundError:
    return NotFoundError({"ok": False, "mensaje": f"No se encontró un registro de torno con el id {record_id}."})


@router.post("/setTorno", status_code=201, summary="Register a turnstile crossing")
@handle_errors("Error inesperado al crear el registro.")
def create_record(
    usuario: int = Depends(turnstile_token),
    body: dict = Depends(validate_dates("fechaEntrada", "fechaSalida", "fecha_entrada", "fecha_salida")),
    db: Session = Depends(get_db),
):
    data = parse_body(TurnstileRecordWrite, body)
    if not data.codigo_empleado or (data.fecha_entrada is None and data.fecha_salida is None):
        raise ValidationError({
            "ok": False,
            "mensaje": "El código de empleado y al menos una fecha (entrada o salida) son obligatorios.",
        })
    _check_order(data.fecha_entrada, data.fecha_salida)

    if not turnstiles_service.employee_exists(db, data.codigo_empleado):
        raise NotFoundError({"ok": False, "mensaje": f"El código de empleado {data.codigo_empleado} no existe."})

    record = turnstiles_service.create_record(db, data, usuario)
    return {"ok": True, "torno_id": record.id, "mensaje": "Registro de torno creado correctamente"}


@router.get("/tornos_hoy", summary="Crossings of one day")
@handle_errors("Error interno del servidor.", key="msg")
def list_day(
    day: Optional[str] = Query(default=None, alias="date"),
    limit: int = Query(default=50, ge=0),
    offset: int = Query(default=0, ge=0),
    usuario: int = Depends(require_token),
    db: Session = Depends(get_db),
):
    """`date` is YYYY-MM-DD and defaults to today. Either timestamp inside the day counts."""
    try:
        target = date.fromisoformat(day) if day else date.today()
    except ValueError:
        raise ValidationError({"ok": False, "mensaje": DATE_ERROR.format(field="date")})

    rows = _named(turnstiles_service.list_day(db, target, limit, offset))
    return {"ok": True, "cantidad": len(rows), "tornos": rows}


@router.post("/code", summary="Employee name by code")
@handle_errors("Error interno del servidor. Contacte al administrador.", key="msg")
def employee_by_code(
    usuario: int = Depends(require_token),
    body: dict = Depends(json_body),
    db: Session = Depends(get_db),
):
    code = parse_body(EmployeeCodeRequest, body).code
    employee = users_service.find_by_code(db, code)
    if employee is None:
        raise NotFoundError({"ok": False, "msg": f"No se encontró un empleado con el código {code}"})
    return {"ok": True, "usuario": {"name": employee.name}}


@router.post("/consulta", summary="Search crossings")
@handle_errors("Error inesperado al realizar la consulta.")
def search_records(
    usuario: int = Depends(require_token),
    body: dict = Depends(validate_dates("fechaInicio", "fechaFin", "fecha_inicio", "fecha_fin")),
    db: Session = Depends(get_db),
):
    criteria = parse_body(TurnstileSearch, body)
    if criteria.fecha_inicio and criteria.fecha_fin and criteria.fecha_inicio > criteria.fecha_fin:
        raise ConflictError({"ok": False, "mensaje": "La fecha de inicio no puede ser posterior a la fecha de fin."})

    rows = _named(turnstiles_service.search(db, criteria))
    return {"ok": True, "cantidad": len(rows), "tornos": rows}


@router.get("/{id}", summary="Get a crossing")
@handle_errors("Error inesperado al obtener el registro del torno.")
def get_record(id: str, usuario: int = Depends(require_token), db: Session = Depends(get_db)):
    record_id = parse_id(id)
    record = turnstiles_service.get_record(db, record_id)
    if record is None:
        raise NotFoundError({"ok": False, "mensaje": f"No se encontró ningún registro de torno con el id {record_id}."})
    return {"ok": True, "torno": TurnstileRecordOut.model_validate(record)}


@router.delete("/{id}", summary="Delete a crossing")
@handle_errors("Error inesperado al eliminar el registro.")
def delete_record(id: str, usuario: int = Depends(require_token), db: Session = Depends(get_db)):
    record_id = parse_id(id)
    record = turnstiles_service.get_record(db, record_id, lock=True)
    if record is None:
        raise _not_found(record_id)

    turnstiles_service.delete_record(db, record)
    return {"ok": True, "mensaje": f"Registro de torno con id {record_id} eliminado satisfactoriamente."}


@router.put("/{id}", summary="Edit a crossing")
@handle_errors("Error inesperado al actualizar el registro.")
def update_record(
    id: str,
    usuario: int = Depends(turnstile_token),
    body: dict = Depends(validate_dates("fechaEntrada", "fechaSalida", "fecha_entrada", "fecha_salida")),
    db: Session = Depends(get_db),
):
    """Partial update: only the fields present in the body change."""
    record_id = parse_id(id)
    data = parse_body(TurnstileRecordWrite, body)
    if not data.codigo_empleado and not data.provided("fecha_entrada") and not data.provided("fecha_salida"):
        raise ValidationError({"ok": False, "mensaje": "Debe proporcionar al menos un campo para actualizar."})

    record = turnstiles_service.get_record(db, record_id, lock=True)
    if record is None:
        raise _not_found(record_id)

    _check_order(
        data.fecha_entrada if data.provided("fecha_entrada") else record.fecha_entrada,
        data.fecha_salida if data.provided("fecha_salida") else record.fecha_salida,
    )
    turnstiles_service.update_record(db, record, data, usuario)
    return {"ok": True, "mensaje": f"Registro de torno con id {record_id} actualizado correctamente."}
