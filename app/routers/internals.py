# app/routers/internals.py
"""
Employee departures (salidas_empleados): staff leaving the site during the
shift, registered at the gatehouse with a reason and later closed when the
employee comes back.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.middlewares.request_body import json_body
from app.middlewares.validate_date import validate_dates
from app.middlewares.validate_jwt import require_token, internal_token
from app.schemas.employee_departure import (
    EmployeeDepartureOut, EmployeeDepartureCreate, EmployeeReturn,
    EmployeeDepartureUpdate, EmployeeDepartureSearch,
)
from app.schemas.user import UserOut, EmployeeCodeRequest
from app.services import internals_service, users_service
from app.utils.errors import NotFoundError, ValidationError, handle_errors, parse_body, parse_id

router = APIRouter()


def _listing(rows) -> dict:
    return {
        "ok": True,
        "cantidad": len(rows),
        "internas": [EmployeeDepartureOut.model_validate(row) for row in rows],
    }


@router.post("/new_Interna", summary="Register an employee departure")
@handle_errors("Error al crear interna", key="msg")
def create_departure(
    usuario: int = Depends(internal_token),
    body: dict = Depends(validate_dates("fechaSalida", "fecha_salida")),
    db: Session = Depends(get_db),
):
    data = parse_body(EmployeeDepartureCreate, body)
    if data.missing():
        raise ValidationError({"ok": False, "entrada": "datos empleado enviados nulos"})

    departure = internals_service.create_departure(db, data, usuario)
    return {"ok": True, "interna": departure.id}


@router.get("/internas_hoy", summary="Departures registered today")
@handle_errors("Error interno del servidor. Por favor, contacte al administrador.", key="msg")
def list_today(usuario: int = Depends(require_token), db: Session = Depends(get_db)):
    return _listing(internals_service.list_today(db))


@router.post("/code", summary="Look up an employee by code")
@handle_errors("Error al obtener código", key="msg")
def employee_by_code(
    usuario: int = Depends(require_token),
    body: dict = Depends(json_body),
    db: Session = Depends(get_db),
):
    code = parse_body(EmployeeCodeRequest, body).code
    employee = users_service.find_by_code(db, code)
    if employee is None:
        raise ValidationError({
            "ok": False,
            "codigo_empleado": code,
            "mensaje": f"empleado con codigo empleado {code} no se encuentra",
        })
    return {"usuario": UserOut.model_validate(employee)}


@router.put("/porteria", summary="Gatehouse registers the employee's return")
@handle_errors("Error al actualizar portería", key="msg")
def register_return(
    usuario: int = Depends(internal_token),
    body: dict = Depends(validate_dates("fechaEntrada", "fecha_entrada")),
    db: Session = Depends(get_db),
):
    data = parse_body(EmployeeReturn, body)
    departure = internals_service.get_departure(db, data.id, lock=True) if data.id else None
    if departure is None:
        raise NotFoundError({"ok": False, "msg": f"No se encontró interna con id {data.id}"})

    internals_service.register_return(db, departure, data.fecha_entrada, usuario)
    return {"ok": True, "mensaje": "Entrada empleado actualizada correctamente"}


@router.put("/buscar_interna", summary="Search departures")
@handle_errors("Error interno del servidor", key="msg")
def search_departures(
    usuario: int = Depends(require_token),
    body: dict = Depends(validate_dates("fecha_entrada", "fecha_entrada2")),
    db: Session = Depends(get_db),
):
    """fecha_entrada/fecha_entrada2 bound the departure time (fecha_salida)."""
    criteria = parse_body(EmployeeDepartureSearch, body)
    if criteria.fecha_entrada is None:
        raise ValidationError({"ok": False, "mensaje": "El campo fecha_entrada es obligatorio para la búsqueda."})
    return _listing(internals_service.search(db, criteria))


@router.delete("/interna/{id}", summary="Delete a departure")
@handle_errors("Error al eliminar interna", key="msg")
def delete_departure(id: str, usuario: int = Depends(internal_token), db: Session = Depends(get_db)):
    departure_id = parse_id(id)
    departure = internals_service.get_departure(db, departure_id, lock=True)
    if departure is None:
        return {"id": departure_id, "mensaje": f"Persona interna con id {departure_id} no se encuentra"}

    internals_service.delete_departure(db, departure)
    return {"ok": True, "mensaje": f"Salida empleado {departure_id} eliminada satisfactoriamente"}


@router.get("/{id}", summary="Get a departure")
@handle_errors("Error al obtener interna", key="msg")
def get_departure(id: str, usuario: int = Depends(require_token), db: Session = Depends(get_db)):
    departure_id = parse_id(id)
    departure = internals_service.get_departure(db, departure_id)
    if departure is None:
        return {"id": departure_id, "mensaje": f"empleado con id {departure_id} no se encuentra"}
    return {"ok": True, "interna": EmployeeDepartureOut.model_validate(departure)}


@router.put("/{id}", summary="Edit a departure")
@handle_errors("Error interno del servidor", key="msg")
def update_departure(
    id: str,
    usuario: int = Depends(internal_token),
    body: dict = Depends(validate_dates("fecha_entrada", "fecha_salida")),
    db: Session = Depends(get_db),
):
    departure_id = parse_id(id)
    data = parse_body(EmployeeDepartureUpdate, body)
    departure = internals_service.get_departure(db, departure_id, lock=True)
    if departure is None:
        raise NotFoundError({"ok": False, "mensaje": f"No existe registro con id {departure_id}"})

    internals_service.update_departure(db, departure, data, usuario)
    return {"ok": True, "mensaje": f"Registro {departure_id} modificado satisfactoriamente"}
