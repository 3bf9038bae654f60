# app/services/internals_service.py
"""Employee departure queries (salidas_empleados)."""

from datetime import date, datetime
from typing import Optional

from sqlalchemy.orm import Session

from app.models.employee_departure import EmployeeDeparture
from app.schemas.employee_departure import EmployeeDepartureCreate, EmployeeDepartureUpdate, EmployeeDepartureSearch
from app.services.externals_service import day_bounds
from app.utils.filters import contains, paginate
from app.utils.logger import get_logger

logger = get_logger(__name__)


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


def list_today(db: Session, today: Optional[date] = None) -> list[EmployeeDeparture]:
    start, end = day_bounds(today or date.today())
    return (
        db.query(EmployeeDeparture)
        .filter(EmployeeDeparture.fecha_salida >= start, EmployeeDeparture.fecha_salida < end)
        .order_by(EmployeeDeparture.fecha_salida.asc(), EmployeeDeparture.id.asc())
        .all()
    )


def get_departure(db: Session, departure_id: int, lock: bool = False) -> Optional[EmployeeDeparture]:
    query = db.query(EmployeeDeparture).filter(EmployeeDeparture.id == departure_id)
    if lock:
        query = query.with_for_update()
    return query.first()


def create_departure(db: Session, data: EmployeeDepartureCreate, usuario: int) -> EmployeeDeparture:
    departure = EmployeeDeparture(
        codigo_empleado=data.codigo_empleado,
        nombre_persona=data.nombre_persona,
        fecha_salida=data.fecha_salida,
        fecha_entrada=None,
        motivo=data.motivo,
        usuario=usuario,
    )
    db.add(departure)
    db.commit()
    db.refresh(departure)
    logger.info(f"Employee {departure.codigo_empleado} left at {departure.fecha_salida} (record {departure.id})")
    return departure


def register_return(db: Session, departure: EmployeeDeparture, fecha_entrada: Optional[datetime], usuario: int):
    departure.fecha_entrada = fecha_entrada
    departure.usuario = usuario
    db.commit()


def update_departure(db: Session, departure: EmployeeDeparture, data: EmployeeDepartureUpdate, usuario: int):
    departure.codigo_empleado = data.codigo_empleado
    departure.nombre_persona = data.nombre_persona
    departure.fecha_salida = data.fecha_salida
    departure.fecha_entrada = data.fecha_entrada
    departure.motivo = _blank_to_none(data.motivo)
    departure.usuario = usuario
    db.commit()


def delete_departure(db: Session, departure: EmployeeDeparture):
    db.delete(departure)
    db.commit()


def search(db: Session, criteria: EmployeeDepartureSearch, now: Optional[datetime] = None) -> list[EmployeeDeparture]:
    # Default upper bound is now truncated to the minute
    upper = criteria.fecha_entrada2 or (now or datetime.now()).replace(second=0, microsecond=0)

    query = db.query(EmployeeDeparture)
    query = contains(query, EmployeeDeparture.codigo_empleado, criteria.codigo_empleado)
    query = contains(query, EmployeeDeparture.nombre_persona, criteria.nombre_persona)
    query = contains(query, EmployeeDeparture.motivo, criteria.motivo)
    query = query.filter(EmployeeDeparture.fecha_salida.between(criteria.fecha_entrada, upper))
    query = query.order_by(EmployeeDeparture.fecha_salida.desc(), EmployeeDeparture.id.desc())
    return paginate(query, criteria.limit, criteria.offset).all()
