# app/services/entries_service.py
"""
Vehicle entry queries.

A vehicle counts as "inside" when it entered during the last 12 hours
(covers the current shift) or has no exit recorded yet.
"""

from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.models.vehicle_entry import VehicleEntry
from app.schemas.vehicle_entry import VehicleEntryCreate, VehicleEntryUpdate, VehicleEntrySearch
from app.utils.filters import contains, contains_or_null, paginate
from app.utils.logger import get_logger

logger = get_logger(__name__)

INSIDE_WINDOW = timedelta(hours=12)


def list_inside(db: Session, now: Optional[datetime] = None) -> list[VehicleEntry]:
    now = now or datetime.now()
    return (
        db.query(VehicleEntry)
        .filter(or_(VehicleEntry.fecha_entrada >= now - INSIDE_WINDOW, VehicleEntry.fecha_salida.is_(None)))
        .order_by(VehicleEntry.fecha_entrada.desc(), VehicleEntry.id.desc())
        .all()
    )


def list_pending_reception(db: Session) -> list[VehicleEntry]:
    """Warehouse queue: entries reception has not validated yet."""
    return (
        db.query(VehicleEntry)
        .filter(VehicleEntry.recepcion.is_(False))
        .order_by(VehicleEntry.fecha_entrada.asc(), VehicleEntry.id.asc())
        .all()
    )


def list_pending_gatehouse(db: Session) -> list[VehicleEntry]:
    """Validated by reception, still waiting for the gatehouse to let them out."""
    return (
        db.query(VehicleEntry)
        .filter(VehicleEntry.recepcion.is_(True), VehicleEntry.vigilancia.is_(False))
        .order_by(VehicleEntry.fecha_entrada.asc(), VehicleEntry.id.asc())
        .all()
    )


def get_entry(db: Session, entry_id: int, lock: bool = False) -> Optional[VehicleEntry]:
    query = db.query(VehicleEntry).filter(VehicleEntry.id == entry_id)
    if lock:
        query = query.with_for_update()
    return query.first()


def latest_by_plate(db: Session, plate: str) -> Optional[VehicleEntry]:
    return (
        db.query(VehicleEntry)
        .filter(VehicleEntry.matricula == plate.upper())
        .order_by(VehicleEntry.fecha_entrada.desc(), VehicleEntry.id.desc())
        .first()
    )


def create_entry(db: Session, data: VehicleEntryCreate, usuario: int) -> VehicleEntry:
    entry = VehicleEntry(
        nombre_conductor=data.nombre_conductor,
        empresa=data.empresa,
        matricula=data.matricula,
        clase_carga=data.clase_carga,
        fecha_entrada=data.fecha_entrada,
        firma=data.firma,
        usuario=usuario,
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    logger.info(f"Vehicle entry {entry.id} created: {entry.matricula} ({entry.empresa})")
    return entry


def set_reception(db: Session, entry: VehicleEntry, recepcion: bool, usuario: int):
    entry.recepcion = recepcion
    entry.usuario = usuario
    db.commit()


def set_gatehouse(db: Session, entry: VehicleEntry, vigilancia: bool, fecha: datetime, usuario: int):
    entry.vigilancia = vigilancia
    entry.fecha_salida = fecha
    entry.usuario = usuario
    db.commit()
    logger.info(f"Vehicle entry {entry.id} left at {fecha}")


def update_entry(db: Session, entry: VehicleEntry, data: VehicleEntryUpdate, usuario: int):
    entry.nombre_conductor = data.nombre_conductor
    entry.empresa = data.empresa
    entry.matricula = data.matricula
    entry.clase_carga = data.clase_carga
    entry.fecha_entrada = data.fecha_entrada
    entry.fecha_salida = data.fecha_salida
    entry.usuario = usuario
    db.commit()


def delete_entry(db: Session, entry: VehicleEntry):
    db.delete(entry)
    db.commit()


def search(db: Session, criteria: VehicleEntrySearch, now: Optional[datetime] = None) -> list[VehicleEntry]:
    upper = criteria.fecha_entrada2 or now or datetime.now()

    query = db.query(VehicleEntry)
    query = contains(query, VehicleEntry.nombre_conductor, criteria.nombre_conductor)
    query = contains(query, VehicleEntry.empresa, criteria.empresa)
    query = contains(query, VehicleEntry.matricula, criteria.matricula)
    query = contains_or_null(query, VehicleEntry.clase_carga, criteria.clase_carga)
    query = query.filter(VehicleEntry.fecha_entrada.between(criteria.fecha_entrada1, upper))
    query = query.order_by(VehicleEntry.fecha_entrada.desc(), VehicleEntry.id.desc())
    return paginate(query, criteria.limit, criteria.offset).all()
