# app/services/externals_service.py
"""External visitor (contractor, supplier) queries."""

from datetime import date, datetime, time, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from app.models.external_visitor import ExternalVisitor
from app.schemas.external_visitor import ExternalVisitorRequest
from app.utils.filters import contains, paginate
from app.utils.logger import get_logger

logger = get_logger(__name__)


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """[start, next day start) of a local calendar day."""
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


def list_today(db: Session, today: Optional[date] = None) -> list[ExternalVisitor]:
    start, end = day_bounds(today or date.today())
    return (
        db.query(ExternalVisitor)
        .filter(ExternalVisitor.fecha_entrada >= start, ExternalVisitor.fecha_entrada < end)
        .order_by(ExternalVisitor.fecha_entrada.asc(), ExternalVisitor.id.asc())
        .all()
    )


def list_pending_gatehouse(db: Session) -> list[ExternalVisitor]:
    return (
        db.query(ExternalVisitor)
        .filter(ExternalVisitor.recepcion.is_(False))
        .order_by(ExternalVisitor.fecha_entrada.asc(), ExternalVisitor.id.asc())
        .all()
    )


def get_visitor(db: Session, visitor_id: int, lock: bool = False) -> Optional[ExternalVisitor]:
    query = db.query(ExternalVisitor).filter(ExternalVisitor.id == visitor_id)
    if lock:
        query = query.with_for_update()
    return query.first()


def latest_by_name(db: Session, name: str) -> Optional[ExternalVisitor]:
    return (
        db.query(ExternalVisitor)
        .filter(ExternalVisitor.nombre_persona.ilike(f"%{name}%"))
        .order_by(ExternalVisitor.fecha_entrada.desc(), ExternalVisitor.id.desc())
        .first()
    )


def create_visitor(db: Session, data: ExternalVisitorRequest, usuario: int) -> ExternalVisitor:
    visitor = ExternalVisitor(
        nombre_persona=data.nombre_persona,
        empresa_exterior=data.empresa_exterior,
        peticionario=data.peticionario,
        telefono_persona=data.telefono_persona,
        firma=data.firma,
        fecha_entrada=data.fecha_entrada,
        fecha_salida=None,
        nota=data.nota or "",
        usuario=usuario,
    )
    db.add(visitor)
    db.commit()
    db.refresh(visitor)
    logger.info(f"External visitor {visitor.id} registered: {visitor.nombre_persona} ({visitor.empresa_exterior})")
    return visitor


def set_gatehouse(db: Session, visitor: ExternalVisitor, recepcion: bool, fecha_salida: Optional[datetime], usuario: int):
    visitor.recepcion = recepcion
    visitor.fecha_salida = fecha_salida
    visitor.usuario = usuario
    db.commit()
    db.refresh(visitor)


def update_visitor(db: Session, visitor: ExternalVisitor, data: ExternalVisitorRequest, usuario: int):
    visitor.nombre_persona = data.nombre_persona
    visitor.empresa_exterior = data.empresa_exterior
    visitor.peticionario = data.peticionario or ""
    visitor.telefono_persona = data.telefono_persona or ""
    visitor.fecha_entrada = data.fecha_entrada
    visitor.nota = data.nota or ""
    visitor.fecha_salida = data.fecha_salida
    visitor.recepcion = bool(data.recepcion)
    visitor.usuario = usuario
    db.commit()


def delete_visitor(db: Session, visitor: ExternalVisitor):
    db.delete(visitor)
    db.commit()


def search(db: Session, criteria: ExternalVisitorRequest, now: Optional[datetime] = None) -> list[ExternalVisitor]:
    upper = criteria.fecha_salida or now or datetime.now()

    query = db.query(ExternalVisitor)
    query = contains(query, ExternalVisitor.nombre_persona, criteria.nombre_persona)
    query = contains(query, ExternalVisitor.empresa_exterior, criteria.empresa_exterior)
    query = contains(query, ExternalVisitor.peticionario, criteria.peticionario)
    query = contains(query, ExternalVisitor.telefono_persona, criteria.telefono_persona)
    query = query.filter(ExternalVisitor.fecha_entrada.between(criteria.fecha_entrada, upper))
    query = query.order_by(ExternalVisitor.fecha_entrada.desc(), ExternalVisitor.id.desc())
    return paginate(query, criteria.limit, criteria.offset).all()
