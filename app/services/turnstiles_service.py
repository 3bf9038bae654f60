# app/services/turnstiles_service.py
"""
Turnstile crossing queries (salidas_tornos).

Records carry the employee code only; the employee name comes from users
through codigo_empleado (LEFT JOIN for the daily board, INNER JOIN for
searches so orphan codes drop out).
"""

from datetime import date, datetime
from typing import Optional

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

from app.models.turnstile_record import TurnstileRecord
from app.models.user import User
from app.schemas.turnstile_record import TurnstileRecordWrite, TurnstileSearch
from app.services.externals_service import day_bounds
from app.utils.filters import contains, paginate
from app.utils.logger import get_logger

logger = get_logger(__name__)

_JOIN_ON = User.codigo_empleado == TurnstileRecord.codigo_empleado


def _with_name(rows) -> list[dict]:
    return [{"record": record, "nombre_persona": name} for record, name in rows]


def employee_exists(db: Session, codigo_empleado: str) -> bool:
    return db.query(User.id).filter(User.codigo_empleado == codigo_empleado).first() is not None


def list_day(db: Session, day: date, limit: int = 50, offset: int = 0) -> list[dict]:
    start, end = day_bounds(day)
    query = (
        db.query(TurnstileRecord, User.name.label("nombre_persona"))
        .outerjoin(User, _JOIN_ON)
        .filter(or_(
            and_(TurnstileRecord.fecha_salida >= start, TurnstileRecord.fecha_salida < end),
            and_(TurnstileRecord.fecha_entrada >= start, TurnstileRecord.fecha_entrada < end),
        ))
        .order_by(
            TurnstileRecord.fecha_salida.desc().nulls_last(),
            TurnstileRecord.fecha_entrada.desc().nulls_last(),
            TurnstileRecord.id.desc(),
        )
    )
    return _with_name(paginate(query, limit, offset).all())


def get_record(db: Session, record_id: int, lock: bool = False) -> Optional[TurnstileRecord]:
    query = db.query(TurnstileRecord).filter(TurnstileRecord.id == record_id)
    if lock:
        query = query.with_for_update()
    return query.first()


def create_record(db: Session, data: TurnstileRecordWrite, usuario: int) -> TurnstileRecord:
    record = TurnstileRecord(
        codigo_empleado=data.codigo_empleado,
        fecha_entrada=data.fecha_entrada,
        fecha_salida=data.fecha_salida,
        usuario=usuario,
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    logger.info(f"Turnstile record {record.id} created for employee {record.codigo_empleado}")
    return record


def update_record(db: Session, record: TurnstileRecord, data: TurnstileRecordWrite, usuario: int):
    """Only the columns present in the request body change."""
    if data.codigo_empleado:
        record.codigo_empleado = data.codigo_empleado
    if data.provided("fecha_entrada"):
        record.fecha_entrada = data.fecha_entrada
    if data.provided("fecha_salida"):
        record.fecha_salida = data.fecha_salida
    record.usuario = usuario
    db.commit()


def delete_record(db: Session, record: TurnstileRecord):
    db.delete(record)
    db.commit()


def search(db: Session, criteria: TurnstileSearch) -> list[dict]:
    start, end = criteria.fecha_inicio, criteria.fecha_fin

    query = db.query(TurnstileRecord, User.name.label("nombre_persona")).join(User, _JOIN_ON)
    query = contains(query, TurnstileRecord.codigo_empleado, criteria.codigo_empleado)
    if start and end:
        query = query.filter(or_(
            TurnstileRecord.fecha_entrada.between(start, end),
            TurnstileRecord.fecha_salida.between(start, end),
        ))
    elif start:
        query = query.filter(or_(TurnstileRecord.fecha_entrada >= start, TurnstileRecord.fecha_salida >= start))
    elif end:
        query = query.filter(or_(TurnstileRecord.fecha_entrada <= end, TurnstileRecord.fecha_salida <= end))

    query = query.order_by(
        TurnstileRecord.fecha_entrada.desc().nulls_last(),
        TurnstileRecord.fecha_salida.desc().nulls_last(),
        TurnstileRecord.id.desc(),
    )
    return _with_name(paginate(query, criteria.limit, criteria.offset).all())
