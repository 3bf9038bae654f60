# app/schemas/turnstile_record.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

from app.schemas.base import RequestModel, Timestamp, Limit, Offset


class TurnstileRecordOut(BaseModel):
    id: int
    codigo_empleado: str
    fecha_entrada: Optional[datetime]
    fecha_salida: Optional[datetime]
    usuario: Optional[int]
    date_creation: Optional[datetime]
    date_modification: Optional[datetime]

    class Config:
        from_attributes = True


class TurnstileRecordNamed(TurnstileRecordOut):
    nombre_persona: Optional[str] = None


class TurnstileRecordWrite(RequestModel):
    """Body of setTorno and of the partial update."""
    codigo_empleado: Optional[str] = Field(default=None, validation_alias="codigoEmpleado")
    fecha_entrada: Timestamp = Field(default=None, validation_alias="fechaEntrada")
    fecha_salida: Timestamp = Field(default=None, validation_alias="fechaSalida")


class TurnstileSearch(RequestModel):
    codigo_empleado: Optional[str] = Field(default=None, validation_alias="codigoEmpleado")
    fecha_inicio: Timestamp = Field(default=None, validation_alias="fechaInicio")
    fecha_fin: Timestamp = Field(default=None, validation_alias="fechaFin")
    limit: Limit = 100
    offset: Offset = 0
