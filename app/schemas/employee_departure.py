# app/schemas/employee_departure.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

from app.schemas.base import RequestModel, Timestamp, Limit, Offset


class EmployeeDepartureOut(BaseModel):
    id: int
    codigo_empleado: str
    nombre_persona: str
    fecha_salida: Optional[datetime]
    fecha_entrada: Optional[datetime]
    motivo: Optional[str]
    usuario: Optional[int]
    date_creation: Optional[datetime]
    date_modification: Optional[datetime]

    class Config:
        from_attributes = True


class EmployeeDepartureCreate(RequestModel):
    required = ("codigo_empleado", "nombre_persona", "fecha_salida")

    codigo_empleado: Optional[str] = Field(default=None, validation_alias="codigoEmpleado")
    nombre_persona: Optional[str] = Field(default=None, validation_alias="nombrePersona")
    fecha_salida: Timestamp = Field(default=None, validation_alias="fechaSalida")
    motivo: Optional[str] = None


class EmployeeReturn(RequestModel):
    """Gatehouse marks the employee back inside."""
    id: Optional[int] = None
    fecha_entrada: Timestamp = Field(default=None, validation_alias="fechaEntrada")


class EmployeeDepartureUpdate(RequestModel):
    codigo_empleado: Optional[str] = None
    nombre_persona: Optional[str] = None
    fecha_entrada: Timestamp = None
    fecha_salida: Timestamp = None
    motivo: Optional[str] = None


class EmployeeDepartureSearch(RequestModel):
    codigo_empleado: Optional[str] = None
    nombre_persona: Optional[str] = None
    motivo: Optional[str] = None
    fecha_entrada: Timestamp = None       # lower bound on fecha_salida
    fecha_entrada2: Timestamp = None      # upper bound, defaults to now
    limit: Limit = 100
    offset: Offset = 0
