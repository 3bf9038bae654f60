# app/schemas/vehicle_entry.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

from app.schemas.base import RequestModel, Timestamp, Limit, Offset


class VehicleEntryOut(BaseModel):
    id: int
    nombre_conductor: str
    empresa: str
    matricula: str
    clase_carga: Optional[str]
    fecha_entrada: datetime
    fecha_salida: Optional[datetime]
    firma: str
    recepcion: bool
    vigilancia: bool
    usuario: Optional[int]
    date_creation: Optional[datetime]
    date_modification: Optional[datetime]

    class Config:
        from_attributes = True


class VehicleEntryCreated(BaseModel):
    """Shape returned right after creation (camelCase, as the client reads it)."""
    id: int
    nombre_conductor: str = Field(serialization_alias="nombreConductor")
    empresa: str
    matricula: str
    clase_carga: Optional[str] = Field(serialization_alias="claseCarga")
    fecha_entrada: datetime = Field(serialization_alias="fechaEntrada")
    firma: str

    class Config:
        from_attributes = True


class VehicleEntryCreate(RequestModel):
    required = ("nombre_conductor", "firma", "empresa", "matricula", "clase_carga", "fecha_entrada")
    blank_is_missing = False

    nombre_conductor: Optional[str] = None
    firma: Optional[str] = None
    empresa: Optional[str] = None
    matricula: Optional[str] = None
    clase_carga: Optional[str] = None
    fecha_entrada: Timestamp = None


class VehicleEntryUpdate(RequestModel):
    nombre_conductor: Optional[str] = None
    empresa: Optional[str] = None
    matricula: Optional[str] = None
    clase_carga: Optional[str] = None
    fecha_entrada: Timestamp = None
    fecha_salida: Timestamp = None


class ReceptionUpdate(RequestModel):
    required = ("id", "recepcion")

    id: Optional[int] = None
    recepcion: Optional[bool] = None


class GatehouseUpdate(RequestModel):
    required = ("id", "vigilancia", "fecha")

    id: Optional[int] = None
    vigilancia: Optional[bool] = None
    fecha: Timestamp = None


class VehicleEntrySearch(RequestModel):
    nombre_conductor: Optional[str] = None
    empresa: Optional[str] = None
    matricula: Optional[str] = None
    clase_carga: Optional[str] = None
    fecha_entrada1: Timestamp = None
    fecha_entrada2: Timestamp = None      # defaults to now
    limit: Limit = 100
    offset: Offset = 0
