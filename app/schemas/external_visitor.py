# app/schemas/external_visitor.py
"""
External visitor payloads.

The client sends these bodies in snake_case or camelCase depending on the
screen. ExternalVisitorRequest is the single alias map between the two so
controllers only ever see one set of names.
"""

from pydantic import AliasChoices, BaseModel, Field
from datetime import datetime
from typing import Optional

from app.schemas.base import RequestModel, Timestamp, Limit, Offset


def _alias(*names: str):
    return Field(default=None, validation_alias=AliasChoices(*names))


class ExternalVisitorOut(BaseModel):
    id: int
    nombre_persona: str
    empresa_exterior: str
    peticionario: Optional[str]
    telefono_persona: Optional[str]
    firma: Optional[str]
    fecha_entrada: datetime
    fecha_salida: Optional[datetime]
    nota: Optional[str]
    recepcion: bool
    usuario: Optional[int]
    date_creation: Optional[datetime]
    date_modification: Optional[datetime]

    class Config:
        from_attributes = True


class ExternalVisitorRequest(RequestModel):
    required = ("nombre_persona", "empresa_exterior", "peticionario", "telefono_persona", "firma", "fecha_entrada")

    nombre_persona: Optional[str] = _alias("nombre_persona", "nombrePersona")
    empresa_exterior: Optional[str] = _alias("empresa_exterior", "empresaExterior")
    peticionario: Optional[str] = _alias("peticionario")
    telefono_persona: Optional[str] = _alias("telefono_persona", "telefonoPersona")
    firma: Optional[str] = _alias("firma")
    nota: Optional[str] = _alias("nota")
    recepcion: Optional[bool] = _alias("recepcion")
    fecha_entrada: Timestamp = _alias("fecha_entrada", "fechaEntrada")
    # Exit time on updates, upper bound on searches
    fecha_salida: Timestamp = _alias("fecha_entrada2", "fechaEntrada2", "fecha_salida", "fechaSalida")
    limit: Limit = 100
    offset: Offset = 0


# Every body key the adapter reads a timestamp from
EXTERNAL_DATE_FIELDS = (
    "fecha_entrada", "fechaEntrada",
    "fecha_entrada2", "fechaEntrada2",
    "fecha_salida", "fechaSalida",
)


class ExternalGatehouseUpdate(RequestModel):
    id: Optional[int] = None
    recepcion: Optional[bool] = None
    fecha_salida: Timestamp = _alias("fechaSalida", "fecha_salida")
