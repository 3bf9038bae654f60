"""
Vehicle entries table (entradas_vehiculos).
A row is created on arrival with fecha_salida NULL; warehouse reception
flips recepcion, the gatehouse flips vigilancia and sets fecha_salida.
The two flips are independent of each other.
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Boolean, Text
from app.database import Base


class VehicleEntry(Base):
    __tablename__ = "entradas_vehiculos"

    id = Column(Integer, primary_key=True, autoincrement=True)
    nombre_conductor = Column(String(200), nullable=False)
    empresa = Column(String(200), nullable=False)
    matricula = Column(String(50), nullable=False, index=True)
    clase_carga = Column(String(100))
    fecha_entrada = Column(DateTime, nullable=False, index=True)
    fecha_salida = Column(DateTime)
    firma = Column(Text, nullable=False)                  # base64 signature image
    recepcion = Column(Boolean, default=False, nullable=False)   # received by warehouse
    vigilancia = Column(Boolean, default=False, nullable=False)  # cleared by security
    usuario = Column(Integer)                             # last modified by
    date_creation = Column(DateTime, default=datetime.now)
    date_modification = Column(DateTime, onupdate=datetime.now)

    def __repr__(self):
        return f"<VehicleEntry {self.id} plate={self.matricula} recepcion={self.recepcion} vigilancia={self.vigilancia}>"
