"""
Employee departures table (salidas_empleados).
fecha_salida is set when the employee leaves mid-shift; fecha_entrada is
filled in later by the gatehouse when they come back.
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Text
from app.database import Base


class EmployeeDeparture(Base):
    __tablename__ = "salidas_empleados"

    id = Column(Integer, primary_key=True, autoincrement=True)
    codigo_empleado = Column(String(50), nullable=False, index=True)
    nombre_persona = Column(String(200), nullable=False)
    fecha_salida = Column(DateTime, index=True)
    fecha_entrada = Column(DateTime)
    motivo = Column(Text)
    usuario = Column(Integer)
    date_creation = Column(DateTime, default=datetime.now)
    date_modification = Column(DateTime, onupdate=datetime.now)

    def __repr__(self):
        return f"<EmployeeDeparture {self.id} code={self.codigo_empleado}>"
