"""
External visitors table (empresas_exteriores).
People from outside companies checking in at the gatehouse.
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Boolean, Text
from app.database import Base


class ExternalVisitor(Base):
    __tablename__ = "empresas_exteriores"

    id = Column(Integer, primary_key=True, autoincrement=True)
    nombre_persona = Column(String(200), nullable=False)
    empresa_exterior = Column(String(200), nullable=False)
    peticionario = Column(String(200))                    # employee who requested the visit
    telefono_persona = Column(String(50))
    firma = Column(Text)
    fecha_entrada = Column(DateTime, nullable=False, index=True)
    fecha_salida = Column(DateTime)
    nota = Column(Text)
    recepcion = Column(Boolean, default=False, nullable=False)
    usuario = Column(Integer)
    date_creation = Column(DateTime, default=datetime.now)
    date_modification = Column(DateTime, onupdate=datetime.now)

    def __repr__(self):
        return f"<ExternalVisitor {self.id} name={self.nombre_persona} company={self.empresa_exterior}>"
