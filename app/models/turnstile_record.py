"""
Turnstile badge events (salidas_tornos).
Either timestamp, or both, may be present. codigo_empleado refers to
users.codigo_empleado but is not declared as a foreign key.
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime
from app.database import Base


class TurnstileRecord(Base):
    __tablename__ = "salidas_tornos"

    id = Column(Integer, primary_key=True, autoincrement=True)
    codigo_empleado = Column(String(50), nullable=False, index=True)
    fecha_entrada = Column(DateTime, index=True)
    fecha_salida = Column(DateTime, index=True)
    usuario = Column(Integer)
    date_creation = Column(DateTime, default=datetime.now)
    date_modification = Column(DateTime, onupdate=datetime.now)

    def __repr__(self):
        return f"<TurnstileRecord {self.id} code={self.codigo_empleado}>"
