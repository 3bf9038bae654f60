"""
Users table: operators of the gatehouse/warehouse client and employees.
codigo_empleado links a user to turnstile and departure records.
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Boolean
from app.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    email = Column(String(200), unique=True, nullable=False, index=True)
    password = Column(String(200), nullable=False)       # bcrypt hash
    online = Column(Boolean, default=False, nullable=False)
    type = Column(String(50), default="user", nullable=False)
    codigo_empleado = Column(String(50), index=True)
    date_creation = Column(DateTime, default=datetime.now)
    date_modification = Column(DateTime, onupdate=datetime.now)

    def __repr__(self):
        return f"<User {self.id} email={self.email} online={self.online}>"
