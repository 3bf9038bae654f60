# app/schemas/user.py
from pydantic import BaseModel
from typing import Optional

from app.schemas.base import RequestModel


class UserOut(BaseModel):
    """Never carries the password hash."""
    id: int
    name: str
    email: str
    online: bool
    type: str
    codigo_empleado: Optional[str]

    class Config:
        from_attributes = True


class LoginRequest(RequestModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserCreate(RequestModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    type: Optional[str] = "user"
    codigo_empleado: Optional[str] = None


class UserUpdate(RequestModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    type: Optional[str] = None
    codigo_empleado: Optional[str] = None


class EmployeeCodeRequest(RequestModel):
    code: Optional[str] = None
