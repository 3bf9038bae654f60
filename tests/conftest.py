# tests/conftest.py
"""
Shared fixtures: an in-memory SQLite database swapped in through get_db,
a TestClient, and helpers to create users and tokens.
Settings are read at import time, so the environment is set first.
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_KEY"] = "clave-de-pruebas"
os.environ["RATE_LIMIT_MAX"] = "100000"
os.environ["CORS_ORIGIN"] = ""
os.environ["LOG_FILE"] = ""

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from app.database import build_engine, create_tables, get_db
from app.main import app, rate_limiter
from app.models.user import User
from app.models.vehicle_entry import VehicleEntry
from app.models.external_visitor import ExternalVisitor
from app.models.employee_departure import EmployeeDeparture
from app.models.turnstile_record import TurnstileRecord
from app.services.users_service import hash_password
from app.utils.tokens import issue_token

PASSWORD = "secreto123"


def minutes_ago(minutes: int) -> datetime:
    return datetime.now().replace(second=0, microsecond=0) - timedelta(minutes=minutes)


def fmt(value: datetime) -> str:
    return value.strftime("%Y-%m-%d %H:%M:%S")


@pytest.fixture()
def engine():
    engine = build_engine("sqlite://")
    create_tables(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def db_session(engine):
    Session = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = Session()
    yield session
    session.close()


@pytest.fixture()
def client(engine):
    TestingSession = sessionmaker(bind=engine, autocommit=False, autoflush=False)

    def override_get_db():
        db = TestingSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    rate_limiter.reset()
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def make_user(db_session):
    def _make(name="Operador", email="operador@empresa.es", password=PASSWORD, codigo_empleado=None, type="user"):
        user = User(
            name=name,
            email=email,
            password=hash_password(password),
            codigo_empleado=codigo_empleado,
            type=type,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _make


@pytest.fixture()
def operator(make_user):
    return make_user()


@pytest.fixture()
def auth(operator):
    return {"x-token": issue_token(operator.id)}


@pytest.fixture()
def add_entry(db_session):
    def _add(**fields):
        values = dict(
            nombre_conductor="Juan Pérez",
            empresa="Transportes Norte",
            matricula="1234ABC",
            clase_carga="Palets",
            fecha_entrada=datetime(2025, 3, 10, 8, 30),
            firma="data:image/png;base64,AAAA",
            usuario=1,
        )
        values.update(fields)
        entry = VehicleEntry(**values)
        db_session.add(entry)
        db_session.commit()
        db_session.refresh(entry)
        return entry
    return _add


@pytest.fixture()
def add_visitor(db_session):
    def _add(**fields):
        values = dict(
            nombre_persona="Ana López",
            empresa_exterior="Mantenimientos SL",
            peticionario="Carlos",
            telefono_persona="600111222",
            firma="firma",
            fecha_entrada=datetime(2025, 3, 10, 9, 0),
            nota="",
            usuario=1,
        )
        values.update(fields)
        visitor = ExternalVisitor(**values)
        db_session.add(visitor)
        db_session.commit()
        db_session.refresh(visitor)
        return visitor
    return _add


@pytest.fixture()
def add_departure(db_session):
    def _add(**fields):
        values = dict(
            codigo_empleado="E001",
            nombre_persona="Luis Martín",
            fecha_salida=datetime(2025, 3, 10, 11, 0),
            motivo="Médico",
            usuario=1,
        )
        values.update(fields)
        departure = EmployeeDeparture(**values)
        db_session.add(departure)
        db_session.commit()
        db_session.refresh(departure)
        return departure
    return _add


@pytest.fixture()
def add_crossing(db_session):
    def _add(**fields):
        values = dict(codigo_empleado="E001", fecha_entrada=datetime(2025, 3, 10, 7, 0), usuario=1)
        values.update(fields)
        record = TurnstileRecord(**values)
        db_session.add(record)
        db_session.commit()
        db_session.refresh(record)
        return record
    return _add
