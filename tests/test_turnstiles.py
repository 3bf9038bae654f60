# tests/test_turnstiles.py
"""API tests for turnstile crossings (/api/tornos)."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from datetime import datetime
from app.models.turnstile_record import TurnstileRecord
from conftest import minutes_ago

INVERTED = "La fecha de entrada no puede ser posterior a la fecha de salida."


@pytest.fixture()
def employee(make_user):
    return make_user(name="Luis Martín", email="luis@empresa.es", codigo_empleado="E001")


def fetch(db_session, record_id):
    db_session.expire_all()
    return db_session.query(TurnstileRecord).filter(TurnstileRecord.id == record_id).one()


class TestSetTorno:
    def test_creates(self, client, auth, employee, operator, db_session):
        response = client.post(
            "/api/tornos/setTorno",
            json={"codigoEmpleado": "E001", "fechaEntrada": "2025-03-10 07:00:00"},
            headers=auth,
        )
        assert response.status_code == 201
        body = response.json()
        assert body["ok"] is True
        assert body["mensaje"] == "Registro de torno creado correctamente"

        stored = fetch(db_session, body["torno_id"])
        assert stored.fecha_salida is None
        assert stored.usuario == operator.id

    def test_inverted_dates(self, client, auth, employee, db_session):
        response = client.post(
            "/api/tornos/setTorno",
            json={"codigoEmpleado": "E001", "fechaEntrada": "2025-03-10 18:00:00", "fechaSalida": "2025-03-10 07:00:00"},
            headers=auth,
        )
        assert response.status_code == 400
        assert response.json() == {"ok": False, "mensaje": INVERTED}
        assert db_session.query(TurnstileRecord).count() == 0

    def test_unknown_employee(self, client, auth):
        response = client.post(
            "/api/tornos/setTorno", json={"codigoEmpleado": "E999", "fechaSalida": "2025-03-10"}, headers=auth,
        )
        assert response.status_code == 404
        assert response.json() == {"ok": False, "mensaje": "El código de empleado E999 no existe."}

    def test_needs_code_and_a_date(self, client, auth, employee):
        response = client.post("/api/tornos/setTorno", json={"codigoEmpleado": "E001"}, headers=auth)
        assert response.status_code == 400

    @pytest.mark.parametrize("headers", [{}, {"x-token": "caducado"}])
    def test_token(self, client, headers):
        response = client.post(
            "/api/tornos/setTorno", json={"codigoEmpleado": "E001", "fechaSalida": "2025-03-10"}, headers=headers,
        )
        assert response.status_code == 401
        assert response.json() == {"ok": False, "mensaje": "Token no válido o expirado."}


class TestDayBoard:
    def test_joins_employee_name(self, client, auth, employee, add_crossing):
        known = add_crossing(fecha_entrada=datetime(2025, 3, 10, 7, 0))
        orphan = add_crossing(codigo_empleado="X9", fecha_entrada=None, fecha_salida=datetime(2025, 3, 10, 15, 0))
        add_crossing(fecha_entrada=datetime(2025, 3, 11, 7, 0))

        body = client.get("/api/tornos/tornos_hoy", params={"date": "2025-03-10"}, headers=auth).json()
        assert body["ok"] is True
        rows = {row["id"]: row for row in body["tornos"]}
        assert set(rows) == {known.id, orphan.id}
        assert rows[known.id]["nombre_persona"] == "Luis Martín"
        assert rows[orphan.id]["nombre_persona"] is None

    def test_defaults_to_today(self, client, auth, add_crossing):
        today = add_crossing(fecha_entrada=minutes_ago(0))
        add_crossing(fecha_entrada=datetime(2025, 1, 1, 7, 0))
        body = client.get("/api/tornos/tornos_hoy", headers=auth).json()
        assert [row["id"] for row in body["tornos"]] == [today.id]

    def test_pagination(self, client, auth, add_crossing):
        for hour in range(6, 11):
            add_crossing(fecha_entrada=datetime(2025, 3, 10, hour, 0))
        params = {"date": "2025-03-10", "limit": 2}
        first = client.get("/api/tornos/tornos_hoy", params={**params, "offset": 0}, headers=auth).json()["tornos"]
        second = client.get("/api/tornos/tornos_hoy", params={**params, "offset": 2}, headers=auth).json()["tornos"]
        assert len(first) == len(second) == 2
        assert not {r["id"] for r in first} & {r["id"] for r in second}

    def test_bad_date(self, client, auth):
        response = client.get("/api/tornos/tornos_hoy", params={"date": "10/03/2025"}, headers=auth)
        assert response.status_code == 400


class TestLookups:
    def test_get(self, client, auth, add_crossing):
        record = add_crossing()
        body = client.get(f"/api/tornos/{record.id}", headers=auth).json()
        assert body["torno"]["codigo_empleado"] == "E001"

    def test_get_missing(self, client, auth):
        response = client.get("/api/tornos/8", headers=auth)
        assert response.status_code == 404
        assert response.json() == {"ok": False, "mensaje": "No se encontró ningún registro de torno con el id 8."}

    def test_get_bad_id(self, client, auth):
        assert client.get("/api/tornos/ocho", headers=auth).status_code == 400

    def test_code(self, client, auth, employee):
        body = client.post("/api/tornos/code", json={"code": "E001"}, headers=auth).json()
        assert body == {"ok": True, "usuario": {"name": "Luis Martín"}}

    def test_code_missing(self, client, auth):
        response = client.post("/api/tornos/code", json={"code": "Z1"}, headers=auth)
        assert response.status_code == 404
        assert response.json() == {"ok": False, "msg": "No se encontró un empleado con el código Z1"}


class TestUpdate:
    def test_partial(self, client, auth, add_crossing, db_session):
        record = add_crossing()
        response = client.put(f"/api/tornos/{record.id}", json={"fechaSalida": "2025-03-10 15:00:00"}, headers=auth)
        assert response.json() == {"ok": True, "mensaje": f"Registro de torno con id {record.id} actualizado correctamente."}

        stored = fetch(db_session, record.id)
        assert stored.codigo_empleado == "E001"
        assert stored.fecha_entrada == datetime(2025, 3, 10, 7, 0)
        assert stored.fecha_salida == datetime(2025, 3, 10, 15, 0)

    def test_explicit_null_clears(self, client, auth, add_crossing, db_session):
        record = add_crossing(fecha_salida=datetime(2025, 3, 10, 15, 0))
        client.put(f"/api/tornos/{record.id}", json={"fechaSalida": None}, headers=auth)
        assert fetch(db_session, record.id).fecha_salida is None

    def test_nothing_to_update(self, client, auth, add_crossing):
        record = add_crossing()
        response = client.put(f"/api/tornos/{record.id}", json={}, headers=auth)
        assert response.status_code == 400
        assert response.json() == {"ok": False, "mensaje": "Debe proporcionar al menos un campo para actualizar."}

    def test_would_invert(self, client, auth, add_crossing):
        record = add_crossing(fecha_entrada=datetime(2025, 3, 10, 7, 0))
        response = client.put(f"/api/tornos/{record.id}", json={"fechaSalida": "2025-03-10 06:00:00"}, headers=auth)
        assert response.status_code == 400
        assert response.json()["mensaje"] == INVERTED

    def test_missing(self, client, auth):
        response = client.put("/api/tornos/66", json={"codigoEmpleado": "E1"}, headers=auth)
        assert response.status_code == 404

    def test_delete(self, client, auth, add_crossing, db_session):
        record = add_crossing()
        body = client.delete(f"/api/tornos/{record.id}", headers=auth).json()
        assert body["ok"] is True
        db_session.expire_all()
        assert db_session.query(TurnstileRecord).count() == 0

    def test_delete_missing(self, client, auth):
        response = client.delete("/api/tornos/3", headers=auth)
        assert response.status_code == 404
        assert response.json() == {"ok": False, "mensaje": "No se encontró un registro de torno con el id 3."}


class TestConsulta:
    def test_inverted_range(self, client, auth):
        response = client.post(
            "/api/tornos/consulta", json={"fechaInicio": "2025-03-10", "fechaFin": "2025-03-01"}, headers=auth,
        )
        assert response.status_code == 400
        assert response.json() == {"ok": False, "mensaje": "La fecha de inicio no puede ser posterior a la fecha de fin."}

    def test_inner_join_and_range(self, client, auth, employee, add_crossing):
        inside = add_crossing(fecha_entrada=datetime(2025, 3, 5, 7, 0))
        add_crossing(fecha_entrada=datetime(2025, 4, 5, 7, 0))
        add_crossing(codigo_empleado="E009", fecha_entrada=datetime(2025, 3, 5, 8, 0))

        body = client.post(
            "/api/tornos/consulta",
            json={"codigoEmpleado": "e00", "fechaInicio": "2025-03-01", "fechaFin": "2025-03-31"},
            headers=auth,
        ).json()
        assert body["cantidad"] == 1
        assert body["tornos"][0]["id"] == inside.id
        assert body["tornos"][0]["nombre_persona"] == "Luis Martín"

    def test_open_ended(self, client, auth, employee, add_crossing):
        add_crossing(fecha_entrada=datetime(2025, 3, 5, 7, 0))
        later = add_crossing(fecha_entrada=datetime(2025, 4, 5, 7, 0))
        body = client.post("/api/tornos/consulta", json={"fechaInicio": "2025-04-01"}, headers=auth).json()
        assert [row["id"] for row in body["tornos"]] == [later.id]
