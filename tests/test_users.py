# tests/test_users.py
"""API tests for login, sign-up, token renewal and user management."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from app.models.user import User
from app.services.users_service import verify_password
from app.utils.tokens import verify_token
from conftest import PASSWORD

NEW_USER = {"name": "Marta Ruiz", "email": "marta@empresa.es", "password": "clave-nueva"}


class TestLogin:
    def test_success(self, client, operator):
        response = client.post("/api/login", json={"email": operator.email, "password": PASSWORD})
        assert response.status_code == 200
        body = response.json()
        assert body["ok"] is True
        assert body["usuario"]["id"] == operator.id
        assert "password" not in body["usuario"]
        assert verify_token(body["token"]) == (True, operator.id)

    def test_wrong_password(self, client, operator):
        response = client.post("/api/login", json={"email": operator.email, "password": "otra"})
        assert response.status_code == 401
        assert response.json() == {"ok": False, "email": operator.email, "msg": "la contraseña no es válida"}

    def test_unknown_email(self, client):
        response = client.post("/api/login", json={"email": "nadie@empresa.es", "password": PASSWORD})
        assert response.status_code == 404
        assert response.json()["msg"] == "usuario con email nadie@empresa.es no se encuentra"

    def test_intranet_domain(self, client, make_user):
        user = make_user(name="Juan", email="juan@empresa.local")
        response = client.post("/api/login", json={"email": user.email, "password": PASSWORD})
        assert response.status_code == 200
        assert response.json()["usuario"]["id"] == user.id

    def test_invalid_fields(self, client):
        response = client.post("/api/login", json={"email": "no-es-email", "password": ""})
        assert response.status_code == 400
        errors = response.json()["errors"]
        assert errors["email"]["msg"] == "El email es obligatorio"
        assert errors["password"]["msg"] == "El password es obligatorio"


class TestSignup:
    def test_creates_and_logs_in(self, client, db_session):
        response = client.post("/api/login/new", json=NEW_USER)
        assert response.status_code == 200
        body = response.json()
        assert body["usuario"]["type"] == "user"
        assert body["usuario"]["online"] is False

        stored = db_session.query(User).filter(User.email == NEW_USER["email"]).one()
        assert stored.password != NEW_USER["password"]
        assert verify_password(NEW_USER["password"], stored.password)
        assert verify_token(body["token"]) == (True, stored.id)

    def test_duplicate_email(self, client, operator):
        response = client.post("/api/login/new", json={**NEW_USER, "email": operator.email})
        assert response.status_code == 400
        assert response.json() == {
            "ok": False,
            "email": operator.email,
            "msg": f"Usuario con email: {operator.email} ya existe no se puede insertar",
        }

    def test_missing_name(self, client):
        response = client.post("/api/login/new", json={**NEW_USER, "name": "  "})
        assert response.status_code == 400
        assert list(response.json()["errors"]) == ["name"]


class TestRenew:
    def test_renews(self, client, auth, operator):
        body = client.get("/api/login/renew", headers=auth).json()
        assert body["usuario"]["email"] == operator.email
        assert verify_token(body["token"]) == (True, operator.id)

    def test_no_token(self, client):
        response = client.get("/api/login/renew")
        assert response.status_code == 400
        assert response.json() == {"ok": False, "msg": "No hay token"}

    def test_bad_token(self, client):
        response = client.get("/api/login/renew", headers={"x-token": "basura"})
        assert response.status_code == 401
        assert response.json() == {"ok": False, "msg": "Token no válido"}


class TestUserManagement:
    def test_list(self, client, auth, make_user):
        make_user(name="Segundo", email="segundo@empresa.es")
        body = client.get("/api/users", headers=auth).json()
        assert [u["email"] for u in body["usuarios"]] == ["operador@empresa.es", "segundo@empresa.es"]
        assert all("password" not in u for u in body["usuarios"])

    def test_get(self, client, auth, operator):
        body = client.get(f"/api/users/{operator.id}", headers=auth).json()
        assert body["email"] == operator.email

    def test_get_missing(self, client, auth):
        body = client.get("/api/users/99", headers=auth).json()
        assert body == {"id": 99, "mensaje": "usuario con id 99 no se encuentra"}

    def test_update(self, client, operator, db_session):
        response = client.put(
            f"/api/users/{operator.id}",
            json={"name": "Operadora", "email": "operadora@empresa.es", "password": "nueva-clave"},
        )
        assert response.json() == {"ok": True, "mensaje": "Usuario actualizado correctamente"}

        db_session.expire_all()
        stored = db_session.get(User, operator.id)
        assert stored.name == "Operadora"
        assert stored.type == "user"
        assert verify_password("nueva-clave", stored.password)

    def test_update_email_taken(self, client, operator, make_user):
        other = make_user(name="Otro", email="otro@empresa.es")
        body = client.put(
            f"/api/users/{other.id}",
            json={"name": "Otro", "email": operator.email, "password": "x"},
        ).json()
        assert body == {
            "id": other.id,
            "mensaje": f"usuario con este email {operator.email} ya existe con id: {operator.id}",
        }

    def test_update_missing(self, client):
        body = client.put("/api/users/77", json=NEW_USER).json()
        assert body == {"id": 77, "mensaje": "usuario con id 77 no existe"}

    def test_delete(self, client, auth, make_user, db_session):
        other = make_user(name="Otro", email="otro@empresa.es")
        body = client.delete(f"/api/users/{other.id}", headers=auth).json()
        assert body == {"ok": True, "mensaje": f"Usuario {other.id} eliminado satisfactoriamente"}
        db_session.expire_all()
        assert db_session.get(User, other.id) is None

    def test_bad_id(self, client, auth):
        response = client.delete("/api/users/abc", headers=auth)
        assert response.status_code == 400
