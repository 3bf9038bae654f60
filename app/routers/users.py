# app/routers/users.py
"""
User accounts and login.

Login and sign-up answer with the user and a fresh token; renew swaps the
caller's still-valid token for a new one. The password hash never leaves
the server.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.middlewares.validate_fields import check, validate_fields
from app.middlewares.validate_jwt import require_token
from app.schemas.user import UserOut, LoginRequest, UserCreate, UserUpdate
from app.services import users_service
from app.utils.errors import AuthenticationError, ConflictError, NotFoundError, handle_errors, parse_body, parse_id
from app.utils.logger import get_logger
from app.utils.tokens import issue_token

logger = get_logger(__name__)

router = APIRouter()

NAME_RULE = check("name", "El nombre es obligatorio").not_empty()
EMAIL_RULE = check("email", "El email es obligatorio").is_email()
PASSWORD_RULE = check("password", "El password es obligatorio").not_empty()


def _session(user) -> dict:
    return {"ok": True, "usuario": UserOut.model_validate(user), "token": issue_token(user.id)}


@router.get("/users", summary="List users")
@handle_errors("Error al obtener usuarios", key="msg")
def list_users(usuario: int = Depends(require_token), db: Session = Depends(get_db)):
    users = users_service.list_users(db)
    return {"ok": True, "usuarios": [UserOut.model_validate(user) for user in users]}


@router.get("/users/{id}", summary="Get a user")
@handle_errors("Error al obtener usuario", key="msg")
def get_user(id: str, usuario: int = Depends(require_token), db: Session = Depends(get_db)):
    user_id = parse_id(id)
    user = users_service.get_user(db, user_id)
    if user is None:
        return {"id": user_id, "mensaje": f"usuario con id {user_id} no se encuentra"}
    return UserOut.model_validate(user)


@router.post("/login", summary="Log in with email and password")
@handle_errors("Hable con el administrador", key="msg")
def login(body: dict = Depends(validate_fields(EMAIL_RULE, PASSWORD_RULE)), db: Session = Depends(get_db)):
    data = parse_body(LoginRequest, body)
    user = users_service.find_by_email(db, data.email)
    if user is None:
        raise NotFoundError({"ok": False, "email": data.email, "msg": f"usuario con email {data.email} no se encuentra"})

    if not users_service.verify_password(data.password, user.password):
        logger.warning(f"Failed login for {data.email}")
        raise AuthenticationError({"ok": False, "email": data.email, "msg": "la contraseña no es válida"})

    logger.info(f"User {user.id} logged in")
    return _session(user)


@router.post("/login/new", summary="Create a user")
@handle_errors("Error al crear usuario", key="msg")
def create_user(
    body: dict = Depends(validate_fields(NAME_RULE, EMAIL_RULE, PASSWORD_RULE)),
    db: Session = Depends(get_db),
):
    data = parse_body(UserCreate, body)
    if users_service.find_by_email(db, data.email) is not None:
        raise ConflictError({
            "ok": False,
            "email": data.email,
            "msg": f"Usuario con email: {data.email} ya existe no se puede insertar",
        })

    user = users_service.create_user(db, data)
    return _session(user)


@router.get("/login/renew", summary="Renew the caller's token")
@handle_errors("Error al renovar token", key="msg")
def renew_token(usuario: int = Depends(require_token), db: Session = Depends(get_db)):
    user = users_service.get_user(db, usuario)
    if user is None:
        raise NotFoundError({"ok": False, "msg": "Usuario no encontrado"})
    return _session(user)


@router.put("/users/{id}", summary="Edit a user")
@handle_errors("Error al actualizar usuario", key="msg")
def update_user(
    id: str,
    body: dict = Depends(validate_fields(NAME_RULE, EMAIL_RULE, PASSWORD_RULE)),
    db: Session = Depends(get_db),
):
    user_id = parse_id(id)
    data = parse_body(UserUpdate, body)
    user = users_service.get_user(db, user_id, lock=True)
    if user is None:
        return {"id": user_id, "mensaje": f"usuario con id {user_id} no existe"}

    owner = users_service.email_owner(db, data.email, exclude_id=user_id)
    if owner is not None:
        return {"id": user_id, "mensaje": f"usuario con este email {data.email} ya existe con id: {owner.id}"}

    users_service.update_user(db, user, data)
    return {"ok": True, "mensaje": "Usuario actualizado correctamente"}


@router.delete("/users/{id}", summary="Delete a user")
@handle_errors("Error al eliminar usuario", key="msg")
def delete_user(id: str, usuario: int = Depends(require_token), db: Session = Depends(get_db)):
    user_id = parse_id(id)
    user = users_service.get_user(db, user_id, lock=True)
    if user is None:
        return {"id": user_id, "mensaje": f"usuario con id {user_id} no se encuentra"}

    users_service.delete_user(db, user)
    return {"ok": True, "mensaje": f"Usuario {user_id} eliminado satisfactoriamente"}
