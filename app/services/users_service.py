# app/services/users_service.py
"""User accounts, password hashing and the online flag."""

from typing import Optional

from passlib.context import CryptContext
from sqlalchemy.orm import Session

from app.models.user import User
from app.schemas.user import UserCreate, UserUpdate
from app.utils.logger import get_logger

logger = get_logger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    try:
        return pwd_context.verify(password, hashed)
    except ValueError:
        # Stored value is not a recognizable bcrypt hash
        logger.warning("Password check against an unreadable hash")
        return False


def list_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.id).all()


def get_user(db: Session, user_id: int, lock: bool = False) -> Optional[User]:
    query = db.query(User).filter(User.id == user_id)
    if lock:
        query = query.with_for_update()
    return query.first()


def find_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def find_by_code(db: Session, codigo_empleado: Optional[str]) -> Optional[User]:
    if not codigo_empleado:
        return None
    return db.query(User).filter(User.codigo_empleado == codigo_empleado).order_by(User.id).first()


def email_owner(db: Session, email: str, exclude_id: int) -> Optional[User]:
    """Another user already registered with `email`, if any."""
    return db.query(User).filter(User.email == email, User.id != exclude_id).first()


def create_user(db: Session, data: UserCreate) -> User:
    user = User(
        name=data.name,
        email=data.email,
        password=hash_password(data.password),
        type=data.type or "user",
        codigo_empleado=data.codigo_empleado,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"User {user.id} created: {user.email}")
    return user


def update_user(db: Session, user: User, data: UserUpdate):
    user.name = data.name
    user.email = data.email
    user.password = hash_password(data.password)
    user.type = data.type or user.type
    user.codigo_empleado = data.codigo_empleado
    db.commit()


def delete_user(db: Session, user: User):
    db.delete(user)
    db.commit()


def set_online(db: Session, user_id: int, online: bool) -> Optional[User]:
    user = get_user(db, user_id)
    if user is None:
        logger.warning(f"Presence update for unknown user {user_id}")
        return None
    user.online = online
    db.commit()
    return user
