import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from stockbook.core.errors import DuplicateUser, UserNotFound, ValidationError
from stockbook.core.policy import ASSIGNABLE_ROLES, Identity, UserRole
from stockbook.core.security import hash_password
from stockbook.db.database import atomic
from stockbook.models.user import User
from stockbook.schemas.user import UserCreate, UserOut, UserUpdate

logger = logging.getLogger(__name__)


def get_user_by_username(db: Session, username: str) -> User | None:
    return db.scalar(select(User).where(User.username == username))


def add_user(db: Session, username: str, password: str, role: UserRole) -> UserOut:
    """Insert a user with a freshly hashed password. Usernames are case-sensitive."""
    try:
        with atomic(db):
            if get_user_by_username(db, username):
                raise DuplicateUser()
            user = User(username=username, password_hash=hash_password(password), role=role)
            db.add(user)
            db.flush()
            result = UserOut.model_validate(user)
    except IntegrityError as exc:
        raise DuplicateUser() from exc
    logger.info("user created id=%s username=%r role=%s", result.id, result.username, result.role.value)
    return result


def list_users(db: Session) -> list[UserOut]:
    users = db.scalars(select(User).order_by(User.id.asc())).all()
    return [UserOut.model_validate(user) for user in users]


def create_user(db: Session, payload: UserCreate) -> UserOut:
    if payload.role not in ASSIGNABLE_ROLES:
        raise ValidationError("Invalid role. Can only be Admin or Viewer.")
    return add_user(db, payload.username, payload.password, payload.role)


def update_user(db: Session, user_id: int, payload: UserUpdate) -> UserOut:
    try:
        with atomic(db):
            user = db.get(User, user_id)
            if not user:
                raise UserNotFound()
            clash = get_user_by_username(db, payload.username)
            if clash is not None and clash.id != user.id:
                raise DuplicateUser()
            user.username = payload.username
            user.role = payload.role
            if payload.password:
                user.password_hash = hash_password(payload.password)
            db.flush()
            result = UserOut.model_validate(user)
    except IntegrityError as exc:
        raise DuplicateUser() from exc
    logger.info("user updated id=%s role=%s password_changed=%s", user_id, result.role.value, bool(payload.password))
    return result


def delete_user(db: Session, user_id: int, actor: Identity) -> UserOut:
    if user_id == actor.id:
        raise ValidationError("You cannot delete your own account.")
    with atomic(db):
        user = db.get(User, user_id)
        if not user:
            raise UserNotFound()
        result = UserOut.model_validate(user)
        db.delete(user)
    logger.info("user deleted id=%s by=%s", user_id, actor.id)
    return result
