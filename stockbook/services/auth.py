"""Credential checks, token issue and token validation.

Tokens are self-contained: validation never touches the database, so a
user's role change takes effect on their next login.
"""

import logging

from jose import JWTError
from sqlalchemy.orm import Session

from stockbook.core.config import Settings
from stockbook.core.errors import InvalidCredentials, InvalidToken, MalformedToken, MissingToken
from stockbook.core.policy import Identity, UserRole
from stockbook.core.security import create_access_token, decode_token, verify_password
from stockbook.schemas.auth import LoginRequest, LoginResponse, RegisterRequest
from stockbook.schemas.user import UserOut
from stockbook.services.users import add_user, get_user_by_username

auth_logger = logging.getLogger("stockbook.auth")


def login(db: Session, payload: LoginRequest, config: Settings) -> LoginResponse:
    user = get_user_by_username(db, payload.username)
    if not user or not verify_password(payload.password, user.password_hash):
        auth_logger.warning("login failed username=%r", payload.username)
        raise InvalidCredentials()
    identity = Identity(id=user.id, username=user.username, role=user.role)
    token = create_access_token(identity, config)
    auth_logger.info("login ok user_id=%s role=%s", user.id, user.role.value)
    return LoginResponse(token=token, user=UserOut.model_validate(user))


def register(db: Session, payload: RegisterRequest) -> UserOut:
    return add_user(db, payload.username, payload.password, payload.role)


def extract_bearer_token(authorization: str | None) -> str:
    if authorization is None or not authorization.strip():
        raise MissingToken()
    parts = authorization.strip().split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise MalformedToken()
    return parts[1]


def validate_token(authorization: str | None, config: Settings) -> Identity:
    token = extract_bearer_token(authorization)
    try:
        payload = decode_token(token, config)
    except JWTError as exc:
        auth_logger.warning("token rejected: %s", exc)
        raise InvalidToken() from exc

    if payload.get("type") != "access":
        raise InvalidToken()
    try:
        return Identity(
            id=int(payload["sub"]),
            username=str(payload["username"]),
            role=UserRole(payload["role"]),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise InvalidToken() from exc
