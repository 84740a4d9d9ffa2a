from datetime import datetime, timedelta, timezone

from jose import jwt
from passlib.context import CryptContext

from stockbook.core.config import Settings, settings
from stockbook.core.policy import Identity

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    try:
        return pwd_context.verify(plain_password, password_hash)
    except ValueError:
        # Unrecognised hash format.
        return False


def create_access_token(
    identity: Identity,
    config: Settings = settings,
    expires_delta: timedelta | None = None,
) -> str:
    issued_at = datetime.now(timezone.utc)
    expires_at = issued_at + (expires_delta or timedelta(minutes=config.access_token_expire_minutes))
    payload = {
        "sub": str(identity.id),
        "username": identity.username,
        "role": identity.role.value,
        "type": "access",
        "iss": config.issuer,
        "iat": issued_at,
        "exp": expires_at,
    }
    return jwt.encode(payload, config.secret_key, algorithm=config.algorithm)


def decode_token(token: str, config: Settings = settings) -> dict:
    return jwt.decode(token, config.secret_key, algorithms=[config.algorithm], issuer=config.issuer)
