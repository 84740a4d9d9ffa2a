from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from stockbook.api.deps import get_settings
from stockbook.core.config import Settings
from stockbook.core.errors import Forbidden
from stockbook.db.database import get_db
from stockbook.schemas.auth import LoginRequest, LoginResponse, RegisterRequest
from stockbook.schemas.common import ApiResponse
from stockbook.schemas.user import UserOut
from stockbook.services import auth

router = APIRouter(prefix="/api", tags=["Authentication"])


@router.post("/login", response_model=LoginResponse)
def login(
    payload: LoginRequest,
    config: Settings = Depends(get_settings),
    db: Session = Depends(get_db),
):
    return auth.login(db, payload, config)


@router.post("/register", response_model=ApiResponse[UserOut], status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterRequest,
    config: Settings = Depends(get_settings),
    db: Session = Depends(get_db),
):
    # Open self-registration is a bootstrap convenience, off unless SETUP_MODE is set.
    if not config.setup_mode:
        raise Forbidden("Registration is disabled")
    return ApiResponse(data=auth.register(db, payload))
