from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from stockbook.api.deps import require_super_admin
from stockbook.core.policy import Identity
from stockbook.db.database import get_db
from stockbook.schemas.common import ApiResponse
from stockbook.schemas.user import UserCreate, UserOut, UserUpdate
from stockbook.services import users

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get("", response_model=ApiResponse[list[UserOut]])
def list_users(
    _: Identity = Depends(require_super_admin),
    db: Session = Depends(get_db),
):
    return ApiResponse(data=users.list_users(db))


@router.post("", response_model=ApiResponse[UserOut], status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserCreate,
    _: Identity = Depends(require_super_admin),
    db: Session = Depends(get_db),
):
    return ApiResponse(data=users.create_user(db, payload))


@router.put("/{user_id}", response_model=ApiResponse[UserOut])
def update_user(
    user_id: int,
    payload: UserUpdate,
    _: Identity = Depends(require_super_admin),
    db: Session = Depends(get_db),
):
    return ApiResponse(data=users.update_user(db, user_id, payload))


@router.delete("/{user_id}", response_model=ApiResponse[UserOut])
def delete_user(
    user_id: int,
    current: Identity = Depends(require_super_admin),
    db: Session = Depends(get_db),
):
    return ApiResponse(msg="User deleted successfully", data=users.delete_user(db, user_id, current))
