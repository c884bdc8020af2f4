"""Authentication API — login and the current account."""

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel
from sqlmodel import Session

from journal.database import get_session
from journal.models.user import User
from journal.services.auth import AuthError, authenticate_user, create_access_token
from journal.api.deps import get_current_user

router = APIRouter(prefix="/api/auth", tags=["auth"])


class LoginRequest(BaseModel):
    username: str
    password: str
    totp_code: str


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class AccountRead(BaseModel):
    id: int
    username: str
    trade_count: int
    last_login_at: datetime | None


@router.post("/login", response_model=LoginResponse)
def login(body: LoginRequest, session: Session = Depends(get_session)):
    try:
        user = authenticate_user(session, body.username, body.password, body.totp_code)
    except AuthError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    return LoginResponse(access_token=create_access_token(user.id))


@router.get("/me", response_model=AccountRead)
def me(user: User = Depends(get_current_user)):
    """The logged-in account and the size of its journal."""
    return AccountRead(
        id=user.id,
        username=user.username,
        trade_count=len(user.trades),
        last_login_at=user.last_login_at,
    )
