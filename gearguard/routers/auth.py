# gearguard/routers/auth.py
from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from ..core.db import get_db
from ..core.security import (
    clear_session_cookie, create_session, get_current_user, revoke_session, set_session_cookie,
)
from ..domain.constants import ROLE_EMPLOYEE
from ..models.user import AppUser
from ..schemas.user import (
    ForgotPasswordIn, MessageOut, ResetPasswordIn, Token, UserRead, UserRegister,
)
from ..services.auth_service import (
    FORGOT_PASSWORD_MESSAGE, authenticate, reset_password, start_password_reset,
)
from ..services.user_service import create_user

router = APIRouter(prefix="/auth", tags=["auth"])


def _login_response(db: Session, response: Response, user: AppUser) -> dict:
    token = create_session(db, user)
    db.commit()
    set_session_cookie(response, token)
    return {"access_token": token, "token_type": "bearer"}


# ---- Uçlar ----
@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
def register(payload: UserRegister, response: Response, db: Session = Depends(get_db)):
    # Kayıt olan herkes 'employee'; rolü sadece admin değiştirir
    user = create_user(
        db,
        username=payload.username,
        email=payload.email,
        password=payload.password,
        full_name=payload.full_name,
        role=ROLE_EMPLOYEE,
    )
    return _login_response(db, response, user)

@router.post("/login", response_model=Token)
def login(response: Response, form: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    user = authenticate(db, username=form.username, password=form.password)
    return _login_response(db, response, user)

@router.post("/logout", response_model=MessageOut)
def logout(
    request: Request,
    response: Response,
    current: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    sid = getattr(request.state, "session_id", None)
    if sid:
        revoke_session(db, sid)
        db.commit()
    clear_session_cookie(response)
    return {"message": "Logged out"}

@router.get("/me", response_model=UserRead)
def me(current: AppUser = Depends(get_current_user)):
    return current

@router.post("/forgot-password", response_model=MessageOut)
def forgot_password(payload: ForgotPasswordIn, db: Session = Depends(get_db)):
    # E-posta kayıtlı olsun olmasın aynı cevap
    start_password_reset(db, email=payload.email)
    return {"message": FORGOT_PASSWORD_MESSAGE}

@router.post("/reset-password", response_model=MessageOut)
def reset_password_ep(payload: ResetPasswordIn, db: Session = Depends(get_db)):
    reset_password(db, token=payload.token, new_password=payload.password)
    return {"message": "Password has been reset"}
