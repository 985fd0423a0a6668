# gearguard/services/auth_service.py
import logging
import secrets
from datetime import timedelta
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from ..core.config import RESET_TOKEN_TTL_MINUTES
from ..core.db import utcnow
from ..core.security import hash_password, revoke_user_sessions, verify_password
from ..models import AppUser
from .email_service import send_password_reset_email
from .user_service import get_user_by_email, get_user_by_username

logger = logging.getLogger(__name__)

# Hangi kısmın yanlış olduğu söylenmez
INVALID_CREDENTIALS = "Invalid username or password"
INVALID_RESET_TOKEN = "Invalid or expired reset token"
FORGOT_PASSWORD_MESSAGE = "If an account with that email exists, a password reset link has been sent"


def authenticate(db: Session, *, username: str, password: str) -> AppUser:
    user = get_user_by_username(db, username)
    if (not user) or (not user.IsActive) or (not verify_password(password, user.HashedPassword)):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=INVALID_CREDENTIALS,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def new_reset_token() -> str:
    # 32 byte -> 64 hex karakter
    return secrets.token_hex(32)


def start_password_reset(db: Session, *, email: str) -> Optional[str]:
    """
    Token üretir, kullanıcıya yazar ve e-postayı gönderir.
    Kullanıcı yoksa sessizce None döner; cevap çağıranda her durumda aynıdır.
    """
    user = get_user_by_email(db, email)
    if not user or not user.IsActive:
        logger.info("password reset requested for unknown or inactive email")
        return None

    token = new_reset_token()
    user.ResetToken = token
    user.ResetTokenExpiry = utcnow() + timedelta(minutes=RESET_TOKEN_TTL_MINUTES)
    db.commit()

    send_password_reset_email(user.Email, token)
    return token


def reset_password(db: Session, *, token: str, new_password: str) -> AppUser:
    try:
        user = db.query(AppUser).filter(AppUser.ResetToken == token).first()
        if not user or not user.ResetTokenExpiry or user.ResetTokenExpiry <= utcnow():
            raise HTTPException(status_code=400, detail=INVALID_RESET_TOKEN)

        user.HashedPassword = hash_password(new_password)
        # tek kullanımlık
        user.ResetToken = None
        user.ResetTokenExpiry = None
        revoke_user_sessions(db, user.UserID)
        db.commit()
        db.refresh(user)
        return user
    except HTTPException:
        db.rollback()
        raise
    except Exception:
        db.rollback()
        logger.exception("reset_password failed")
        raise
