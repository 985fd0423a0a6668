# gearguard/core/security.py
import logging
import secrets
from datetime import timedelta, timezone
from typing import Annotated, Optional

from fastapi import Depends, HTTPException, status, Request, Response
from fastapi.security.utils import get_authorization_scheme_param
from jose import jwt, JWTError
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from .config import (
    ALGORITHM, COOKIE_SECURE, SECRET_KEY, SESSION_COOKIE_NAME, SESSION_TTL_MINUTES,
)
from .db import get_db, utcnow
from ..models.session import UserSession
from ..models.user import AppUser

logger = logging.getLogger(__name__)

# Parola hash kalıbı
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


# ---- Parola yardımcıları ----
def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)

def hash_password(plain: str) -> str:
    return pwd_context.hash(plain)


# ---- Oturum (kalıcı store + imzalı JWT) ----
def create_session(db: Session, user: AppUser, ttl_minutes: Optional[int] = None) -> str:
    """
    UserSession satırı açar ve cookie/bearer olarak kullanılacak JWT'yi döner.
    Commit çağırana aittir.
    """
    sid = secrets.token_hex(32)
    expires = utcnow() + timedelta(minutes=ttl_minutes or SESSION_TTL_MINUTES)
    db.add(UserSession(SessionID=sid, UserID=user.UserID, ExpiresAt=expires))
    payload = {
        "sub": user.Username,
        "sid": sid,
        "role": user.Role,
        "exp": expires.replace(tzinfo=timezone.utc),
    }
    return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)

def revoke_session(db: Session, session_id: str) -> None:
    db.query(UserSession).filter(UserSession.SessionID == session_id).delete(synchronize_session=False)

def revoke_user_sessions(db: Session, user_id: int) -> None:
    db.query(UserSession).filter(UserSession.UserID == user_id).delete(synchronize_session=False)

def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        SESSION_COOKIE_NAME,
        token,
        max_age=SESSION_TTL_MINUTES * 60,
        httponly=True,
        secure=COOKIE_SECURE,
        samesite="lax",
    )

def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(SESSION_COOKIE_NAME, httponly=True, secure=COOKIE_SECURE, samesite="lax")


# ---- Token'ı cookie ya da Authorization başlığından çöz ----
def _extract_token(request: Request) -> Optional[str]:
    """
    Önce session cookie'ye bakar; yoksa 'Authorization' başlığını esnek parse eder:
      - Fazladan boşluklar: "Bearer   <JWT>"
      - Üst üste 'Bearer': "Bearer Bearer <JWT>"
      - Tırnaklı değer:    Authorization: "Bearer <JWT>"
    """
    cookie = request.cookies.get(SESSION_COOKIE_NAME)
    if cookie:
        return cookie.strip()

    auth = request.headers.get("Authorization")
    if not auth:
        return None

    auth = str(auth).strip().strip('"').strip("'")
    scheme, param = get_authorization_scheme_param(auth)
    if not scheme or scheme.lower() != "bearer":
        return None

    token = (param or "").strip()
    # "Bearer Bearer <JWT>" vakası
    if token.lower().startswith("bearer "):
        token = token.split(None, 1)[1].strip()
    # JWT içinde boşluk olmamalı
    token = token.replace(" ", "")
    return token or None


def _resolve_user(db: Session, token: str) -> Optional[tuple]:
    try:
        data = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None
    sid = data.get("sid")
    username = data.get("sub")
    if not sid or not username:
        return None

    sess = db.get(UserSession, sid)
    if not sess or sess.ExpiresAt <= utcnow():
        return None

    user = db.get(AppUser, sess.UserID)
    if not user or not user.IsActive or user.Username != username:
        return None
    return user, sess


# ---- Bağımlılıklar: handler'a kullanıcı ya da None enjekte edilir ----
def get_optional_user(request: Request, db: Session = Depends(get_db)) -> Optional[AppUser]:
    token = _extract_token(request)
    if not token:
        return None
    resolved = _resolve_user(db, token)
    if not resolved:
        return None
    user, sess = resolved
    request.state.session_id = sess.SessionID
    return user


def get_current_user(user: Optional[AppUser] = Depends(get_optional_user)) -> AppUser:
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


# ---- Rol kontrol bağımlılığı ----
def require_roles(*roles: str):
    UserDep = Annotated[AppUser, Depends(get_current_user)]
    def _dep(current: UserDep) -> AppUser:
        if current.Role not in roles:
            raise HTTPException(status_code=403, detail="You are not allowed to perform this action")
        return current
    return _dep
