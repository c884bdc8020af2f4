"""Authentication for journal owners: password hashing, TOTP, JWT bearer tokens.

Tokens carry the user's id as their subject, so renaming an account does not
invalidate its sessions.
"""

import logging
from datetime import datetime, timedelta, timezone

import bcrypt
from jose import JWTError, jwt
import pyotp
from sqlmodel import Session, select

from journal.config import settings
from journal.models.user import User

logger = logging.getLogger(__name__)

TOTP_ISSUER = "Trading Journal"


class AuthError(Exception):
    """Login rejected. The message is safe to show to the client."""


def hash_password(password: str) -> str:
    # bcrypt only looks at the first 72 bytes
    pw = password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw, bcrypt.gensalt()).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    pw = plain.encode("utf-8")[:72]
    return bcrypt.checkpw(pw, hashed.encode("utf-8"))


def verify_totp(secret: str, code: str) -> bool:
    return pyotp.TOTP(secret).verify(code, valid_window=1)


def generate_totp_secret() -> str:
    return pyotp.random_base32()


def get_totp_uri(secret: str, username: str) -> str:
    return pyotp.TOTP(secret).provisioning_uri(name=username, issuer_name=TOTP_ISSUER)


def authenticate_user(session: Session, username: str, password: str, totp_code: str) -> User:
    """Check password then TOTP and stamp ``last_login_at``.

    Unknown, inactive and wrong-password accounts all fail with the same
    message; only a bad second factor is reported separately.
    """
    user = session.exec(select(User).where(User.username == username)).first()
    if not user or not user.is_active or not verify_password(password, user.hashed_password):
        logger.warning(f"Failed login for {username!r}")
        raise AuthError("Invalid credentials")

    if not verify_totp(user.totp_secret, totp_code):
        logger.warning(f"Invalid TOTP code for user {user.id}")
        raise AuthError("Invalid TOTP code")

    user.last_login_at = datetime.now(timezone.utc)
    session.add(user)
    session.commit()
    session.refresh(user)
    logger.info(f"User {user.id} logged in")
    return user


def create_access_token(user_id: int, expires_minutes: int | None = None) -> str:
    minutes = expires_minutes if expires_minutes is not None else settings.jwt_expire_minutes
    expire = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    payload = {"sub": str(user_id), "exp": expire}
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> int | None:
    """Return the user id a token was issued for, or None if it is invalid or expired."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject.isdigit():
        return None
    return int(subject)
