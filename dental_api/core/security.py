"""
Password hashing, signed tokens and the FastAPI auth dependencies.

Three token scopes share one signing secret and are told apart by the
``scope`` claim: ``user`` (account login), ``admin`` (console login) and
``reservation`` (single-reservation patient capability).
"""
from __future__ import annotations

import secrets
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import anyio
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from dental_api.core.config import Settings
from dental_api.core.errors import ClinicError, ErrorKind
from dental_api.core.logging import get_logger

logger = get_logger(__name__)

USER_SCOPE = "user"
ADMIN_SCOPE = "admin"
RESERVATION_SCOPE = "reservation"

BCRYPT_ROUNDS = 10

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)

bearer_scheme = HTTPBearer(auto_error=False)


# ============================================================================
# PASSWORDS
# ============================================================================


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Slow adaptive comparison; a missing or malformed stored hash never matches."""
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError) as e:
        logger.warning("password_hash_unreadable", error=str(e))
        return False


# bcrypt is CPU bound; keep it off the event loop
async def hash_password_async(password: str) -> str:
    return await anyio.to_thread.run_sync(hash_password, password)


async def verify_password_async(plain_password: str, hashed_password: Optional[str]) -> bool:
    return await anyio.to_thread.run_sync(verify_password, plain_password, hashed_password)


def constant_time_equals(a: str, b: str) -> bool:
    return secrets.compare_digest(a.encode(), b.encode())


# ============================================================================
# TOKENS
# ============================================================================


@dataclass(frozen=True)
class TokenCheck:
    """Result of decoding a bearer token for one scope."""

    claims: Dict[str, Any] = field(default_factory=dict)
    failure: Optional[ErrorKind] = None

    @property
    def ok(self) -> bool:
        return self.failure is None


def create_token(
    data: Dict[str, Any],
    settings: Settings,
    *,
    scope: str,
    expires_delta: timedelta,
) -> str:
    to_encode = data.copy()
    to_encode.update({"scope": scope, "exp": datetime.now(timezone.utc) + expires_delta})
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: Optional[str], settings: Settings, *, scope: str) -> TokenCheck:
    """
    Missing or expired -> UNAUTHENTICATED; bad signature, bad shape or a
    token minted for another scope -> FORBIDDEN.
    """
    if not token:
        return TokenCheck(failure=ErrorKind.UNAUTHENTICATED)
    try:
        claims = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except ExpiredSignatureError:
        return TokenCheck(failure=ErrorKind.UNAUTHENTICATED)
    except JWTError as e:
        logger.warning("token_rejected", scope=scope, error=str(e))
        return TokenCheck(failure=ErrorKind.FORBIDDEN)
    if claims.get("scope") != scope:
        logger.warning("token_scope_mismatch", expected=scope, got=claims.get("scope"))
        return TokenCheck(failure=ErrorKind.FORBIDDEN)
    return TokenCheck(claims=claims)


def create_user_token(user_id: int, username: str, email: str, settings: Settings) -> str:
    return create_token(
        {"sub": str(user_id), "id": user_id, "username": username, "email": email},
        settings,
        scope=USER_SCOPE,
        expires_delta=timedelta(hours=settings.USER_TOKEN_TTL_HOURS),
    )


def create_admin_token(settings: Settings) -> str:
    return create_token(
        {"sub": "admin", "name": "admin"},
        settings,
        scope=ADMIN_SCOPE,
        expires_delta=timedelta(hours=settings.ADMIN_TOKEN_TTL_HOURS),
    )


# ============================================================================
# DEPENDENCIES
# ============================================================================


@dataclass(frozen=True)
class CurrentUser:
    id: int
    username: str
    email: str


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    return credentials.credentials if credentials else None


def _user_from_claims(claims: Dict[str, Any]) -> Optional[CurrentUser]:
    user_id = claims.get("id")
    if not isinstance(user_id, int):
        return None
    return CurrentUser(id=user_id, username=claims.get("username", ""), email=claims.get("email", ""))


def require_user(
    token: Optional[str] = Depends(get_bearer_token),
    settings: Settings = Depends(get_app_settings),
) -> CurrentUser:
    check = decode_token(token, settings, scope=USER_SCOPE)
    if not check.ok:
        raise ClinicError(check.failure)
    user = _user_from_claims(check.claims)
    if user is None:
        raise ClinicError(ErrorKind.FORBIDDEN, "Malformed user token")
    return user


def optional_user(
    token: Optional[str] = Depends(get_bearer_token),
    settings: Settings = Depends(get_app_settings),
) -> Optional[CurrentUser]:
    """Soft authentication: an absent or unusable token means anonymous."""
    if not token:
        return None
    check = decode_token(token, settings, scope=USER_SCOPE)
    if not check.ok:
        return None
    return _user_from_claims(check.claims)


def require_admin(
    token: Optional[str] = Depends(get_bearer_token),
    settings: Settings = Depends(get_app_settings),
) -> Dict[str, Any]:
    check = decode_token(token, settings, scope=ADMIN_SCOPE)
    if not check.ok:
        raise ClinicError(check.failure)
    return check.claims
