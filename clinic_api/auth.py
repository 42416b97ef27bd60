import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .config import ACCESS_TOKEN_EXPIRE_MINUTES, JWT_ALGORITHM, SECRET_KEY
from .database import get_db
from .errors import AuthError, ForbiddenError
from .models import User
from .shared.soft_delete import active

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def create_access_token(
    user: User,
    expires_minutes: int = ACCESS_TOKEN_EXPIRE_MINUTES,
    secret_key: Optional[str] = None,
) -> str:
    """Issue a signed bearer token for a user (operators and tests)"""
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    to_encode = {"sub": str(user.id), "role": user.role, "exp": expire}
    return jwt.encode(to_encode, secret_key or SECRET_KEY, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    """
    Verify the token signature and expiry.

    Raises:
        AuthError: If the token is malformed, expired or has no subject
    """
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except JWTError as e:
        logger.warning(f"❌ Token verification failed: {e}")
        raise AuthError("Invalid or expired token") from e

    if not payload.get("sub"):
        logger.warning("❌ Token missing subject")
        raise AuthError("Invalid token")
    return payload


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Resolve the bearer token to an active user"""
    if credentials is None or not credentials.credentials:
        raise AuthError("Access denied: no token provided")

    payload = decode_access_token(credentials.credentials)
    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError) as e:
        raise AuthError("Invalid token subject") from e

    result = await db.execute(select(User).where(User.id == user_id, active(User)))
    user = result.scalar_one_or_none()
    if user is None:
        logger.warning(f"❌ Token for unknown or deleted user {user_id}")
        raise AuthError("User not found")

    logger.debug(f"✅ Authenticated user {user.id} ({user.role})")
    return user


def ensure_role(user: User, *roles: str) -> None:
    """Explicit capability check; no roles means any authenticated user"""
    if roles and user.role not in roles:
        logger.warning(f"🚫 Access denied: user {user.id} has role {user.role}, needs {roles}")
        raise ForbiddenError()


def require_roles(*roles: str):
    """
    Authorization policy as a dependency, evaluated before the endpoint runs.

    Usage:
        current_user: User = Depends(require_roles("admin"))
    """

    async def checker(current_user: User = Depends(get_current_user)) -> User:
        ensure_role(current_user, *roles)
        return current_user

    return checker
