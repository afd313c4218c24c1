"""
Store user credentials and bearer tokens
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from merchant_store.core.config import settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(
    username: str,
    store_code: Optional[str] = None,
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Issue a bearer token for a store user

    Args:
        username: principal carried as the `sub` claim
        store_code: the user's merchant store, informational only
        expires_delta: lifetime, ACCESS_TOKEN_EXPIRE_MINUTES when omitted

    Returns:
        Signed JWT
    """
    lifetime = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    claims = {"sub": username, "exp": datetime.now(timezone.utc) + lifetime}
    if store_code:
        claims["store"] = store_code

    return jwt.encode(claims, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_principal(token: str) -> Optional[str]:
    """User name of a valid, unexpired token; None for anything else"""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        return None

    principal = payload.get("sub")
    if not isinstance(principal, str) or not principal:
        return None
    return principal
