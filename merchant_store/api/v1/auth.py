"""
Authentication endpoints
"""
import logging
from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from merchant_store.api.dependencies import get_user_service
from merchant_store.core.config import settings
from merchant_store.core.security import create_access_token
from merchant_store.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/private", tags=["auth"])


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    token: str
    id: int


@router.post("/login", response_model=TokenResponse)
def login(
    data: LoginRequest,
    user_service: UserService = Depends(get_user_service)
):
    """Exchange user credentials for a bearer token"""
    user = user_service.authenticate(data.username, data.password)

    if not user:
        logger.warning(f"[Auth] Failed login for {data.username}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Bad credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = create_access_token(
        user.username,
        store_code=user.store.code,
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    return TokenResponse(token=token, id=user.id)
