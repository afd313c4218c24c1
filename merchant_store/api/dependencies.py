"""
Request-scoped dependencies: services and the authenticated principal
"""
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from merchant_store.core.database import get_db
from merchant_store.core.security import decode_principal
from merchant_store.services.content_service import ContentService
from merchant_store.services.language_service import LanguageService
from merchant_store.services.store_service import StoreService
from merchant_store.services.user_service import UserService

bearer_scheme = HTTPBearer(auto_error=False)


def get_language_service(db: Session = Depends(get_db)) -> LanguageService:
    return LanguageService(db)


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db)


def get_content_service() -> ContentService:
    return ContentService()


def get_store_service(
    db: Session = Depends(get_db),
    language_service: LanguageService = Depends(get_language_service),
    content_service: ContentService = Depends(get_content_service)
) -> StoreService:
    return StoreService(db, language_service, content_service)


def get_current_principal(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme)
) -> str:
    """User name carried by the bearer token; 401 when absent or invalid"""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None:
        raise credentials_exception

    principal = decode_principal(credentials.credentials)
    if principal is None:
        raise credentials_exception

    return principal
