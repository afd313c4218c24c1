"""
Merchant store endpoints
"""
import io
import logging
from types import MappingProxyType
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status

from merchant_store.api.dependencies import (
    get_current_principal,
    get_language_service,
    get_store_service,
    get_user_service,
)
from merchant_store.core.exceptions import InvalidRequestException, UnauthorizedException
from merchant_store.schemas.content import FileContentType, InputContentFile
from merchant_store.schemas.criteria import MerchantStoreCriteria, build_request
from merchant_store.schemas.store import (
    EntityExists,
    PersistableImage,
    PersistableMerchantStore,
    ReadableBrand,
    ReadableMerchantStore,
    ReadableMerchantStoreList,
)
from merchant_store.services.language_service import LanguageService
from merchant_store.services.store_service import StoreService
from merchant_store.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter()

# external field name -> internal criteria field
MAPPING_FIELDS = MappingProxyType({
    "name": "storename",
    "readableAudit.user": "auditSection.modifiedBy",
})


def validate_user_permission(user_service: UserService, user_name: str, code: str) -> None:
    """The user doing the action must be attached to the store being handled"""
    if not user_service.authorized_store(user_name, code):
        logger.warning(f"[Stores] User {user_name} denied on store {code}")
        raise UnauthorizedException(user_name, code)


def create_input_content_file(image: PersistableImage) -> InputContentFile:
    return InputContentFile(
        file_name=image.name,
        mime_type=image.content_type,
        file_content_type=FileContentType.LOGO,
        file=io.BytesIO(image.content)
    )


def create_merchant_store_criteria(
    start: Optional[int],
    count: Optional[int],
    request: Request
) -> MerchantStoreCriteria:
    criteria = build_request(MAPPING_FIELDS, request.query_params)

    if start is not None:
        criteria.start_index = start
    if count is not None:
        criteria.max_count = count

    search = criteria.search
    if search and search.strip():
        criteria.code = search
        criteria.name = search
    return criteria


@router.get("/store/{store}", response_model=ReadableMerchantStore)
def get_store(
    store: str,
    lang: Optional[str] = None,
    store_service: StoreService = Depends(get_store_service)
):
    """Get merchant store"""
    return store_service.get_by_code(store, lang)


@router.post("/private/store", response_model=ReadableMerchantStore)
def create_store(
    store: PersistableMerchantStore,
    store_service: StoreService = Depends(get_store_service)
):
    """Creates a new store"""
    return store_service.create(store)


@router.put("/private/store/{code}", response_model=ReadableMerchantStore)
def update_store(
    code: str,
    store: PersistableMerchantStore,
    principal: str = Depends(get_current_principal),
    store_service: StoreService = Depends(get_store_service),
    user_service: UserService = Depends(get_user_service)
):
    """Updates a store"""
    if store.code != code:
        raise InvalidRequestException(f"Store code [{store.code}] does not match [{code}]")

    validate_user_permission(user_service, principal, code)
    return store_service.update(store, modified_by=principal)


@router.get("/private/store/{code}/marketing", response_model=ReadableBrand)
def get_store_marketing(
    code: str,
    principal: str = Depends(get_current_principal),
    store_service: StoreService = Depends(get_store_service),
    user_service: UserService = Depends(get_user_service)
):
    """Get store branding and marketing details"""
    validate_user_permission(user_service, principal, code)
    return store_service.get_brand(code)


@router.post("/private/store/{code}/marketing/logo", status_code=status.HTTP_201_CREATED)
def create_logo(
    code: str,
    image: PersistableImage,
    principal: str = Depends(get_current_principal),
    store_service: StoreService = Depends(get_store_service),
    user_service: UserService = Depends(get_user_service)
):
    """Adds or replaces the store logo"""
    validate_user_permission(user_service, principal, code)

    content_file = create_input_content_file(image)
    store_service.add_store_logo(code, content_file)
    return Response(status_code=status.HTTP_201_CREATED)


@router.delete("/private/store/{code}/marketing/logo")
def delete_store_logo(
    code: str,
    principal: str = Depends(get_current_principal),
    store_service: StoreService = Depends(get_store_service),
    user_service: UserService = Depends(get_user_service)
):
    """Delete store logo"""
    validate_user_permission(user_service, principal, code)

    store_service.delete_logo(code)
    return Response(status_code=status.HTTP_200_OK)


@router.get("/private/store/unique", response_model=EntityExists)
def exists(
    code: str = Query(...),
    store_service: StoreService = Depends(get_store_service)
):
    """Check if store code already exists"""
    return EntityExists(exists=store_service.exists_by_code(code))


@router.get("/private/stores", response_model=ReadableMerchantStoreList)
def list_stores(
    request: Request,
    start: Optional[int] = Query(None, ge=0),
    length: Optional[int] = Query(None, ge=0),
    code: Optional[str] = None,
    draw: Optional[str] = None,
    store_service: StoreService = Depends(get_store_service),
    language_service: LanguageService = Depends(get_language_service)
):
    """List stores, paginated"""
    criteria = create_merchant_store_criteria(start, length, request)
    return store_service.get_by_criteria(criteria, draw, language_service.default_language())


@router.delete("/private/store/{code}")
def delete_store(
    code: str,
    principal: str = Depends(get_current_principal),
    store_service: StoreService = Depends(get_store_service),
    user_service: UserService = Depends(get_user_service)
):
    """Deletes a store"""
    validate_user_permission(user_service, principal, code)

    store_service.delete(code)
    return Response(status_code=status.HTTP_200_OK)
