"""
Merchant store persistence and queries
"""
import logging
import math
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from merchant_store.core.config import settings
from merchant_store.core.exceptions import (
    ConflictException,
    InvalidRequestException,
    OperationNotAllowedException,
    ResourceNotFoundException,
)
from merchant_store.models.language import Language
from merchant_store.models.store import MerchantStore
from merchant_store.schemas.content import FileContentType, InputContentFile
from merchant_store.schemas.criteria import CriteriaOrderBy, MerchantStoreCriteria
from merchant_store.schemas.store import (
    PersistableMerchantStore,
    ReadableAddress,
    ReadableAudit,
    ReadableBrand,
    ReadableImage,
    ReadableMerchantStore,
    ReadableMerchantStoreList,
    SocialNetwork,
)
from merchant_store.services.content_service import ContentService
from merchant_store.services.language_service import LanguageService

logger = logging.getLogger(__name__)

# internal criteria field -> sortable column
ORDER_FIELDS = {
    "id": MerchantStore.id,
    "code": MerchantStore.code,
    "storename": MerchantStore.name,
    "auditSection.modifiedBy": MerchantStore.modified_by,
}


LIKE_ESCAPE = "\\"


def contains_pattern(term: str) -> str:
    """LIKE pattern matching term as a literal substring"""
    escaped = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
            .replace("%", LIKE_ESCAPE + "%")
            .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


class StoreService:
    def __init__(self, db: Session, language_service: LanguageService, content_service: ContentService):
        self.db = db
        self.language_service = language_service
        self.content_service = content_service

    # ==========================================
    # QUERIES
    # ==========================================

    def _get_entity(self, code: str) -> MerchantStore:
        store = self.db.query(MerchantStore).filter(MerchantStore.code == code).first()
        if not store:
            raise ResourceNotFoundException(f"Merchant store [{code}] not found")
        return store

    def get_by_code(self, code: str, lang: Optional[str] = None) -> ReadableMerchantStore:
        store = self._get_entity(code)
        language = self.language_service.to_language(lang) or store.default_language
        return self._to_readable(store, language)

    def exists_by_code(self, code: str) -> bool:
        if not code:
            return False
        return self.db.query(MerchantStore.id).filter(MerchantStore.code == code).first() is not None

    def get_by_criteria(
        self,
        criteria: MerchantStoreCriteria,
        draw: Optional[str],
        language: Language
    ) -> ReadableMerchantStoreList:
        query = self.db.query(MerchantStore)
        records_total = query.count()

        if criteria.search:
            pattern = contains_pattern(criteria.search)
            query = query.filter(or_(
                MerchantStore.code.ilike(pattern, escape=LIKE_ESCAPE),
                MerchantStore.name.ilike(pattern, escape=LIKE_ESCAPE)
            ))
        else:
            if criteria.code:
                query = query.filter(MerchantStore.code.ilike(contains_pattern(criteria.code), escape=LIKE_ESCAPE))
            if criteria.name:
                query = query.filter(MerchantStore.name.ilike(contains_pattern(criteria.name), escape=LIKE_ESCAPE))

        records_filtered = query.count()

        column = ORDER_FIELDS.get(criteria.criteria_order_by_field, MerchantStore.id)
        query = query.order_by(column.desc() if criteria.order_by == CriteriaOrderBy.DESC else column.asc())

        if criteria.start_index:
            query = query.offset(criteria.start_index)
        if criteria.max_count:
            query = query.limit(criteria.max_count)
            total_pages = math.ceil(records_filtered / criteria.max_count)
        else:
            total_pages = 1 if records_filtered else 0

        stores = query.all()

        return ReadableMerchantStoreList(
            data=[self._to_readable(store, language) for store in stores],
            records_total=records_total,
            records_filtered=records_filtered,
            total_pages=total_pages,
            number=len(stores),
            draw=draw
        )

    def get_brand(self, code: str) -> ReadableBrand:
        store = self._get_entity(code)
        return ReadableBrand(
            logo=self._logo(store),
            social_networks=[
                SocialNetwork(key=conf.key, value=conf.value)
                for conf in store.configurations
                if conf.type == "SOCIAL"
            ]
        )

    # ==========================================
    # MUTATIONS
    # ==========================================

    def create(self, store: PersistableMerchantStore) -> ReadableMerchantStore:
        if self.exists_by_code(store.code):
            raise ConflictException(f"Merchant store [{store.code}] already exists")

        entity = MerchantStore(code=store.code)
        self._populate(entity, store)
        self.db.add(entity)
        try:
            self.db.commit()
        except IntegrityError:
            # lost a race against a concurrent create of the same code
            self.db.rollback()
            raise ConflictException(f"Merchant store [{store.code}] already exists")
        self.db.refresh(entity)

        logger.info(f"[StoreService] Store created: {entity.code} (ID: {entity.id})")
        return self._to_readable(entity, entity.default_language)

    def update(self, store: PersistableMerchantStore, modified_by: Optional[str] = None) -> ReadableMerchantStore:
        entity = self._get_entity(store.code)
        self._populate(entity, store)
        entity.modified_by = modified_by
        entity.date_modified = datetime.now(timezone.utc)
        self.db.commit()
        self.db.refresh(entity)

        logger.info(f"[StoreService] Store updated: {entity.code} by {modified_by}")
        return self._to_readable(entity, entity.default_language)

    def add_store_logo(self, code: str, content_file: InputContentFile) -> None:
        store = self._get_entity(code)
        previous = store.store_logo

        file_name = self.content_service.add_file(code, content_file)
        if previous and previous != file_name:
            self.content_service.remove_file(code, FileContentType.LOGO, previous)

        store.store_logo = file_name
        self.db.commit()
        logger.info(f"[StoreService] Logo {file_name} set for store {code}")

    def delete_logo(self, code: str) -> None:
        store = self._get_entity(code)
        if not store.store_logo:
            return

        self.content_service.remove_file(code, FileContentType.LOGO, store.store_logo)
        store.store_logo = None
        self.db.commit()
        logger.info(f"[StoreService] Logo removed for store {code}")

    def delete(self, code: str) -> None:
        if code == settings.DEFAULT_STORE:
            raise OperationNotAllowedException("Cannot remove default store")

        store = self._get_entity(code)
        if store.children:
            raise OperationNotAllowedException(f"Merchant store [{code}] still has attached stores")

        self.db.delete(store)
        self.db.commit()
        self.content_service.remove_files(code)
        logger.info(f"[StoreService] Store deleted: {code}")

    # ==========================================
    # CONVERSION
    # ==========================================

    def _populate(self, entity: MerchantStore, store: PersistableMerchantStore) -> None:
        default_language = self.language_service.get_languages([store.default_language])[0]
        languages = self.language_service.get_languages(store.supported_languages)
        if default_language not in languages:
            languages.insert(0, default_language)

        parent = None
        if store.retailer_store:
            if store.retailer_store == store.code:
                raise InvalidRequestException("A store cannot be its own retailer")
            parent = self._get_entity(store.retailer_store)
            if not parent.retailer:
                raise InvalidRequestException(f"Merchant store [{parent.code}] is not a retailer")
            ancestor = parent.parent
            while ancestor is not None:
                if ancestor.code == store.code:
                    raise InvalidRequestException(
                        f"Merchant store [{store.retailer_store}] is attached to [{store.code}]"
                    )
                ancestor = ancestor.parent

        entity.name = store.name
        entity.phone = store.phone
        entity.email = store.email
        entity.address = store.address.address
        entity.city = store.address.city
        entity.postal_code = store.address.postal_code
        entity.state_province = store.address.state_province
        entity.country = store.address.country.upper()
        entity.currency = store.currency
        entity.currency_format_national = store.currency_format_national
        entity.weight_unit = store.weight or entity.weight_unit or "LB"
        entity.size_unit = store.dimension or entity.size_unit or "IN"
        entity.in_business_since = store.in_business_since
        entity.use_cache = store.use_cache
        entity.retailer = store.retailer
        entity.parent = parent
        entity.default_language = default_language
        entity.languages = languages

    def _logo(self, store: MerchantStore) -> Optional[ReadableImage]:
        if not store.store_logo:
            return None
        return ReadableImage(
            name=store.store_logo,
            path=self.content_service.public_path(store.code, FileContentType.LOGO, store.store_logo)
        )

    def _to_readable(self, store: MerchantStore, language: Optional[Language]) -> ReadableMerchantStore:
        return ReadableMerchantStore(
            id=store.id,
            code=store.code,
            name=store.name,
            phone=store.phone,
            email=store.email,
            address=ReadableAddress(
                address=store.address,
                city=store.city,
                postal_code=store.postal_code,
                state_province=store.state_province,
                country=store.country
            ),
            currency=store.currency,
            currency_format_national=bool(store.currency_format_national),
            weight=store.weight_unit,
            dimension=store.size_unit,
            in_business_since=store.in_business_since,
            use_cache=bool(store.use_cache),
            retailer=bool(store.retailer),
            parent=store.parent.code if store.parent else None,
            default_language=store.default_language.code,
            supported_languages=[lang.code for lang in store.languages],
            language=language.code if language else store.default_language.code,
            logo=self._logo(store),
            readable_audit=ReadableAudit(
                created=store.date_created,
                modified=store.date_modified,
                user=store.modified_by
            )
        )
