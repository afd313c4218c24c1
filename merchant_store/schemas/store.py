# merchant_store/schemas/store.py
import base64
import binascii

from pydantic import BaseModel, Field, validator
from pydantic.alias_generators import to_camel
from typing import Optional, List
from datetime import date, datetime


class CamelModel(BaseModel):
    """Base schema exchanged as camelCase JSON"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


# ============================================
# INPUT
# ============================================

class PersistableAddress(CamelModel):
    address: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    state_province: Optional[str] = None
    country: str = Field(..., min_length=2, max_length=2)


class PersistableMerchantStore(CamelModel):
    code: str = Field(..., min_length=1, max_length=100, pattern=r"^[A-Za-z0-9_-]+$")
    name: str = Field(..., min_length=1, max_length=100)
    phone: Optional[str] = None
    email: str = Field(..., min_length=3, max_length=60)
    address: PersistableAddress
    default_language: str = Field(..., min_length=2, max_length=5)
    supported_languages: List[str] = []
    currency: str = Field(..., min_length=3, max_length=3)
    currency_format_national: bool = False
    weight: Optional[str] = None
    dimension: Optional[str] = None
    in_business_since: Optional[date] = None
    use_cache: bool = False
    retailer: bool = False
    retailer_store: Optional[str] = None

    @validator('name')
    def name_must_not_be_blank(cls, v):
        if not v.strip():
            raise ValueError('Store name must not be blank')
        return v.strip()

    @validator('email')
    def email_format(cls, v):
        if '@' not in v:
            raise ValueError('Invalid email address')
        return v

    @validator('currency')
    def currency_upper(cls, v):
        return v.upper()


class PersistableImage(CamelModel):
    name: str = Field(..., min_length=1)
    content_type: str
    content: bytes = Field(..., alias="bytes")

    @validator('content_type')
    def must_be_image(cls, v):
        if not v.startswith('image/'):
            raise ValueError('Content type must be an image type')
        return v

    @validator('content', pre=True)
    def decode_base64(cls, v):
        if isinstance(v, str):
            try:
                v = base64.b64decode(v, validate=True)
            except binascii.Error:
                raise ValueError('Image bytes must be base64 encoded')
        if not v:
            raise ValueError('Image bytes must not be empty')
        return v


# ============================================
# OUTPUT
# ============================================

class ReadableAddress(CamelModel):
    address: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    state_province: Optional[str] = None
    country: Optional[str] = None


class ReadableImage(CamelModel):
    name: str
    path: str


class ReadableAudit(CamelModel):
    created: Optional[datetime] = None
    modified: Optional[datetime] = None
    user: Optional[str] = None


class ReadableMerchantStore(CamelModel):
    id: int
    code: str
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    address: ReadableAddress
    currency: str
    currency_format_national: bool = False
    weight: Optional[str] = None
    dimension: Optional[str] = None
    in_business_since: Optional[date] = None
    use_cache: bool = False
    retailer: bool = False
    parent: Optional[str] = None
    default_language: Optional[str] = None
    supported_languages: List[str] = []
    language: Optional[str] = None
    logo: Optional[ReadableImage] = None
    readable_audit: ReadableAudit = Field(default_factory=ReadableAudit)


class ReadableMerchantStoreList(CamelModel):
    data: List[ReadableMerchantStore] = []
    records_total: int = 0
    records_filtered: int = 0
    total_pages: int = 0
    number: int = 0
    draw: Optional[str] = None


class SocialNetwork(CamelModel):
    key: str
    value: Optional[str] = None


class ReadableBrand(CamelModel):
    logo: Optional[ReadableImage] = None
    social_networks: List[SocialNetwork] = []


class EntityExists(CamelModel):
    exists: bool = False
