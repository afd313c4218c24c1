"""
MerchantStore model
"""
from sqlalchemy import Column, Integer, String, Boolean, Date, DateTime, ForeignKey, Table
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from merchant_store.core.database import Base


store_languages = Table(
    "merchant_store_languages",
    Base.metadata,
    Column("merchant_store_id", Integer, ForeignKey("merchant_stores.id", ondelete="CASCADE"), primary_key=True),
    Column("language_id", Integer, ForeignKey("languages.id"), primary_key=True),
)


class MerchantStore(Base):
    __tablename__ = "merchant_stores"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(100), unique=True, index=True, nullable=False)
    name = Column(String(100), nullable=False, index=True)

    # Contact
    phone = Column(String(50), nullable=True)
    email = Column(String(60), nullable=False)

    # Address
    address = Column(String(255), nullable=True)
    city = Column(String(100), nullable=True)
    postal_code = Column(String(15), nullable=True)
    state_province = Column(String(100), nullable=True)
    country = Column(String(2), nullable=False)

    # Business settings
    currency = Column(String(3), nullable=False)
    currency_format_national = Column(Boolean, default=False)
    weight_unit = Column(String(5), default="LB")
    size_unit = Column(String(5), default="IN")
    in_business_since = Column(Date, nullable=True)
    use_cache = Column(Boolean, default=False)

    # Retailer hierarchy
    retailer = Column(Boolean, default=False)
    parent_id = Column(Integer, ForeignKey("merchant_stores.id"), nullable=True)

    # Languages
    default_language_id = Column(Integer, ForeignKey("languages.id"), nullable=False)

    # Branding
    store_logo = Column(String(100), nullable=True)  # logo file name

    # Audit
    date_created = Column(DateTime(timezone=True), server_default=func.now())
    date_modified = Column(DateTime(timezone=True), onupdate=func.now())
    modified_by = Column(String(60), nullable=True)

    # Relationships
    parent = relationship("MerchantStore", remote_side=[id], back_populates="children")
    children = relationship("MerchantStore", back_populates="parent")
    default_language = relationship("Language")
    languages = relationship("Language", secondary=store_languages, order_by="Language.sort_order")
    configurations = relationship("StoreConfiguration", back_populates="store", cascade="all, delete-orphan")
    users = relationship("User", back_populates="store", cascade="all, delete-orphan")


class StoreConfiguration(Base):
    __tablename__ = "merchant_configurations"

    id = Column(Integer, primary_key=True, index=True)
    merchant_store_id = Column(Integer, ForeignKey("merchant_stores.id"), nullable=False)
    key = Column(String(100), nullable=False)
    value = Column(String(500), nullable=True)
    type = Column(String(20), default="CONFIG")  # 'CONFIG', 'SOCIAL'

    store = relationship("MerchantStore", back_populates="configurations")
