"""
User model
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from merchant_store.core.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    email = Column(String(200), nullable=True)

    # Store the user belongs to
    merchant_store_id = Column(Integer, ForeignKey("merchant_stores.id"), nullable=False)

    # Role
    role = Column(String(20), default="admin")  # 'superadmin', 'admin', 'retail_admin', 'editor'

    # Login tracking
    last_access = Column(DateTime(timezone=True), nullable=True)

    # Status
    active = Column(Boolean, default=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    store = relationship("MerchantStore", back_populates="users")
