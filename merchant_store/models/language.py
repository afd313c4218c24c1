"""
Language model
"""
from sqlalchemy import Column, Integer, String
from merchant_store.core.database import Base


class Language(Base):
    __tablename__ = "languages"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(5), unique=True, index=True, nullable=False)
    sort_order = Column(Integer, default=0)
