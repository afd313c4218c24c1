"""
Export all models
"""
from merchant_store.models.language import Language
from merchant_store.models.store import MerchantStore, StoreConfiguration
from merchant_store.models.user import User

__all__ = [
    "Language",
    "MerchantStore",
    "StoreConfiguration",
    "User"
]
