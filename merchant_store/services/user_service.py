import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from merchant_store.core.security import verify_password
from merchant_store.models.store import MerchantStore
from merchant_store.models.user import User

logger = logging.getLogger(__name__)

SUPERADMIN = "superadmin"


class UserService:
    def __init__(self, db: Session):
        self.db = db

    def get_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()

    def authenticate(self, username: str, password: str) -> Optional[User]:
        user = self.get_by_username(username)

        if not user or not user.active:
            return None

        if not verify_password(password, user.password_hash):
            return None

        user.last_access = datetime.now(timezone.utc)
        self.db.commit()
        return user

    def authorized_store(self, username: str, store_code: str) -> bool:
        """
        Whether a user may manage a given store.

        Superadmins manage every store, other users their own store, and the
        users of a retailer store also manage the stores attached to it.
        """
        user = self.get_by_username(username)
        if not user or not user.active:
            return False

        if user.role == SUPERADMIN:
            return True

        user_store = user.store
        if user_store.code == store_code:
            return True

        if user_store.retailer:
            target = self.db.query(MerchantStore).filter(MerchantStore.code == store_code).first()
            if target and target.parent_id == user_store.id:
                return True

        logger.debug(f"[UserService] {username} has no access to store {store_code}")
        return False
