import logging

from sqlalchemy.orm import Session

from merchant_store.core.config import settings
from merchant_store.core.database import Base, SessionLocal, engine
from merchant_store.core.security import hash_password
from merchant_store.models import Language, MerchantStore, User

logger = logging.getLogger(__name__)

LANGUAGES = ["en", "fr"]


def seed_database(db: Session) -> None:
    """Reference languages, the default store and its superadmin"""
    for index, code in enumerate(LANGUAGES):
        if not db.query(Language).filter(Language.code == code).first():
            db.add(Language(code=code, sort_order=index))
    db.flush()

    default_language = db.query(Language).filter(Language.code == settings.DEFAULT_LANGUAGE).first()
    if default_language is None:
        default_language = db.query(Language).order_by(Language.sort_order).first()

    store = db.query(MerchantStore).filter(MerchantStore.code == settings.DEFAULT_STORE).first()
    if not store:
        store = MerchantStore(
            code=settings.DEFAULT_STORE,
            name="Default store",
            email="admin@example.com",
            country="CA",
            currency="CAD",
            retailer=True,
            default_language=default_language,
            languages=[default_language],
        )
        db.add(store)
        db.flush()
        logger.info(f"Seeded store {store.code}")

    if not db.query(User).filter(User.username == settings.ADMIN_USERNAME).first():
        db.add(User(
            username=settings.ADMIN_USERNAME,
            password_hash=hash_password(settings.ADMIN_PASSWORD),
            first_name="Admin",
            last_name="Admin",
            email=settings.ADMIN_USERNAME,
            role="superadmin",
            store=store,
        ))
        logger.info(f"Seeded superadmin {settings.ADMIN_USERNAME}")

    db.commit()


def seed():
    db = SessionLocal()
    try:
        seed_database(db)
    finally:
        db.close()


def init():
    Base.metadata.create_all(bind=engine)
    logger.info("Tables created")
    seed()
    logger.info("Seed data added")


if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL)
    init()
