import io
import os
import tempfile

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("UPLOAD_FOLDER", tempfile.mkdtemp(prefix="merchant-store-"))

import pytest
from fastapi.testclient import TestClient
from PIL import Image
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from merchant_store.api.dependencies import get_content_service
from merchant_store.core.database import Base, get_db
from merchant_store.core.security import create_access_token, hash_password
from merchant_store.init_db import seed_database
from merchant_store.main import app
from merchant_store.models import MerchantStore, User
from merchant_store.services.content_service import ContentService
from merchant_store.services.language_service import LanguageService
from merchant_store.services.store_service import StoreService
from merchant_store.services.user_service import UserService


ADMIN = "admin@shopizer.com"


def png_bytes(size=(4, 4), color=(255, 0, 0)):
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


def store_payload(code="store1", **overrides):
    payload = {
        "code": code,
        "name": f"Store {code}",
        "phone": "555-0100",
        "email": f"{code}@example.com",
        "address": {
            "address": "1 Main street",
            "city": "Montreal",
            "postalCode": "H2H 2H2",
            "stateProvince": "QC",
            "country": "CA",
        },
        "defaultLanguage": "en",
        "supportedLanguages": ["en", "fr"],
        "currency": "CAD",
    }
    payload.update(overrides)
    return payload


def auth_headers(username):
    token = create_access_token(username)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    seed_database(session)
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def content_service(tmp_path):
    return ContentService(root=str(tmp_path / "files"))


@pytest.fixture
def language_service(db):
    return LanguageService(db)


@pytest.fixture
def user_service(db):
    return UserService(db)


@pytest.fixture
def store_service(db, language_service, content_service):
    return StoreService(db, language_service, content_service)


@pytest.fixture
def add_user(db):
    def _add_user(username, store_code, role="admin", password="secret", active=True):
        store = db.query(MerchantStore).filter(MerchantStore.code == store_code).one()
        user = User(
            username=username,
            password_hash=hash_password(password),
            role=role,
            active=active,
            store=store,
        )
        db.add(user)
        db.commit()
        return user
    return _add_user


@pytest.fixture
def client(db, content_service):
    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_content_service] = lambda: content_service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
