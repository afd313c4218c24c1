from conftest import ADMIN, store_payload
from merchant_store.schemas.store import PersistableMerchantStore


def create_store(store_service, code, **overrides):
    store_service.create(PersistableMerchantStore(**store_payload(code, **overrides)))


def test_superadmin_is_authorized_everywhere(user_service, store_service):
    create_store(store_service, "store1")

    assert user_service.authorized_store(ADMIN, "store1") is True
    assert user_service.authorized_store(ADMIN, "anything") is True


def test_user_is_authorized_for_own_store_only(user_service, store_service, add_user):
    create_store(store_service, "store1")
    create_store(store_service, "store2")
    add_user("bob", "store1")

    assert user_service.authorized_store("bob", "store1") is True
    assert user_service.authorized_store("bob", "store2") is False


def test_retailer_user_manages_attached_stores(user_service, store_service, add_user):
    create_store(store_service, "retail", retailer=True)
    create_store(store_service, "child", retailerStore="retail")
    create_store(store_service, "other")
    add_user("carol", "retail", role="retail_admin")

    assert user_service.authorized_store("carol", "child") is True
    assert user_service.authorized_store("carol", "other") is False


def test_unknown_or_inactive_user_is_not_authorized(user_service, store_service, add_user):
    create_store(store_service, "store1")
    add_user("dave", "store1", active=False)

    assert user_service.authorized_store("nobody", "store1") is False
    assert user_service.authorized_store("dave", "store1") is False


def test_authenticate(user_service, store_service, add_user):
    create_store(store_service, "store1")
    add_user("bob", "store1", password="s3cret")

    assert user_service.authenticate("bob", "s3cret").username == "bob"
    assert user_service.authenticate("bob", "wrong") is None
    assert user_service.authenticate("nobody", "s3cret") is None
