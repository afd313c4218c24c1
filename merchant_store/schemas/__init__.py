from .store import (
    PersistableMerchantStore,
    PersistableImage,
    ReadableMerchantStore,
    ReadableMerchantStoreList,
    ReadableBrand,
    EntityExists,
)
from .content import FileContentType, InputContentFile
from .criteria import MerchantStoreCriteria, build_request
