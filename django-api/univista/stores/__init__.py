from univista.stores.interfaces import (
    BlobStore,
    DocumentStore,
    IdentityProvider,
    StoredBlob,
    StoreTransaction,
)

__all__ = ["DocumentStore", "StoreTransaction", "IdentityProvider", "BlobStore", "StoredBlob"]
