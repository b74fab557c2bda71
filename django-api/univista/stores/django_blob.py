"""Blob store backed by Django's configured storage backend."""

from django.core.files.base import ContentFile
from django.core.files.storage import Storage, default_storage

from univista.stores.interfaces import BlobStore, StoredBlob


class DjangoBlobStore(BlobStore):
    def __init__(self, storage: Storage | None = None) -> None:
        self._storage = storage or default_storage

    def upload(self, path: str, data: bytes) -> StoredBlob:
        # Storage.save picks a fresh name when path is taken.
        name = self._storage.save(path, ContentFile(data))
        return StoredBlob(name=name, url=self._storage.url(name))

    def delete(self, name: str) -> None:
        self._storage.delete(name)
