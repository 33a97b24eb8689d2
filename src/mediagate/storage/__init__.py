"""Storage layer."""

from .catalog import Catalog, DuplicateRecordError
from .cloudinary import CloudinaryStore
from .memory import InMemoryRemoteStore
from .protocols import CatalogProtocol, RemoteStoreProtocol

__all__ = [
    "Catalog",
    "CatalogProtocol",
    "CloudinaryStore",
    "DuplicateRecordError",
    "InMemoryRemoteStore",
    "RemoteStoreProtocol",
]
