from pricing.stores.interfaces import CatalogStore
from pricing.stores.memory_store import InMemoryCatalogStore

__all__ = ["CatalogStore", "InMemoryCatalogStore"]
