"""Read-only access to the production-tracking entity tables."""

from uretim.store.entity_store import EntityStore

__all__ = ["EntityStore"]
