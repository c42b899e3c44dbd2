"""
Load board core.

LoadStore owns the in-memory AppState and keeps it consistent with the
persistence gateway through optimistic, rollback-on-failure mutations.
"""
from .store import LoadStore
from .transaction import OptimisticTransaction

__all__ = ["LoadStore", "OptimisticTransaction"]
