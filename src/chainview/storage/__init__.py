# File: src/chainview/storage/__init__.py
from .database import LedgerStore
from ..exceptions import DatabaseError, StorageError

__all__ = ['LedgerStore', 'DatabaseError', 'StorageError']
