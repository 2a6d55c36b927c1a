"""Database package initialization.

This module exposes the public interface of the database package.
"""

from .db_core import (
    Database,
    DatabaseConfig,
    DatabaseError,
    ConnectionError,
    SessionError,
    db
)
from .event_store import EventStore, ListResult

__all__ = [
    # Core database classes
    'Database',
    'DatabaseConfig',

    # Exceptions
    'DatabaseError',
    'ConnectionError',
    'SessionError',

    # Global instance
    'db',

    # Event storage
    'EventStore',
    'ListResult',
]
