"""Routes package initialization."""

from . import (
    badges,
    events,
    health
)

__all__ = [
    'badges',
    'events',
    'health'
]
