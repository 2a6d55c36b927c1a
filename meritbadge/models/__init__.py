"""Models package initialization."""

from .base import Base
from .event import MeritBadgeEvent, EventStatus

__all__ = ['Base', 'MeritBadgeEvent', 'EventStatus']
