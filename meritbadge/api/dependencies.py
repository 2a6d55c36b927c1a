"""Shared FastAPI dependencies."""

from ..events.service import EventService

def get_event_service() -> EventService:
    return EventService()
