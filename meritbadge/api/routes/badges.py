"""Badge ranking routes."""

from fastapi import APIRouter, Depends

from ..dependencies import get_event_service
from ...events.service import EventService

router = APIRouter(tags=["badges"])

@router.get("/badges/trending")
async def get_trending_badges(service: EventService = Depends(get_event_service)):
    """Badges ranked by popularity among the most viewed classes."""
    return service.get_trending_badges()
