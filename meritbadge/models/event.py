"""Merit badge event model definition."""

import enum
import uuid
from datetime import date, datetime
from typing import Dict, Any, Optional

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    Integer,
    String,
    Text,
)

from .base import Base
from ..utils.dates import now_utc

class EventStatus(str, enum.Enum):
    """Moderation state of a submitted event."""
    PENDING = 'pending'
    APPROVED = 'approved'
    REJECTED = 'rejected'

def _new_event_id() -> str:
    return uuid.uuid4().hex

def _isoformat(value: Optional[Any]) -> Optional[str]:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value

class MeritBadgeEvent(Base):
    """
    A single scheduled (or virtual) merit badge class listing.

    Fields:
        id: Opaque unique identifier (auto-generated, immutable)
        created_by: Identity of the user who submitted the event (required)
        badge_name: Merit badge the class teaches toward
        title: Event title
        description: Event description (optional)
        event_date: Calendar date of the class, used for ordering
        event_time: Free text time, e.g. "9am - 3pm" (optional)
        location: Where the class takes place (optional)
        is_virtual: Whether the class is held online
        latitude/longitude: Stored coordinates, not used by any query
        subject_area: Subject grouping of the badge (optional)
        is_eagle_required: Whether the badge is required for Eagle rank
        prerequisites: Work scouts must complete beforehand (optional)
        organizer_name: Name of the organizer (optional)
        organizer_contact: Email, phone number or free text (optional)
        registration_url: Where to register (optional)
        source_url: Where the listing was found (optional)
        image_url: Image for the listing (optional)
        status: Moderation state, only approved events are public
        view_count: Number of detail page views
        save_count: Number of times the event was saved
        created_at/updated_at: Audit timestamps
    """
    __tablename__ = 'merit_badge_events'

    # Identity
    id = Column(String(32), primary_key=True, default=_new_event_id)
    created_by = Column(String, nullable=False)

    # Descriptive attributes
    badge_name = Column(String, nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(Text)
    subject_area = Column(String, index=True)
    prerequisites = Column(Text)

    # Scheduling
    event_date = Column(Date, nullable=False, index=True)
    event_time = Column(String)
    location = Column(String)
    is_virtual = Column(Boolean, nullable=False, default=False)

    # Classification
    is_eagle_required = Column(Boolean, nullable=False, default=False)

    # Geolocation
    latitude = Column(Float)
    longitude = Column(Float)

    # Organizer and links
    organizer_name = Column(String)
    organizer_contact = Column(String)
    registration_url = Column(String)
    source_url = Column(String)
    image_url = Column(String)

    # Moderation and engagement
    status = Column(String, nullable=False, default=EventStatus.PENDING.value, index=True)
    view_count = Column(Integer, nullable=False, default=0)
    save_count = Column(Integer, nullable=False, default=0)

    # Audit
    created_at = Column(DateTime(timezone=True), nullable=False, default=now_utc)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=now_utc, onupdate=now_utc)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the public, camelCase representation."""
        return {
            'id': self.id,
            'badgeName': self.badge_name,
            'title': self.title,
            'description': self.description,
            'eventDate': _isoformat(self.event_date),
            'eventTime': self.event_time,
            'location': self.location,
            'isVirtual': self.is_virtual,
            'latitude': self.latitude,
            'longitude': self.longitude,
            'subjectArea': self.subject_area,
            'isEagleRequired': self.is_eagle_required,
            'prerequisites': self.prerequisites,
            'organizerName': self.organizer_name,
            'organizerContact': self.organizer_contact,
            'registrationUrl': self.registration_url,
            'sourceUrl': self.source_url,
            'imageUrl': self.image_url,
            'viewCount': self.view_count,
            'saveCount': self.save_count,
            'createdAt': _isoformat(self.created_at),
            'updatedAt': _isoformat(self.updated_at),
        }

    def __str__(self) -> str:
        """String representation."""
        return f"MeritBadgeEvent(id={self.id}, badge_name={self.badge_name}, event_date={self.event_date})"
