#!/usr/bin/env python3

"""
Load merit badge events from a JSON file into the database.

The file holds a list of objects using the public camelCase field names
(badgeName, title, eventDate, ...). Events are inserted as pending unless
--approve is given, since only approved events are publicly listed.

Common use cases:
    # Seed local development data and make it visible
    python scripts/seed_events.py scripts/sample_events.json --approve

    # Wipe the tables first
    python scripts/seed_events.py scripts/sample_events.json --approve --reset
"""

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any, Dict, List

# Add project root to Python path
sys.path.append(str(Path(__file__).parent.parent))

from meritbadge.config.environment import IS_PRODUCTION_ENVIRONMENT
from meritbadge.db import EventStore, db
from meritbadge.models.event import EventStatus
from meritbadge.utils.logging_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)

# Public field name -> column name
FIELD_MAP = {
    'badgeName': 'badge_name',
    'title': 'title',
    'description': 'description',
    'eventDate': 'event_date',
    'eventTime': 'event_time',
    'location': 'location',
    'isVirtual': 'is_virtual',
    'latitude': 'latitude',
    'longitude': 'longitude',
    'subjectArea': 'subject_area',
    'isEagleRequired': 'is_eagle_required',
    'prerequisites': 'prerequisites',
    'organizerName': 'organizer_name',
    'organizerContact': 'organizer_contact',
    'registrationUrl': 'registration_url',
    'sourceUrl': 'source_url',
    'imageUrl': 'image_url',
    'createdBy': 'created_by',
}

REQUIRED_FIELDS = ('badgeName', 'title', 'eventDate')

DEFAULT_OWNER = 'seed-script'

def convert_record(record: Dict[str, Any], approve: bool, owner: str = DEFAULT_OWNER) -> Dict[str, Any]:
    """Map one JSON record onto model columns. Records without createdBy get the given owner."""
    missing = [name for name in REQUIRED_FIELDS if not record.get(name)]
    if missing:
        raise ValueError(f"Missing required fields: {', '.join(missing)}")

    unknown = set(record) - set(FIELD_MAP)
    if unknown:
        logger.warning(f"Ignoring unknown fields: {', '.join(sorted(unknown))}")

    fields = {FIELD_MAP[key]: value for key, value in record.items() if key in FIELD_MAP}
    fields['created_by'] = fields.get('created_by') or owner
    fields['event_date'] = date.fromisoformat(fields['event_date'])
    fields['status'] = (EventStatus.APPROVED if approve else EventStatus.PENDING).value
    return fields

def load_records(path: Path) -> List[Dict[str, Any]]:
    with open(path, 'r', encoding='utf-8') as f:
        records = json.load(f)
    if not isinstance(records, list):
        raise ValueError("Seed file must contain a list of events")
    return records

def main() -> int:
    parser = argparse.ArgumentParser(description="Seed merit badge events")
    parser.add_argument('path', type=Path, help="JSON file with a list of events")
    parser.add_argument('--approve', action='store_true', help="Insert events as approved")
    parser.add_argument('--reset', action='store_true', help="Drop and recreate tables first")
    parser.add_argument('--owner', default=DEFAULT_OWNER, help="Owner recorded for events without createdBy")
    args = parser.parse_args()

    if args.reset:
        if IS_PRODUCTION_ENVIRONMENT:
            logger.error("Refusing to reset tables in production")
            return 1
        db.drop_all()
    db.init_db()

    store = EventStore()
    created, skipped = 0, 0
    for index, record in enumerate(load_records(args.path)):
        try:
            store.create(**convert_record(record, args.approve, args.owner))
            created += 1
        except ValueError as e:
            skipped += 1
            logger.error(f"Skipping record {index}: {e}")

    logger.info(f"Seeded {created} events, skipped {skipped}")
    return 0

if __name__ == "__main__":
    sys.exit(main())
