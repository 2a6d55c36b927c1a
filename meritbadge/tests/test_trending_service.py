from meritbadge.db import DatabaseError, EventStore
from meritbadge.events.service import EventService
from meritbadge.models.event import EventStatus

from conftest import TODAY

class FailingStore(EventStore):
    def list(self, *args, **kwargs):
        raise DatabaseError("connection refused")

def test_trending_samples_most_viewed_approved_events(service, make_event):
    # 20 heavily viewed events decide the sample; the low-view ones fall outside it
    for n in range(12):
        make_event(badge_name='Camping', view_count=100 + n)
    for n in range(8):
        make_event(badge_name='Chess', view_count=100 + n)
    for _ in range(30):
        make_event(badge_name='Archery', view_count=1)
    make_event(badge_name='Hidden', view_count=10_000, status=EventStatus.PENDING.value)

    badges = service.get_trending_badges()['badges']

    assert [(b['name'], b['classCount']) for b in badges] == [('Camping', 12), ('Chess', 8)]

def test_trending_sorted_and_capped(service, make_event):
    for n in range(8):
        for _ in range(n + 1):
            make_event(badge_name=f'Badge {n}', view_count=5)

    badges = service.get_trending_badges()['badges']

    assert len(badges) <= 6
    counts = [b['classCount'] for b in badges]
    assert counts == sorted(counts, reverse=True)

def test_trending_fails_closed(database):
    service = EventService(store=FailingStore(database), today=lambda: TODAY)

    assert service.get_trending_badges() == {'badges': []}
