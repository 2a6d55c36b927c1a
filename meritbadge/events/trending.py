"""Ranking of badges by popularity within a sample of events."""

from collections import Counter
from typing import Dict, Any, Iterable, List

from ..config.listing import TRENDING_BADGES_LIMIT
from ..models.event import MeritBadgeEvent

def rank_trending_badges(
    events: Iterable[MeritBadgeEvent],
    limit: int = TRENDING_BADGES_LIMIT
) -> List[Dict[str, Any]]:
    """
    Group sampled events by badge name and rank the badges by class count.

    The count is taken within the sample only, so it is a popularity proxy and
    not a tally across all events. Eagle and subject area are aggregated from
    every sampled event of a badge instead of trusting the first one: a badge
    is eagle-required if any of its events says so, and its subject area is the
    most common non-empty value (first seen wins ties).

    Args:
        events: Sampled events, ordered most popular first
        limit: Maximum number of badges returned

    Returns:
        List of {name, classCount, isEagle, subjectArea}, highest count first
    """
    groups: Dict[str, Dict[str, Any]] = {}

    for event in events:
        group = groups.setdefault(event.badge_name, {
            'count': 0,
            'is_eagle': False,
            'subject_areas': Counter(),
        })
        group['count'] += 1
        group['is_eagle'] = group['is_eagle'] or bool(event.is_eagle_required)
        if event.subject_area:
            group['subject_areas'][event.subject_area] += 1

    badges = []
    for name, group in groups.items():
        most_common = group['subject_areas'].most_common(1)
        badges.append({
            'name': name,
            'classCount': group['count'],
            'isEagle': group['is_eagle'],
            'subjectArea': most_common[0][0] if most_common else None,
        })

    # sorted() is stable, so equal counts keep their first appearance order
    badges = sorted(badges, key=lambda badge: badge['classCount'], reverse=True)
    return badges[:limit]
