from types import SimpleNamespace

from meritbadge.events.trending import rank_trending_badges

def sample(badge_name, is_eagle_required=False, subject_area=None):
    return SimpleNamespace(
        badge_name=badge_name,
        is_eagle_required=is_eagle_required,
        subject_area=subject_area,
    )

def test_badges_ranked_by_count_within_sample():
    events = [
        sample('Chess'),
        sample('Camping', True, 'Outdoor Skills'),
        sample('Camping', True, 'Outdoor Skills'),
        sample('First Aid', True),
        sample('Camping', True, 'Outdoor Skills'),
        sample('First Aid', True),
    ]

    badges = rank_trending_badges(events)

    assert [(b['name'], b['classCount']) for b in badges] == [
        ('Camping', 3),
        ('First Aid', 2),
        ('Chess', 1),
    ]
    assert badges[0] == {
        'name': 'Camping',
        'classCount': 3,
        'isEagle': True,
        'subjectArea': 'Outdoor Skills',
    }

def test_ties_keep_first_appearance_order():
    events = [sample('Chess'), sample('Archery'), sample('Archery'), sample('Chess')]

    assert [b['name'] for b in rank_trending_badges(events)] == ['Chess', 'Archery']

def test_never_more_than_limit():
    events = [sample(f'Badge {n}') for n in range(10)]

    badges = rank_trending_badges(events)

    assert len(badges) == 6
    assert [b['name'] for b in badges] == [f'Badge {n}' for n in range(6)]

def test_fields_aggregated_per_event():
    events = [
        sample('Cooking', False, None),
        sample('Cooking', True, 'Life Skills'),
        sample('Cooking', False, 'Hobbies'),
        sample('Cooking', False, 'Life Skills'),
    ]

    badge = rank_trending_badges(events)[0]

    assert badge['isEagle'] is True
    assert badge['subjectArea'] == 'Life Skills'

def test_empty_sample():
    assert rank_trending_badges([]) == []
