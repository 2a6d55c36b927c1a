from datetime import date

import pytest

from meritbadge.events.exceptions import FilterValidationError
from meritbadge.events.filters import EventFilterInput, normalize_filters
from meritbadge.utils.dates import add_months

TODAY = date(2025, 1, 15)

def test_month_timeframe_spans_one_calendar_month():
    query = normalize_filters({'timeframe': 'month'}, today=TODAY)

    assert query.start_date == date(2025, 1, 15)
    assert query.end_date == date(2025, 2, 15)

def test_week_timeframe_spans_seven_days():
    query = normalize_filters({'timeframe': 'week'}, today=TODAY)

    assert query.start_date == date(2025, 1, 15)
    assert query.end_date == date(2025, 1, 22)

@pytest.mark.parametrize('start, expected', [
    (date(2025, 1, 31), date(2025, 3, 3)),
    (date(2024, 1, 31), date(2024, 3, 2)),
    (date(2025, 12, 10), date(2026, 1, 10)),
    (date(2025, 12, 31), date(2026, 1, 31)),
])
def test_add_months_rolls_overflowing_days_forward(start, expected):
    assert add_months(start, 1) == expected

def test_today_can_be_a_callable():
    query = normalize_filters({'timeframe': 'week'}, today=lambda: TODAY)

    assert query.end_date == date(2025, 1, 22)

def test_explicit_dates_take_precedence_over_timeframe():
    query = normalize_filters(
        {'timeframe': 'month', 'startDate': '2025-03-01'},
        today=TODAY,
    )

    # Only the explicit start is used; the derived end date is not merged in
    assert query.start_date == date(2025, 3, 1)
    assert query.end_date is None

def test_malformed_date_with_timeframe_is_rejected():
    with pytest.raises(FilterValidationError) as excinfo:
        normalize_filters({'timeframe': 'week', 'endDate': '2025-13-45'}, today=TODAY)

    assert 'endDate' in str(excinfo.value)

def test_start_after_end_is_rejected():
    with pytest.raises(FilterValidationError):
        normalize_filters({'startDate': '2025-02-01', 'endDate': '2025-01-01'}, today=TODAY)

def test_unknown_timeframe_is_rejected():
    with pytest.raises(FilterValidationError):
        normalize_filters({'timeframe': 'year'}, today=TODAY)

@pytest.mark.parametrize('page, expected_offset', [(1, 0), (2, 12), (5, 48)])
def test_page_converts_to_offset(page, expected_offset):
    query = normalize_filters({'page': page, 'limit': 12}, today=TODAY)

    assert query.offset == expected_offset
    assert query.limit == 12

@pytest.mark.parametrize('page', [0, -1])
def test_page_below_one_is_rejected(page):
    with pytest.raises(FilterValidationError) as excinfo:
        normalize_filters({'page': page, 'limit': 12}, today=TODAY)

    assert 'page' in str(excinfo.value)

def test_page_and_offset_cannot_be_combined():
    with pytest.raises(FilterValidationError):
        normalize_filters({'page': 2, 'offset': 10}, today=TODAY)

@pytest.mark.parametrize('limit', [0, 101])
def test_limit_out_of_range_is_rejected(limit):
    with pytest.raises(FilterValidationError):
        normalize_filters({'limit': limit}, today=TODAY)

def test_negative_offset_is_rejected():
    with pytest.raises(FilterValidationError):
        normalize_filters({'offset': -1}, today=TODAY)

def test_defaults_without_input():
    query = normalize_filters(None, today=TODAY)

    assert query.limit == 20
    assert query.offset == 0
    assert query.model_dump(exclude_none=True) == {'limit': 20, 'offset': 0}

def test_blank_strings_become_absent():
    query = normalize_filters(
        {'query': '  ', 'badgeName': '', 'subjectArea': ' Outdoor Skills '},
        today=TODAY,
    )

    assert query.query is None
    assert query.badge_name is None
    assert query.subject_area == 'Outdoor Skills'

def test_snake_case_names_are_accepted():
    filters = EventFilterInput(badge_name='Chess', is_virtual=True)
    query = normalize_filters(filters, today=TODAY)

    assert query.badge_name == 'Chess'
    assert query.is_virtual is True

def test_status_is_not_a_filter_field():
    with pytest.raises(FilterValidationError):
        normalize_filters({'status': 'pending'}, today=TODAY)
