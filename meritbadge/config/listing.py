"""Listing, pagination and ranking constants for event queries."""

# Page sizes
SEARCH_PAGE_SIZE = 12  # Results per page on the search page
DEFAULT_PAGE_SIZE = 20  # Default limit for generic listings
MAX_PAGE_SIZE = 100  # Upper bound accepted for any limit

# Landing page
FEATURED_EVENTS_LIMIT = 6  # Upcoming classes shown on the homepage

# Event detail page
RELATED_EVENTS_LIMIT = 4  # Other classes for the same badge

# Trending badges
TRENDING_SAMPLE_SIZE = 20  # Most viewed events sampled for popularity
TRENDING_BADGES_LIMIT = 6  # Badges returned after ranking

# Timeframe shortcuts accepted by the search filters
TIMEFRAME_WEEK = 'week'
TIMEFRAME_MONTH = 'month'
WEEK_TIMEFRAME_DAYS = 7
