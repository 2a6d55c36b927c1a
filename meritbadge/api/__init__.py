"""HTTP API for the merit badge class finder."""
