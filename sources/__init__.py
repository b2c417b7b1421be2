"""Remote data sources."""
