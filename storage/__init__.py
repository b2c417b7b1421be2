"""
Watchlist storage: one SnapshotStore interface, SQLite and flat-file backends.
"""
