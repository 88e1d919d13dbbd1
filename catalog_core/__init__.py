"""In-memory product catalog core.

Stores product listings in memory and serves lookups, multi-criteria
searches, sorted and paginated listings, lifecycle mutations and
aggregate statistics.
"""

__version__ = "0.1.0"
