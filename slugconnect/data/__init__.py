# __init__.py
from slugconnect.data.catalog import COLLEGES, FILTER_INTERESTS, MAJORS, POPULAR_INTERESTS, YEARS, is_known_college, is_known_major

__all__ = [
    "COLLEGES",
    "FILTER_INTERESTS",
    "MAJORS",
    "POPULAR_INTERESTS",
    "YEARS",
    "is_known_college",
    "is_known_major",
]
