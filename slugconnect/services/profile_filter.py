# profile_filter.py
from typing import Any, Iterable, TypeVar
from slugconnect.schemas.discover import ProfileFilter


P = TypeVar("P")


def _field(profile: Any, name: str) -> Any:
    if isinstance(profile, dict):
        return profile.get(name)
    return getattr(profile, name, None)


def _interests(profile: Any) -> list[str]:
    value = _field(profile, "interests")
    if not isinstance(value, (list, tuple)):
        return []
    return [str(item) for item in value if item is not None]


def _has_interest(profile: Any, wanted: str) -> bool:
    target = wanted.lower()
    return any(item.lower() == target for item in _interests(profile))


def _matches_search(profile: Any, text: str) -> bool:
    needle = text.lower()
    name = str(_field(profile, "name") or "").lower()
    major = str(_field(profile, "major") or "").lower()
    if needle in name or needle in major:
        return True
    return any(needle in item.lower() for item in _interests(profile))


def matches(profile: Any, criteria: ProfileFilter) -> bool:
    if criteria.major and _field(profile, "major") != criteria.major:
        return False
    if criteria.year and _field(profile, "year") != criteria.year:
        return False
    if criteria.interest and not _has_interest(profile, criteria.interest):
        return False
    if criteria.custom_interest and not _has_interest(profile, criteria.custom_interest):
        return False
    if criteria.search and not _matches_search(profile, criteria.search):
        return False
    return True


def filter_profiles(profiles: Iterable[P], criteria: ProfileFilter) -> list[P]:
    """Keep the profiles matching every non-empty criterion, preserving input order.

    Profiles may be ORM rows, pydantic models or plain dicts.
    """
    return [profile for profile in profiles if matches(profile, criteria)]
