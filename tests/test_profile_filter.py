from types import SimpleNamespace

from slugconnect.schemas.discover import ProfileFilter
from slugconnect.services.profile_filter import filter_profiles, matches


PROFILES = [
    {"name": "Alice Wong", "major": "Computer Science", "year": "Junior", "interests": ["hiking", "chess"]},
    {"name": "Bob Diaz", "major": "Biology", "year": "Senior", "interests": ["surfing"]},
    {"name": "Cam Lee", "major": "Computer Engineering", "year": "Junior", "interests": []},
]


def names(profiles) -> list[str]:
    return [p["name"] for p in profiles]


def test_empty_filter_keeps_everything_in_order() -> None:
    assert names(filter_profiles(PROFILES, ProfileFilter())) == ["Alice Wong", "Bob Diaz", "Cam Lee"]


def test_major_and_year_are_exact() -> None:
    assert names(filter_profiles(PROFILES, ProfileFilter(major="Computer Science"))) == ["Alice Wong"]
    assert names(filter_profiles(PROFILES, ProfileFilter(major="computer science"))) == []
    assert names(filter_profiles(PROFILES, ProfileFilter(year="Junior"))) == ["Alice Wong", "Cam Lee"]


def test_interests_match_case_insensitively() -> None:
    assert names(filter_profiles(PROFILES, ProfileFilter(interest="Hiking"))) == ["Alice Wong"]
    assert names(filter_profiles(PROFILES, ProfileFilter(custom_interest="SURFING"))) == ["Bob Diaz"]
    # Equality, not substring.
    assert names(filter_profiles(PROFILES, ProfileFilter(interest="surf"))) == []


def test_search_covers_name_major_and_interests() -> None:
    assert names(filter_profiles(PROFILES, ProfileFilter(search="diaz"))) == ["Bob Diaz"]
    assert names(filter_profiles(PROFILES, ProfileFilter(search="comp"))) == ["Alice Wong", "Cam Lee"]
    assert names(filter_profiles(PROFILES, ProfileFilter(search="CHE"))) == ["Alice Wong"]


def test_all_criteria_must_match() -> None:
    criteria = ProfileFilter(year="Junior", search="engineering")
    assert names(filter_profiles(PROFILES, criteria)) == ["Cam Lee"]


def test_attribute_rows_and_missing_interests() -> None:
    row = SimpleNamespace(name="Dee", major="Art", year="Freshman", interests=None)
    assert matches(row, ProfileFilter(major="Art"))
    assert not matches(row, ProfileFilter(interest="art"))


def test_major_scenario_and_partial_search() -> None:
    profile = {"name": "Sam", "major": "Computer Science", "year": "Junior", "interests": ["Hiking"]}
    assert matches(profile, ProfileFilter(major="Computer Science"))
    assert not matches(profile, ProfileFilter(major="Art"))
    assert matches(profile, ProfileFilter(search="hik"))


def test_filtering_is_idempotent_and_order_independent() -> None:
    by_year = ProfileFilter(year="Junior")
    by_search = ProfileFilter(search="c")
    both = ProfileFilter(year="Junior", search="c")

    once = filter_profiles(PROFILES, both)
    assert filter_profiles(once, both) == once
    assert filter_profiles(filter_profiles(PROFILES, by_year), by_search) == once
    assert filter_profiles(filter_profiles(PROFILES, by_search), by_year) == once
