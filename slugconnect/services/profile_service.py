import logging
from typing import Any, Iterable
from sqlalchemy.orm import Session
from slugconnect.config import settings
from slugconnect.data.catalog import YEARS, is_known_college, is_known_major
from slugconnect.db.store import StoreError, select_one, select_rows, upsert_row
from slugconnect.errors import BackendUnavailable, NotFound, RequestFailed, ValidationError
from slugconnect.models.profile import Profile
from slugconnect.schemas.profile import OnboardingRequest, ProfileUpdate


logger = logging.getLogger(__name__)

NO_PROFILE_MESSAGE = "No profile found. Please complete onboarding first."
DUPLICATE_INTEREST_MESSAGE = "This interest is already added."


def normalize_interest(value: str | None) -> str:
    """Trim, lowercase and collapse inner whitespace runs to a single space."""
    return " ".join((value or "").split()).lower()


def _cap(max_interests: int | None) -> int:
    return settings.max_interests if max_interests is None else max_interests


def add_interest(interests: Iterable[str], raw: str, max_interests: int | None = None) -> list[str]:
    current = list(interests)
    norm = normalize_interest(raw)
    if not norm:
        return current
    if norm in current:
        raise ValidationError(DUPLICATE_INTEREST_MESSAGE)
    cap = _cap(max_interests)
    if len(current) >= cap:
        raise ValidationError(f"Max {cap} interests")
    current.append(norm)
    return current


def remove_interest(interests: Iterable[str], raw: str) -> list[str]:
    norm = normalize_interest(raw)
    return [item for item in interests if item != norm]


def toggle_interest(interests: Iterable[str], raw: str, max_interests: int | None = None) -> list[str]:
    current = list(interests)
    if normalize_interest(raw) in current:
        return remove_interest(current, raw)
    return add_interest(current, raw, max_interests)


def normalize_interest_list(values: Iterable[str] | None, max_interests: int | None = None) -> list[str]:
    result: list[str] = []
    for value in values or []:
        result = add_interest(result, value, max_interests)
    return result


def _validate_major(major: str) -> str:
    if not major:
        raise ValidationError("Please select your major.")
    if not is_known_major(major):
        raise ValidationError("Please select a valid major.")
    return major


def _validate_college(college: str | None) -> str | None:
    if college and not is_known_college(college):
        raise ValidationError("Please select a valid college.")
    return college or None


def _validate_year(year: str) -> str:
    if not year:
        raise ValidationError("Please select your year.")
    if year not in YEARS:
        raise ValidationError("Please select a valid year.")
    return year


def validate_onboarding(payload: OnboardingRequest) -> dict[str, Any]:
    # Same order as the onboarding form so the first missing field is reported.
    if not payload.full_name:
        raise ValidationError("Please enter your full name.")
    _validate_major(payload.major)
    if not payload.college:
        raise ValidationError("Please select your college.")
    _validate_college(payload.college)
    _validate_year(payload.year)
    return {
        "name": payload.full_name,
        "major": payload.major,
        "college": payload.college,
        "year": payload.year,
        "interests": normalize_interest_list(payload.interests),
    }


def get_profile(db: Session, user_id: str) -> Profile | None:
    try:
        return select_one(db, Profile, user_id=user_id)
    except StoreError as exc:
        logger.warning("profiles.get user=%s error=%s", user_id, exc)
        raise BackendUnavailable() from exc


def require_profile(db: Session, user_id: str) -> Profile:
    profile = get_profile(db, user_id)
    if profile is None:
        raise NotFound(NO_PROFILE_MESSAGE)
    return profile


def _save(db: Session, user_id: str, values: dict[str, Any]) -> Profile:
    try:
        return upsert_row(db, Profile, {"user_id": user_id, **values}, conflict_key="user_id")
    except StoreError as exc:
        logger.warning("profiles.save user=%s error=%s", user_id, exc)
        raise RequestFailed(f"Failed to save profile: {exc}") from exc


def create_profile(db: Session, user_id: str, payload: OnboardingRequest) -> Profile:
    values = validate_onboarding(payload)
    profile = _save(db, user_id, values)
    logger.info("profiles.onboarded user=%s major=%s interests=%d", user_id, profile.major, len(profile.interests or []))
    return profile


def update_profile(db: Session, user_id: str, payload: ProfileUpdate) -> Profile:
    profile = require_profile(db, user_id)
    changes = payload.model_dump(exclude_unset=True)
    values: dict[str, Any] = {}
    if "name" in changes:
        if not changes["name"]:
            raise ValidationError("Please enter your full name.")
        values["name"] = changes["name"]
    if "major" in changes:
        values["major"] = _validate_major(changes["major"] or "")
    if "college" in changes:
        values["college"] = _validate_college(changes["college"])
    if "year" in changes:
        values["year"] = _validate_year(changes["year"] or "")
    if "interests" in changes:
        values["interests"] = normalize_interest_list(changes["interests"])
    if not values:
        return profile
    return _save(db, user_id, values)


def add_profile_interest(db: Session, user_id: str, raw: str) -> Profile:
    profile = require_profile(db, user_id)
    return _save(db, user_id, {"interests": add_interest(profile.interests or [], raw)})


def remove_profile_interest(db: Session, user_id: str, raw: str) -> Profile:
    profile = require_profile(db, user_id)
    return _save(db, user_id, {"interests": remove_interest(profile.interests or [], raw)})


def toggle_profile_interest(db: Session, user_id: str, raw: str) -> Profile:
    profile = require_profile(db, user_id)
    return _save(db, user_id, {"interests": toggle_interest(profile.interests or [], raw)})


def list_other_profiles(db: Session, viewer_id: str) -> list[Profile]:
    try:
        return select_rows(db, Profile, Profile.user_id != viewer_id, order_by=Profile.name)
    except StoreError as exc:
        logger.warning("profiles.list viewer=%s error=%s", viewer_id, exc)
        raise BackendUnavailable("Could not load profiles.") from exc


def profiles_by_ids(db: Session, user_ids: Iterable[str]) -> dict[str, Profile]:
    ids = sorted(set(user_ids))
    if not ids:
        return {}
    try:
        rows = select_rows(db, Profile, Profile.user_id.in_(ids))
    except StoreError as exc:
        logger.warning("profiles.by_ids count=%d error=%s", len(ids), exc)
        raise BackendUnavailable() from exc
    return {row.user_id: row for row in rows}
