# discover.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from slugconnect.database import get_db
from slugconnect.models.user import User
from slugconnect.routers.dependencies import get_current_user
from slugconnect.schemas.connection import ConnectionStatus
from slugconnect.schemas.discover import DiscoverProfile, DiscoverResponse, ProfileFilter
from slugconnect.schemas.profile import ProfileRead
from slugconnect.services.connection_service import statuses_for_viewer
from slugconnect.services.profile_filter import filter_profiles
from slugconnect.services.profile_service import get_profile, list_other_profiles


router = APIRouter()

EMPTY_RESULTS_MESSAGE = "Looks a little empty here... Try adjusting your filters or search criteria!"


@router.get("", response_model=DiscoverResponse)
def discover_profiles(
    major: str = Query(default=""),
    year: str = Query(default=""),
    interest: str = Query(default=""),
    custom_interest: str = Query(default=""),
    q: str = Query(default="", description="Free-text search over name, major and interests"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> DiscoverResponse:
    criteria = ProfileFilter(
        major=major.strip(),
        year=year.strip(),
        interest=interest.strip(),
        custom_interest=custom_interest.strip(),
        search=q.strip(),
    )
    visible = filter_profiles(list_other_profiles(db, current_user.id), criteria)
    statuses = statuses_for_viewer(db, current_user.id)

    profiles = []
    for profile in visible:
        status = statuses.get(profile.user_id, ConnectionStatus.IDLE)
        base = ProfileRead.model_validate(profile)
        profiles.append(DiscoverProfile(**base.model_dump(), status=status, label=status.label, can_send=status.can_send))

    mine = get_profile(db, current_user.id)
    return DiscoverResponse(
        profiles=profiles,
        total=len(profiles),
        viewer_interests=list(mine.interests or []) if mine else [],
        filters=criteria,
        message=None if profiles else EMPTY_RESULTS_MESSAGE,
    )
