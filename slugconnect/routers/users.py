# users.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from slugconnect.database import get_db
from slugconnect.models.profile import Profile
from slugconnect.models.user import User
from slugconnect.routers.dependencies import get_current_user
from slugconnect.schemas.profile import InterestRequest, MyProfileResponse, OnboardingRequest, ProfileRead, ProfileUpdate
from slugconnect.schemas.user import UserRead
from slugconnect.services.profile_service import (
    add_profile_interest,
    create_profile,
    get_profile,
    remove_profile_interest,
    require_profile,
    toggle_profile_interest,
    update_profile,
)


router = APIRouter()


def to_user_read(db: Session, user: User) -> UserRead:
    user_out = UserRead.model_validate(user)
    return user_out.model_copy(
        update={
            "email_confirmed": user.email_confirmed_at is not None,
            "has_profile": get_profile(db, user.id) is not None,
        }
    )


def _my_profile(profile: Profile, user: User) -> MyProfileResponse:
    # Email lives on the auth record, not the profile row.
    return MyProfileResponse(profile=ProfileRead.model_validate(profile), email=user.email)


@router.get("/me", response_model=UserRead)
def read_current_user(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)) -> UserRead:
    return to_user_read(db, current_user)


@router.post("/me/onboarding", response_model=MyProfileResponse, status_code=status.HTTP_201_CREATED)
def complete_onboarding(
    payload: OnboardingRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MyProfileResponse:
    profile = create_profile(db, current_user.id, payload)
    return _my_profile(profile, current_user)


@router.get("/me/profile", response_model=MyProfileResponse)
def read_my_profile(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)) -> MyProfileResponse:
    return _my_profile(require_profile(db, current_user.id), current_user)


@router.put("/me/profile", response_model=MyProfileResponse)
def update_my_profile(
    payload: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MyProfileResponse:
    profile = update_profile(db, current_user.id, payload)
    return _my_profile(profile, current_user)


@router.post("/me/profile/interests", response_model=MyProfileResponse)
def add_my_interest(
    payload: InterestRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MyProfileResponse:
    profile = add_profile_interest(db, current_user.id, payload.interest)
    return _my_profile(profile, current_user)


@router.post("/me/profile/interests/toggle", response_model=MyProfileResponse)
def toggle_my_interest(
    payload: InterestRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MyProfileResponse:
    profile = toggle_profile_interest(db, current_user.id, payload.interest)
    return _my_profile(profile, current_user)


@router.delete("/me/profile/interests/{interest}", response_model=MyProfileResponse)
def remove_my_interest(
    interest: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MyProfileResponse:
    profile = remove_profile_interest(db, current_user.id, interest)
    return _my_profile(profile, current_user)
