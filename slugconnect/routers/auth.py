# auth.py
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from slugconnect.database import get_db
from slugconnect.models.user import User
from slugconnect.routers.dependencies import get_current_user, get_token_data
from slugconnect.routers.users import to_user_read
from slugconnect.schemas.auth import (
    AuthResponse,
    ConfirmEmailRequest,
    LoginRequest,
    MessageResponse,
    ResendConfirmationRequest,
    SignUpRequest,
    SignUpResponse,
)
from slugconnect.schemas.user import SessionRead, TokenData
from slugconnect.services.auth_service import authenticate, confirm_email, resend_confirmation, sign_out, sign_up


router = APIRouter()


@router.post("/signup", response_model=SignUpResponse, status_code=status.HTTP_201_CREATED)
def register_user(payload: SignUpRequest, db: Session = Depends(get_db)) -> SignUpResponse:
    user, needs_confirmation = sign_up(db, payload)
    return SignUpResponse(user=to_user_read(db, user), needs_confirmation=needs_confirmation)


@router.post("/login", response_model=AuthResponse)
def login_user(payload: LoginRequest, db: Session = Depends(get_db)) -> AuthResponse:
    token = authenticate(db, payload.email, payload.password)
    return AuthResponse(access_token=token, token_type="bearer")


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout_user(db: Session = Depends(get_db), token_data: TokenData = Depends(get_token_data)) -> Response:
    sign_out(db, token_data)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/session", response_model=SessionRead)
def read_session(
    db: Session = Depends(get_db),
    token_data: TokenData = Depends(get_token_data),
    current_user: User = Depends(get_current_user),
) -> SessionRead:
    return SessionRead(user=to_user_read(db, current_user), expires_at=token_data.expires_at)


@router.post("/confirm", response_model=AuthResponse)
def confirm_user_email(payload: ConfirmEmailRequest, db: Session = Depends(get_db)) -> AuthResponse:
    token = confirm_email(db, payload.token)
    return AuthResponse(access_token=token, token_type="bearer")


@router.post("/resend-confirmation", response_model=MessageResponse, status_code=status.HTTP_202_ACCEPTED)
def resend_confirmation_email(payload: ResendConfirmationRequest, db: Session = Depends(get_db)) -> MessageResponse:
    resend_confirmation(db, payload.email)
    return MessageResponse(detail="If that account needs confirming, a new confirmation email is on its way.")
