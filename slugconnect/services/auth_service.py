from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import Session

from slugconnect.config import settings
from slugconnect.db.store import StoreError, UniqueViolation, insert_row, select_one, update_rows
from slugconnect.errors import AuthRequired, BackendUnavailable, PermissionDenied, RequestFailed, ValidationError
from slugconnect.models.revoked_token import RevokedToken
from slugconnect.models.user import User
from slugconnect.schemas.auth import SignUpRequest
from slugconnect.schemas.user import TokenData
from slugconnect.utils.jwt_handler import (
    create_access_token,
    create_confirmation_token,
    decode_confirmation_token,
)
from slugconnect.utils.password_hash import hash_password, verify_password


logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def validate_sign_up(payload: SignUpRequest) -> None:
    domain = settings.allowed_email_domain
    if domain and not payload.email.endswith(f"@{domain}"):
        raise ValidationError(f"Please use your {domain} email.")
    if len(payload.password) < settings.password_min_length:
        raise ValidationError(f"Password must be at least {settings.password_min_length} characters.")
    if payload.password != payload.confirm_password:
        raise ValidationError("Passwords do not match.")


def get_user_by_email(db: Session, email: str) -> User | None:
    try:
        return select_one(db, User, email=email.strip().lower())
    except StoreError as exc:
        raise BackendUnavailable() from exc


def get_user_by_id(db: Session, user_id: str) -> User | None:
    try:
        return select_one(db, User, id=user_id)
    except StoreError as exc:
        raise BackendUnavailable() from exc


def sign_up(db: Session, payload: SignUpRequest) -> tuple[User, bool]:
    """Create the account; returns the user and whether email confirmation is still needed."""

    validate_sign_up(payload)
    if get_user_by_email(db, payload.email):
        raise ValidationError("Email already registered")

    needs_confirmation = settings.require_email_confirmation
    values = {
        "email": payload.email,
        "password": hash_password(payload.password),
        "email_confirmed_at": None if needs_confirmation else _utc_now(),
    }
    try:
        user = insert_row(db, User, values)
    except UniqueViolation as exc:
        raise ValidationError("Email already registered") from exc
    except StoreError as exc:
        logger.warning("auth.signup email=%s error=%s", payload.email, exc)
        raise RequestFailed(f"Sign up failed: {exc}") from exc

    logger.info("auth.signup user=%s needs_confirmation=%s", user.id, needs_confirmation)
    if needs_confirmation:
        send_confirmation(user)
    return user, needs_confirmation


def confirmation_link(token: str) -> str:
    return f"{settings.app_base_url.rstrip('/')}/onboarding?token={token}"


def send_confirmation(user: User) -> str:
    # No mail transport is configured; the link goes to the log for the operator.
    token = create_confirmation_token(user.id, user.email)
    logger.info("auth.confirmation email=%s link=%s", user.email, confirmation_link(token))
    return token


def resend_confirmation(db: Session, email: str) -> None:
    user = get_user_by_email(db, email)
    # Same outcome whether or not the address exists.
    if user is None or user.email_confirmed_at is not None:
        logger.info("auth.resend skipped email=%s", email)
        return
    send_confirmation(user)


def confirm_email(db: Session, token: str) -> str:
    payload = decode_confirmation_token(token)
    user = get_user_by_id(db, payload["sub"])
    if user is None or user.email != payload.get("email"):
        raise ValidationError("Confirmation link is invalid or has expired.")
    if user.email_confirmed_at is None:
        try:
            update_rows(db, User, {"id": user.id}, {"email_confirmed_at": _utc_now()})
        except StoreError as exc:
            raise RequestFailed(f"Could not confirm email: {exc}") from exc
        logger.info("auth.confirmed user=%s", user.id)
    return issue_access_token(user)


def issue_access_token(user: User) -> str:
    expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    return create_access_token({"sub": str(user.id)}, expires_delta)


def authenticate(db: Session, email: str, password: str) -> str:
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.password):
        raise AuthRequired("Invalid credentials")
    if settings.require_email_confirmation and user.email_confirmed_at is None:
        raise PermissionDenied("Please confirm your email address before signing in.")
    logger.info("auth.login user=%s", user.id)
    return issue_access_token(user)


def is_token_revoked(db: Session, jti: str | None) -> bool:
    if not jti:
        return False
    try:
        return select_one(db, RevokedToken, jti=jti) is not None
    except StoreError as exc:
        raise BackendUnavailable() from exc


def sign_out(db: Session, token_data: TokenData) -> None:
    if not token_data.jti:
        return
    values = {"jti": token_data.jti, "user_id": token_data.user_id, "expires_at": token_data.expires_at}
    try:
        insert_row(db, RevokedToken, values)
    except UniqueViolation:
        return
    except StoreError as exc:
        raise RequestFailed(f"Sign out failed: {exc}") from exc
    logger.info("auth.logout user=%s", token_data.user_id)
