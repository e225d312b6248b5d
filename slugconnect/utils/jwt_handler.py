# jwt_handler.py
import uuid
from datetime import datetime, timedelta, timezone
from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError
from slugconnect.config import settings
from slugconnect.errors import AuthRequired, ValidationError


CONFIRM_PURPOSE = "confirm"


def create_access_token(data: dict, expires_delta: timedelta) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + expires_delta
    to_encode["exp"] = expire
    to_encode.setdefault("jti", str(uuid.uuid4()))
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict:
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except ExpiredSignatureError as exc:
        raise AuthRequired("Token expired") from exc
    except JWTError as exc:
        raise AuthRequired("Invalid token") from exc
    # Confirmation tokens share the signing key but must never act as a session.
    if payload.get("purpose"):
        raise AuthRequired("Invalid token")
    return payload


def create_confirmation_token(user_id: str, email: str) -> str:
    expires_delta = timedelta(minutes=settings.confirmation_token_expire_minutes)
    return create_access_token({"sub": user_id, "email": email, "purpose": CONFIRM_PURPOSE}, expires_delta)


def decode_confirmation_token(token: str) -> dict:
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise ValidationError("Confirmation link is invalid or has expired.") from exc
    if payload.get("purpose") != CONFIRM_PURPOSE or not payload.get("sub"):
        raise ValidationError("Confirmation link is invalid or has expired.")
    return payload


def token_expiry(payload: dict) -> datetime | None:
    exp = payload.get("exp")
    if exp is None:
        return None
    return datetime.fromtimestamp(int(exp), tz=timezone.utc)
