from pydantic import BaseModel, field_validator

from slugconnect.schemas.user import UserRead


def _validate_email_like(v: str) -> str:
    value = (v or "").strip().lower()
    if "@" not in value:
        raise ValueError("email must contain '@'")
    left, right = value.split("@", 1)
    if not left or not right:
        raise ValueError("email must have text before and after '@'")
    return value


class SignUpRequest(BaseModel):
    email: str
    password: str
    confirm_password: str

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        return _validate_email_like(v)


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        return _validate_email_like(v)


class ResendConfirmationRequest(BaseModel):
    email: str

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        return _validate_email_like(v)


class ConfirmEmailRequest(BaseModel):
    token: str


class SignUpResponse(BaseModel):
    user: UserRead
    needs_confirmation: bool = False


class AuthResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class MessageResponse(BaseModel):
    detail: str
