from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


Year = Literal["Freshman", "Sophomore", "Junior", "Senior", "Graduate"]


class OnboardingRequest(BaseModel):
    # Everything is optional at the schema level so missing fields get the
    # onboarding form's own messages instead of a generic 422.
    full_name: str = ""
    major: str = ""
    college: str = ""
    year: str = ""
    interests: list[str] = Field(default_factory=list)

    @field_validator("full_name", "major", "college", "year", mode="before")
    @classmethod
    def _strip_text(cls, v):
        if v is None:
            return ""
        return str(v).strip()


class ProfileUpdate(BaseModel):
    name: str | None = None
    major: str | None = None
    college: str | None = None
    year: Year | None = None
    interests: list[str] | None = None

    @field_validator("name", "major", "college", mode="before")
    @classmethod
    def _strip_text(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v


class InterestRequest(BaseModel):
    interest: str


class ProfileRead(BaseModel):
    user_id: str
    name: str
    major: str
    college: str | None = None
    year: str
    interests: list[str] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class MyProfileResponse(BaseModel):
    profile: ProfileRead
    email: str
