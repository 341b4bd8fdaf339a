from pydantic import BaseModel, field_validator
from typing import Optional, List
from datetime import date, datetime

# columns declared NOT NULL in the profiles table
REQUIRED_TEXT_FIELDS = ("name", "currently_pursuing", "phone")


def _unique_tags(tags: Optional[List[str]]) -> Optional[List[str]]:
    if tags is None:
        return None
    cleaned = [t.strip() for t in tags if t and t.strip()]
    return list(dict.fromkeys(cleaned))


class ProfileCreate(BaseModel):
    name: str = ""
    dob: Optional[date] = None
    currently_pursuing: str = ""
    interests: Optional[List[str]] = None
    phone: str = ""

    @field_validator("interests")
    @classmethod
    def dedupe_interests(cls, v):
        return _unique_tags(v)


class ProfileUpdate(BaseModel):
    name: Optional[str] = None
    dob: Optional[date] = None
    currently_pursuing: Optional[str] = None
    interests: Optional[List[str]] = None
    phone: Optional[str] = None

    @field_validator(*REQUIRED_TEXT_FIELDS)
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("may not be null; send an empty string to clear it")
        return v

    @field_validator("interests")
    @classmethod
    def dedupe_interests(cls, v):
        return _unique_tags(v)


class ProfileResponse(BaseModel):
    id: str
    user_id: str
    name: str = ""
    dob: Optional[date] = None
    currently_pursuing: str = ""
    interests: List[str] = []
    phone: str = ""
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @field_validator(*REQUIRED_TEXT_FIELDS, mode="before")
    @classmethod
    def blank_for_null(cls, v):
        # rows written by older clients may hold null here
        return "" if v is None else v

    @field_validator("interests", mode="before")
    @classmethod
    def empty_for_null(cls, v):
        return [] if v is None else v


class EnsuredProfileResponse(BaseModel):
    profile: ProfileResponse
    created: bool
