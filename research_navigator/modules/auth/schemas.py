from pydantic import BaseModel, EmailStr
from typing import Optional, List
from datetime import date

from research_navigator.modules.profiles.schemas import ProfileCreate, ProfileResponse


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class SignUpRequest(BaseModel):
    email: EmailStr
    password: str
    name: str = ""
    dob: Optional[date] = None
    currently_pursuing: str = ""
    interests: List[str] = []
    phone: str = ""

    def to_profile(self) -> ProfileCreate:
        return ProfileCreate(
            name=self.name,
            dob=self.dob,
            currently_pursuing=self.currently_pursuing,
            interests=self.interests,
            phone=self.phone,
        )


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None
    token_type: str = "bearer"
    user_id: str
    email: str
    redirect_to: str = "/"


class SignUpResponse(BaseModel):
    user_id: str
    email: str
    access_token: Optional[str] = None  # None while email confirmation is pending
    profile: ProfileResponse
    redirect_to: str = "/"
    message: str


class OAuthResponse(BaseModel):
    provider: str
    url: str
