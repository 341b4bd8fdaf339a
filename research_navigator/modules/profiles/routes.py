from fastapi import APIRouter, Depends
from research_navigator.core.dependencies import get_current_user, get_user_supabase
from research_navigator.modules.profiles.schemas import (
    ProfileCreate, ProfileUpdate, ProfileResponse, EnsuredProfileResponse
)
from research_navigator.modules.profiles.service import ProfileService
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/profiles", tags=["profiles"])


def get_profile_service(supabase: Client = Depends(get_user_supabase)) -> ProfileService:
    return ProfileService(supabase)


@router.post("", response_model=ProfileResponse, status_code=201)
async def create_profile(
    profile_data: ProfileCreate,
    current_user: Dict = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service)
):
    """Create the current user's profile (one per user)"""
    return service.create_profile(current_user["id"], profile_data)


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(
    current_user: Dict = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service)
):
    """Get the current user's profile; 404 when it does not exist"""
    return service.get_profile(current_user["id"])


@router.post("/me/ensure", response_model=EnsuredProfileResponse)
async def ensure_my_profile(
    current_user: Dict = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service)
):
    """Fetch the current user's profile, creating a blank one on first visit"""
    profile, created = service.get_or_create_profile(current_user["id"])
    return EnsuredProfileResponse(profile=profile, created=created)


@router.patch("/me", response_model=ProfileResponse)
async def update_my_profile(
    profile_data: ProfileUpdate,
    current_user: Dict = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service)
):
    """Merge the given fields into the current user's profile"""
    return service.update_profile(current_user["id"], profile_data)
