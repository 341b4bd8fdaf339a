import logging
from supabase import Client
from research_navigator.core.errors import NotFound, RemoteReadError, RemoteWriteError
from research_navigator.modules.profiles.schemas import ProfileCreate, ProfileUpdate, ProfileResponse
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

TABLE = "profiles"


class ProfileService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def create_profile(self, user_id: str, profile_data: ProfileCreate) -> ProfileResponse:
        """Insert the user's single profile row. interests defaults to []."""
        fields = profile_data.model_dump(mode="json")
        row = {
            "user_id": user_id,
            "name": fields["name"],
            "dob": fields["dob"],
            "currently_pursuing": fields["currently_pursuing"],
            "interests": fields["interests"] or [],
            "phone": fields["phone"],
        }
        try:
            result = self.supabase.table(TABLE).insert(row).execute()
        except Exception as e:
            logger.error(f"Error creating profile for user {user_id}: {e}")
            raise RemoteWriteError(f"Failed to create profile: {e}") from e

        if not result.data:
            logger.error(f"Profile insert for user {user_id} returned no row")
            raise RemoteWriteError("Failed to create profile")
        return ProfileResponse(**result.data[0])

    def find_profile(self, user_id: str) -> Optional[ProfileResponse]:
        """Zero-or-one read; None when the user has no profile yet."""
        try:
            result = self.supabase.table(TABLE)\
                .select("*")\
                .eq("user_id", user_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching profile for user {user_id}: {e}")
            raise RemoteReadError(f"Failed to fetch profile: {e}") from e

        if not result.data:
            return None
        return ProfileResponse(**result.data[0])

    def get_profile(self, user_id: str) -> ProfileResponse:
        """Exactly-one read; raises NotFound when the profile is missing."""
        profile = self.find_profile(user_id)
        if profile is None:
            raise NotFound("Profile not found")
        return profile

    def get_or_create_profile(self, user_id: str) -> Tuple[ProfileResponse, bool]:
        """Settings screen flow: return the profile, creating a blank one on first visit."""
        profile = self.find_profile(user_id)
        if profile is not None:
            return profile, False
        logger.info(f"No profile for user {user_id}; creating a blank one")
        return self.create_profile(user_id, ProfileCreate()), True

    def update_profile(self, user_id: str, profile_data: ProfileUpdate) -> ProfileResponse:
        """Merge the fields that were set into the existing row"""
        update_data = profile_data.model_dump(mode="json", exclude_unset=True)
        if "interests" in update_data and update_data["interests"] is None:
            update_data["interests"] = []
        if not update_data:
            try:
                return self.get_profile(user_id)
            except NotFound as e:
                raise RemoteWriteError("Failed to update profile: no profile for this user") from e

        try:
            result = self.supabase.table(TABLE)\
                .update(update_data)\
                .eq("user_id", user_id)\
                .execute()
        except Exception as e:
            logger.error(f"Error updating profile for user {user_id}: {e}")
            raise RemoteWriteError(f"Failed to update profile: {e}") from e

        if not result.data:
            logger.error(f"Profile update for user {user_id} matched no row")
            raise RemoteWriteError("Failed to update profile: no profile for this user")
        return ProfileResponse(**result.data[0])
