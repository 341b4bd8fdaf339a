import logging
from supabase import Client
from research_navigator.core.errors import NotFound, RemoteReadError, RemoteWriteError
from research_navigator.modules.folders.schemas import FolderCreate, FolderUpdate, FolderResponse
from typing import List

logger = logging.getLogger(__name__)

TABLE = "folders"


class FolderService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def create_folder(self, user_id: str, folder_data: FolderCreate) -> FolderResponse:
        """Create a new folder"""
        try:
            result = self.supabase.table(TABLE).insert({
                "user_id": user_id,
                "name": folder_data.name,
                "description": folder_data.description,
            }).execute()
        except Exception as e:
            logger.error(f"Error creating folder for user {user_id}: {e}")
            raise RemoteWriteError(f"Failed to create folder: {e}") from e

        if not result.data:
            raise RemoteWriteError("Failed to create folder")
        return FolderResponse(**result.data[0])

    def get_folders(self, user_id: str) -> List[FolderResponse]:
        """List the user's folders, newest first"""
        try:
            result = self.supabase.table(TABLE)\
                .select("*")\
                .eq("user_id", user_id)\
                .order("created_at", desc=True)\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching folders for user {user_id}: {e}")
            raise RemoteReadError(f"Failed to fetch folders: {e}") from e

        return [FolderResponse(**folder) for folder in result.data or []]

    def update_folder(self, user_id: str, folder_id: str, folder_data: FolderUpdate) -> FolderResponse:
        """Merge the fields that were set; other columns keep their values"""
        update_data = folder_data.model_dump(exclude_unset=True)
        if update_data.get("name") is None:
            update_data.pop("name", None)
        if "description" in update_data and update_data["description"] is None:
            update_data["description"] = ""

        if not update_data:
            return self._get_folder(user_id, folder_id)

        try:
            result = self.supabase.table(TABLE)\
                .update(update_data)\
                .eq("id", folder_id)\
                .eq("user_id", user_id)\
                .execute()
        except Exception as e:
            logger.error(f"Error updating folder {folder_id}: {e}")
            raise RemoteWriteError(f"Failed to update folder: {e}") from e

        if not result.data:
            raise NotFound("Folder not found")
        return FolderResponse(**result.data[0])

    def delete_folder(self, user_id: str, folder_id: str) -> None:
        """Delete immediately; there is no soft delete"""
        try:
            result = self.supabase.table(TABLE)\
                .delete()\
                .eq("id", folder_id)\
                .eq("user_id", user_id)\
                .execute()
        except Exception as e:
            logger.error(f"Error deleting folder {folder_id}: {e}")
            raise RemoteWriteError(f"Failed to delete folder: {e}") from e

        if not result.data:
            raise NotFound("Folder not found")

    def _get_folder(self, user_id: str, folder_id: str) -> FolderResponse:
        try:
            result = self.supabase.table(TABLE)\
                .select("*")\
                .eq("id", folder_id)\
                .eq("user_id", user_id)\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching folder {folder_id}: {e}")
            raise RemoteReadError(f"Failed to fetch folder: {e}") from e

        if not result.data:
            raise NotFound("Folder not found")
        return FolderResponse(**result.data[0])
