from fastapi import APIRouter, Depends
from research_navigator.core.dependencies import get_current_user, get_user_supabase
from research_navigator.modules.folders.schemas import FolderCreate, FolderUpdate, FolderResponse
from research_navigator.modules.folders.service import FolderService
from supabase import Client
from typing import Dict, List

router = APIRouter(prefix="/folders", tags=["folders"])


def get_folder_service(supabase: Client = Depends(get_user_supabase)) -> FolderService:
    return FolderService(supabase)


@router.post("", response_model=FolderResponse, status_code=201)
async def create_folder(
    folder_data: FolderCreate,
    current_user: Dict = Depends(get_current_user),
    service: FolderService = Depends(get_folder_service)
):
    """Create a new folder"""
    return service.create_folder(current_user["id"], folder_data)


@router.get("", response_model=List[FolderResponse])
async def list_folders(
    current_user: Dict = Depends(get_current_user),
    service: FolderService = Depends(get_folder_service)
):
    """List the current user's folders, newest first"""
    return service.get_folders(current_user["id"])


@router.patch("/{folder_id}", response_model=FolderResponse)
async def update_folder(
    folder_id: str,
    folder_data: FolderUpdate,
    current_user: Dict = Depends(get_current_user),
    service: FolderService = Depends(get_folder_service)
):
    """Rename or re-describe a folder"""
    return service.update_folder(current_user["id"], folder_id, folder_data)


@router.delete("/{folder_id}", status_code=204)
async def delete_folder(
    folder_id: str,
    current_user: Dict = Depends(get_current_user),
    service: FolderService = Depends(get_folder_service)
):
    """Delete a folder"""
    service.delete_folder(current_user["id"], folder_id)
    return None
