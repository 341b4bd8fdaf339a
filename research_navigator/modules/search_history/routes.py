from fastapi import APIRouter, Depends
from research_navigator.core.dependencies import get_current_user, get_user_supabase
from research_navigator.modules.search_history.schemas import SearchHistoryCreate, SearchHistoryResponse
from research_navigator.modules.search_history.service import SearchHistoryService
from supabase import Client
from typing import Dict, List

router = APIRouter(prefix="/search-history", tags=["search-history"])


def get_search_history_service(supabase: Client = Depends(get_user_supabase)) -> SearchHistoryService:
    return SearchHistoryService(supabase)


@router.post("", response_model=SearchHistoryResponse, status_code=201)
async def add_search_history(
    entry: SearchHistoryCreate,
    current_user: Dict = Depends(get_current_user),
    service: SearchHistoryService = Depends(get_search_history_service)
):
    """Record a search"""
    return service.add_search_history(current_user["id"], entry.query, entry.filters)


@router.get("", response_model=List[SearchHistoryResponse])
async def list_search_history(
    current_user: Dict = Depends(get_current_user),
    service: SearchHistoryService = Depends(get_search_history_service)
):
    """List the current user's searches, newest first"""
    return service.get_search_history(current_user["id"])
