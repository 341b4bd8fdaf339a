import logging
from supabase import Client
from research_navigator.core.errors import RemoteReadError, RemoteWriteError
from research_navigator.modules.search_history.schemas import SearchHistoryResponse
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

TABLE = "search_history"


class SearchHistoryService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def add_search_history(
        self,
        user_id: str,
        query: str,
        filters: Optional[Dict[str, str]] = None
    ) -> SearchHistoryResponse:
        """Record one past query with its filters"""
        try:
            result = self.supabase.table(TABLE).insert({
                "user_id": user_id,
                "query": query,
                "filters": dict(filters or {}),
            }).execute()
        except Exception as e:
            logger.error(f"Error adding search history for user {user_id}: {e}")
            raise RemoteWriteError(f"Failed to add search history: {e}") from e

        if not result.data:
            raise RemoteWriteError("Failed to add search history")
        return SearchHistoryResponse(**result.data[0])

    def get_search_history(self, user_id: str) -> List[SearchHistoryResponse]:
        """List the user's searches, newest first"""
        try:
            result = self.supabase.table(TABLE)\
                .select("*")\
                .eq("user_id", user_id)\
                .order("created_at", desc=True)\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching search history for user {user_id}: {e}")
            raise RemoteReadError(f"Failed to fetch search history: {e}") from e

        return [SearchHistoryResponse(**entry) for entry in result.data or []]
