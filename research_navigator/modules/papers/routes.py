from fastapi import APIRouter, Depends
from research_navigator.core.dependencies import get_current_user
from research_navigator.modules.papers.schemas import PaperSearchRequest, PaperSearchResponse
from research_navigator.modules.papers.service import PaperSearchService
from typing import Dict

router = APIRouter(prefix="/papers", tags=["papers"])


def get_paper_search_service() -> PaperSearchService:
    return PaperSearchService()


@router.post("/search", response_model=PaperSearchResponse)
async def search_papers(
    search: PaperSearchRequest,
    current_user: Dict = Depends(get_current_user),
    service: PaperSearchService = Depends(get_paper_search_service)
):
    """Proxy a free-text (and optionally advanced) search to the paper API"""
    return await service.search(search.query, search.advanced)
