from fastapi import APIRouter, Depends
from pydantic import BaseModel
from research_navigator.core.dependencies import get_optional_user
from research_navigator.views.navigation import decide_route
from typing import Dict, Optional

router = APIRouter(prefix="/navigation", tags=["navigation"])


class RouteDecisionResponse(BaseModel):
    path: str
    redirected: bool


@router.get("/resolve", response_model=RouteDecisionResponse)
async def resolve(
    path: str,
    current_user: Optional[Dict] = Depends(get_optional_user)
):
    """Where a client asking for ``path`` should land"""
    decision = decide_route(path, authenticated=current_user is not None)
    return RouteDecisionResponse(path=decision.path, redirected=decision.redirected)
