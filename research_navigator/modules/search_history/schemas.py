from pydantic import BaseModel, field_validator
from typing import Any, Dict, Optional
from datetime import datetime


class SearchHistoryCreate(BaseModel):
    query: str
    filters: Dict[str, str] = {}


class SearchHistoryResponse(BaseModel):
    id: str
    user_id: str
    query: str
    # older rows may carry list values (keywords) or no filters at all
    filters: Dict[str, Any] = {}
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @field_validator("filters", mode="before")
    @classmethod
    def empty_for_null(cls, v):
        return {} if v is None else v
