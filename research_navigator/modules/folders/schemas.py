from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class FolderCreate(BaseModel):
    name: str
    description: str = ""


class FolderUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None


class FolderResponse(BaseModel):
    id: str
    user_id: str
    name: str
    description: str = ""
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
