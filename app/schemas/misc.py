from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class VisitIn(BaseModel):
    visitor_id: str = Field(..., min_length=1, max_length=64)
    location: str = Field(..., min_length=1, max_length=255)


class VisitOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    visitor_id: str
    location: str
    created_at: datetime


class ImageUploadOut(BaseModel):
    url: str
    delete_url: Optional[str] = None
    filename: str
