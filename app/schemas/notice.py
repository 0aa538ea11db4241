from typing import Optional, Literal
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


NoticeType = Literal[
    "text",
    "image",
    "video",  # content holds the video URL
    "link",   # content holds the target URL
]


class NoticeBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: str
    type: NoticeType = "text"
    image_url: Optional[str] = None


class NoticeCreate(NoticeBase):
    pass


class NoticeUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    content: Optional[str] = None
    type: Optional[NoticeType] = None
    image_url: Optional[str] = None


class NoticeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    content: str
    type: NoticeType
    image_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class NoticeListOut(BaseModel):
    items: list[NoticeOut]
    total: int
    page: int
    page_size: int
