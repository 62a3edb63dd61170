"""Pydantic schemas for saved content endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class ContentCreateRequest(BaseModel):
    title: str
    link: str
    content_type: str = Field(..., description="One of image, video, article, audio, document, twitter.")
    user_id: int


class EmbedSchema(BaseModel):
    provider: str
    id: str


class ContentSchema(BaseModel):
    id: int
    title: str
    link: str
    content_type: str
    user_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    embed: Optional[EmbedSchema] = None


class ContentCreateResponse(BaseModel):
    content: ContentSchema


class ContentListResponse(BaseModel):
    contents: List[ContentSchema]


class ContentDeleteResponse(BaseModel):
    id: int
    title: str
