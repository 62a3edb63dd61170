"""Pydantic schemas for share link endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from schemas.api.content import ContentSchema


class ShareCreateRequest(BaseModel):
    contentId: int = Field(..., description="ID of the content to share.")


class ShareCreateResponse(BaseModel):
    shareUrl: str
    token: str
    expiresAt: Optional[datetime] = None


class ShareMetadataSchema(BaseModel):
    token: str
    createdAt: Optional[datetime] = None
    expiresAt: Optional[datetime] = None


class SharedContentResponse(BaseModel):
    content: ContentSchema
    share: ShareMetadataSchema
