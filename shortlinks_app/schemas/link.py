from pydantic import BaseModel, Field, ConfigDict
from typing import Any, Optional
from datetime import datetime


class ShortenRequest(BaseModel):
    """Body of POST /api/shorten.

    Fields are deliberately loose: a missing or malformed ``url`` must be
    answered with 400 ``Invalid URL provided``, not a 422 from validation.
    """
    url: Optional[Any] = Field(None, description="The original URL to be shortened")
    customCode: Optional[Any] = Field(None, description="Optional custom short code")

    model_config = ConfigDict(extra="ignore")


class ShortenResponse(BaseModel):
    success: bool = True
    shortUrl: str
    shortCode: str
    originalUrl: str


class LinkStats(BaseModel):
    shortCode: str
    originalUrl: str
    clicks: int
    createdAt: datetime


class LinkRecord(BaseModel):
    """Row of GET /api/links, serialized straight from the Link model"""
    id: int
    short_code: str
    original_url: str
    created_at: datetime
    clicks: int

    # Pydantic V2 style configuration
    model_config = ConfigDict(from_attributes=True)


class ErrorResponse(BaseModel):
    error: str
