"""Feed-related schema definitions.

This module defines the Pydantic model for feed items and the error kinds
reported to the presentation layer.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class FeedItem(BaseModel):
    """Schema for one content item in a profile's feed.

    Items are identified by ``id``; ``created_at`` is the sort key the
    service orders feeds by (newest first).
    """

    id: int = Field(..., description="Stable item identifier")
    title: str = Field("", description="Item title")
    image_url: str | None = Field(None, description="Best available image URL")
    created_at: datetime = Field(..., description="Creation time, the sort key")
    like_count: int = Field(0, alias="likes_count", ge=0)

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    @model_validator(mode="before")
    @classmethod
    def pick_image(cls, data: Any) -> Any:
        if isinstance(data, dict) and "image_url" not in data:
            images = data.get("images") or {}
            if isinstance(images, dict):
                data = {
                    **data,
                    "image_url": images.get("hidpi") or images.get("normal"),
                }
        return data


class ErrorKind(str, Enum):
    """Error categories surfaced to the presentation layer."""

    PROFILE_UNAVAILABLE = "profile_unavailable"
    FEED_PAGE_FAILED = "feed_page_failed"
    FOLLOW_CHECK_FAILED = "follow_check_failed"
    FOLLOW_TOGGLE_FAILED = "follow_toggle_failed"
