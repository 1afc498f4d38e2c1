from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from forum.services.read_tracker import ReadStatus


class SThread(BaseModel):
    """Thread as shown in listings, including its routes."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    category_id: int = Field(..., description="Category ID")
    author_id: int = Field(..., description="Author ID")
    title: str
    locked: bool = False
    pinned: bool = False
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None
    old: bool = Field(..., description="Past the read-tracking cutoff")

    route: str
    reply_route: str
    update_route: str
    delete_route: str
    restore_route: str
    force_delete_route: str


class SThreadListing(SThread):
    """Listing row for a signed-in reader."""

    read_status: Optional[ReadStatus] = Field(default=None, description="None when the status could not be determined")
    reply_count: int = 0
    last_post_url: Optional[str] = None
