import uuid
from datetime import datetime
from pydantic import BaseModel, ConfigDict

class VideoOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: uuid.UUID
    title: str
    description: str
    # already resolved: direct URL or a freshly signed one
    thumbnail_url: str | None = None
    video_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
