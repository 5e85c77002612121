import uuid
from typing import Protocol
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from app.modules.videos.models import Video

class VideoStorePort(Protocol):
    async def get(self, video_id: uuid.UUID) -> Video | None: ...

    async def update(self, video: Video) -> Video: ...

class VideoRepository(VideoStorePort):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, video_id: uuid.UUID) -> Video | None:
        q = select(Video).where(Video.id == video_id)
        res = await self.session.execute(q)
        return res.scalar_one_or_none()

    async def update(self, video: Video) -> Video:
        self.session.add(video)
        await self.session.commit()
        return video
