import uuid
from fastapi import APIRouter, UploadFile, File, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.db import get_session
from app.core.security import get_principal, Principal
from app.modules.videos.repository import VideoRepository
from app.modules.videos.schemas import VideoOut
from app.modules.videos.service import VideoService
from app.platform.provider_registry import registry

router = APIRouter()

def svc(session: AsyncSession = Depends(get_session)) -> VideoService:
    return VideoService(
        VideoRepository(session),
        registry.object_storage(),
        registry.media_probe(),
        registry.remuxer(),
        registry.pipeline_config(),
    )

@router.get("/{video_id}", response_model=VideoOut)
async def get_video(
    video_id: uuid.UUID,
    principal: Principal = Depends(get_principal),
    service: VideoService = Depends(svc),
):
    # any authenticated user may read; only uploads are owner-gated
    return await service.get_video(video_id)

@router.post("/{video_id}/video", response_model=VideoOut)
async def upload_video(
    video_id: uuid.UUID,
    video: UploadFile = File(...),
    principal: Principal = Depends(get_principal),
    service: VideoService = Depends(svc),
):
    return await service.upload_video(principal.user_id, video_id, video)

@router.post("/{video_id}/thumbnail", response_model=VideoOut)
async def upload_thumbnail(
    video_id: uuid.UUID,
    thumbnail: UploadFile = File(...),
    principal: Principal = Depends(get_principal),
    service: VideoService = Depends(svc),
):
    return await service.upload_thumbnail(principal.user_id, video_id, thumbnail)
