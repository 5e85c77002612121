from fastapi import APIRouter
from app.modules.videos.router import router as videos_router

api_router = APIRouter()
api_router.include_router(videos_router, prefix="/videos", tags=["videos"])

@api_router.get("/health", tags=["health"])
async def health():
    return {"status": "ok"}
