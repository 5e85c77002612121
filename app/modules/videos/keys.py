from app.modules.videos.orientation import Orientation

THUMBNAIL_PREFIX = "thumbnails"

def build_video_key(orientation: Orientation, filename: str) -> str:
    if not filename:
        raise ValueError("filename must not be empty")
    return f"{Orientation(orientation).value}/{filename}"

def build_thumbnail_key(filename: str) -> str:
    if not filename:
        raise ValueError("filename must not be empty")
    return f"{THUMBNAIL_PREFIX}/{filename}"
