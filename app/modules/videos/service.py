"""
Video ingestion pipeline.

One upload moves through

    staged -> inspected -> remuxed -> uploaded -> reference-written

and any failure ends it in `failed`. Staged and remuxed files live in the
upload tmp dir and are removed before the request returns, whatever the outcome.
Nothing is written to the video record unless the object upload succeeded, and
an uploaded object whose record write fails is deleted again.
"""
import logging
import os
import tempfile
import uuid
from contextlib import ExitStack, suppress
from typing import BinaryIO, Protocol
from starlette.concurrency import run_in_threadpool
from app.core.config import PipelineConfig
from app.core.errors import (
    PipelineError, InputRejectedError, NotFoundError, AuthorizationError, StorageError,
)
from app.platform.ports.object_storage import ObjectStoragePort
from app.platform.ports.media_tools import MediaProbePort, RemuxerPort
from app.modules.videos.models import Video
from app.modules.videos.repository import VideoStorePort
from app.modules.videos.schemas import VideoOut
from app.modules.videos.naming import new_asset_filename
from app.modules.videos.orientation import MediaInspector
from app.modules.videos.keys import build_video_key, build_thumbnail_key
from app.modules.videos.references import ReferenceResolver, reference_for_key

log = logging.getLogger("videos.pipeline")

VIDEO_MEDIA_TYPES = frozenset({"video/mp4"})
THUMBNAIL_MEDIA_TYPES = frozenset({"image/jpeg", "image/png"})
CHUNK_SIZE = 1 << 20

class UploadLike(Protocol):
    """The bits of fastapi.UploadFile the pipeline reads."""
    content_type: str | None
    size: int | None
    file: BinaryIO

def declared_media_type(header: str | None) -> str:
    """`Video/MP4; codecs=avc1` -> `video/mp4`."""
    if not header:
        raise InputRejectedError("Unable to get media type from header")
    media_type = header.split(";", 1)[0].strip().lower()
    if media_type.count("/") != 1:
        raise InputRejectedError(f"Unable to parse media type {header!r}")
    return media_type

def _discard(path: str) -> None:
    with suppress(FileNotFoundError):
        os.remove(path)

class VideoService:
    def __init__(
        self,
        repo: VideoStorePort,
        storage: ObjectStoragePort,
        prober: MediaProbePort,
        remuxer: RemuxerPort,
        config: PipelineConfig,
    ):
        self.repo = repo
        self.storage = storage
        self.inspector = MediaInspector(prober, tolerance=config.aspect_ratio_tolerance)
        self.remuxer = remuxer
        self.config = config
        self.resolver = ReferenceResolver(storage, ttl_seconds=config.signed_url_ttl_seconds)

    # ---- reads ----
    async def get_video(self, video_id: uuid.UUID) -> VideoOut:
        video = await self.repo.get(video_id)
        if video is None:
            raise NotFoundError(f"Video {video_id} not found")
        return self.to_out(video)

    def to_out(self, video: Video) -> VideoOut:
        """Resolve stored references into URLs on a copy; the record itself is left alone."""
        out = VideoOut.model_validate(video)
        return out.model_copy(update={
            "video_url": self.resolver.resolve(video.video_url) if video.video_url else None,
            "thumbnail_url": self.resolver.resolve(video.thumbnail_url) if video.thumbnail_url else None,
        })

    # ---- video upload ----
    async def upload_video(self, user_id: uuid.UUID, video_id: uuid.UUID, upload: UploadLike) -> VideoOut:
        media_type = declared_media_type(upload.content_type)
        if media_type not in VIDEO_MEDIA_TYPES:
            raise InputRejectedError("File is not an mp4 video")
        self._check_declared_size(upload, self.config.max_video_bytes)
        video = await self._owned_video(user_id, video_id)

        try:
            key = await run_in_threadpool(self._ingest_video, video_id, upload.file, media_type)
            await self._write_reference(video, "video_url", key)
        except PipelineError as e:
            log.warning(f"video={video_id} state=failed stage={e.stage}: {e.message}")
            raise
        log.info(f"video={video_id} state=reference-written key={key}")
        return self.to_out(video)

    def _ingest_video(self, video_id: uuid.UUID, src: BinaryIO, media_type: str) -> str:
        """Blocking part of the pipeline. Returns the storage key of the uploaded object."""
        with ExitStack() as cleanup:
            staged = self._stage(src, cleanup, limit=self.config.max_video_bytes, suffix=".mp4")
            log.info(f"video={video_id} state=staged path={staged}")

            orientation = self.inspector.inspect(staged)
            log.info(f"video={video_id} state=inspected orientation={orientation.value}")

            processed = self.remuxer.remux(staged)
            cleanup.callback(_discard, processed)
            log.info(f"video={video_id} state=remuxed path={processed}")

            key = build_video_key(orientation, new_asset_filename(media_type))
            with open(processed, "rb") as body:
                self.storage.put_object(key, body, content_type=media_type)
        log.info(f"video={video_id} state=uploaded key={key}")
        return key

    # ---- thumbnail upload ----
    async def upload_thumbnail(self, user_id: uuid.UUID, video_id: uuid.UUID, upload: UploadLike) -> VideoOut:
        media_type = declared_media_type(upload.content_type)
        if media_type not in THUMBNAIL_MEDIA_TYPES:
            raise InputRejectedError("Media type is not an image")
        self._check_declared_size(upload, self.config.max_thumbnail_bytes)
        video = await self._owned_video(user_id, video_id)

        try:
            key = await run_in_threadpool(self._ingest_thumbnail, upload.file, media_type)
            await self._write_reference(video, "thumbnail_url", key)
        except PipelineError as e:
            log.warning(f"video={video_id} thumbnail state=failed stage={e.stage}: {e.message}")
            raise
        log.info(f"video={video_id} thumbnail written key={key}")
        return self.to_out(video)

    def _ingest_thumbnail(self, src: BinaryIO, media_type: str) -> str:
        filename = new_asset_filename(media_type)
        with ExitStack() as cleanup:
            staged = self._stage(src, cleanup, limit=self.config.max_thumbnail_bytes, suffix=os.path.splitext(filename)[1])
            key = build_thumbnail_key(filename)
            with open(staged, "rb") as body:
                self.storage.put_object(key, body, content_type=media_type)
        return key

    # ---- helpers ----
    async def _write_reference(self, video: Video, field: str, key: str) -> None:
        previous = getattr(video, field)
        setattr(video, field, reference_for_key(key, self.config).serialize())
        try:
            await self.repo.update(video)
        except Exception:
            # nothing points at the uploaded object any more
            setattr(video, field, previous)
            await run_in_threadpool(self._discard_object, key)
            raise

    def _discard_object(self, key: str) -> None:
        try:
            self.storage.delete(key)
        except StorageError as e:
            log.warning(f"could not remove orphaned object {key}: {e.message}")
        else:
            log.info(f"removed orphaned object {key}")

    async def _owned_video(self, user_id: uuid.UUID, video_id: uuid.UUID) -> Video:
        video = await self.repo.get(video_id)
        if video is None:
            raise NotFoundError(f"Video {video_id} not found")
        if video.user_id != user_id:
            raise AuthorizationError("Not the video owner")
        return video

    @staticmethod
    def _check_declared_size(upload: UploadLike, limit: int) -> None:
        if upload.size is not None and upload.size > limit:
            raise InputRejectedError(f"File too large (>{limit} bytes)")

    def _stage(self, src: BinaryIO, cleanup: ExitStack, *, limit: int, suffix: str) -> str:
        """Copy the upload into a private temp file that `cleanup` removes on exit."""
        fd, path = tempfile.mkstemp(prefix="tubely-upload-", suffix=suffix, dir=self.config.tmp_dir)
        cleanup.callback(_discard, path)
        copied = 0
        with os.fdopen(fd, "wb") as out:
            while chunk := src.read(CHUNK_SIZE):
                copied += len(chunk)
                if copied > limit:
                    raise InputRejectedError(f"File too large (>{limit} bytes)", stage="stage")
                out.write(chunk)
        log.debug(f"staged {copied} bytes at {path}")
        return path
