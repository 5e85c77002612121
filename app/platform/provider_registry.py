from app.core.config import settings, PipelineConfig
from app.platform.ports.object_storage import ObjectStoragePort
from app.platform.ports.media_tools import MediaProbePort, RemuxerPort
from app.platform.adapters.storage_local import LocalFilesystemStorage
from app.platform.adapters.storage_s3 import S3Storage
from app.platform.adapters.probe_ffprobe import FFprobeInspector
from app.platform.adapters.remux_ffmpeg import FFmpegFastStartRemuxer

class ProviderRegistry:
    _object_storage: ObjectStoragePort | None = None
    _media_probe: MediaProbePort | None = None
    _remuxer: RemuxerPort | None = None
    _pipeline_config: PipelineConfig | None = None

    @classmethod
    def object_storage(cls) -> ObjectStoragePort:
        if cls._object_storage is None:
            if settings.OBJECT_STORAGE_PROVIDER == "s3":
                cls._object_storage = S3Storage(
                    settings.S3_BUCKET,
                    region=settings.S3_REGION,
                    endpoint_url=settings.S3_ENDPOINT_URL,
                    access_key=settings.S3_ACCESS_KEY,
                    secret_key=settings.S3_SECRET_KEY,
                )
            else:
                cls._object_storage = LocalFilesystemStorage(settings.LOCAL_STORAGE_ROOT, bucket=settings.S3_BUCKET)
        return cls._object_storage

    @classmethod
    def media_probe(cls) -> MediaProbePort:
        if cls._media_probe is None:
            cls._media_probe = FFprobeInspector(settings.FFPROBE_BIN)
        return cls._media_probe

    @classmethod
    def remuxer(cls) -> RemuxerPort:
        if cls._remuxer is None:
            cls._remuxer = FFmpegFastStartRemuxer(settings.FFMPEG_BIN)
        return cls._remuxer

    @classmethod
    def pipeline_config(cls) -> PipelineConfig:
        if cls._pipeline_config is None:
            cls._pipeline_config = PipelineConfig.from_settings(settings)
        return cls._pipeline_config

registry = ProviderRegistry()
