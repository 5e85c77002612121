"""
Stored pointers to uploaded objects, and turning them back into URLs.

A record stores one of two shapes:

    "https://cdn.example/landscape/abc.mp4"   direct URL, returned as-is
    "my-bucket,landscape/abc.mp4"             bucket + key, signed on every read

Signed URLs are minted per read and never written back to the record.
"""
import logging
from dataclasses import dataclass
from urllib.parse import urlsplit
from app.core.config import PipelineConfig
from app.core.errors import MalformedReferenceError
from app.platform.ports.object_storage import ObjectStoragePort

log = logging.getLogger("media.references")

SEPARATOR = ","
DIRECT_SCHEMES = ("http", "https", "file")

@dataclass(frozen=True)
class DirectURL:
    url: str

    def serialize(self) -> str:
        return self.url

@dataclass(frozen=True)
class BucketKey:
    bucket: str
    key: str

    def serialize(self) -> str:
        return f"{self.bucket}{SEPARATOR}{self.key}"

StorageReference = DirectURL | BucketKey

def _is_direct_url(raw: str) -> bool:
    parts = urlsplit(raw)
    if parts.scheme not in DIRECT_SCHEMES:
        return False
    return bool(parts.netloc) or parts.scheme == "file"

def parse_reference(raw: str) -> StorageReference:
    if not raw:
        raise MalformedReferenceError("Empty storage reference")
    if _is_direct_url(raw):
        return DirectURL(raw)
    parts = raw.split(SEPARATOR)
    if len(parts) != 2:
        raise MalformedReferenceError(f"Malformed storage reference: expected '<bucket>,<key>', got {len(parts) - 1} separators")
    bucket, key = parts
    if not bucket or not key:
        raise MalformedReferenceError("Malformed storage reference: empty bucket or key")
    return BucketKey(bucket=bucket, key=key)

def reference_for_key(key: str, config: PipelineConfig) -> StorageReference:
    """What gets persisted for a freshly uploaded object, per deployment mode."""
    if config.reference_mode == "public":
        return DirectURL(f"{config.cdn_base_url}/{key}")
    return BucketKey(bucket=config.bucket, key=key)

class ReferenceResolver:
    def __init__(self, storage: ObjectStoragePort, ttl_seconds: int = 60):
        self.storage = storage
        self.ttl_seconds = ttl_seconds

    def resolve(self, ref: StorageReference | str) -> str:
        if isinstance(ref, str):
            ref = parse_reference(ref)
        if isinstance(ref, DirectURL):
            return ref.url
        if isinstance(ref, BucketKey):
            log.debug(f"signing {ref.bucket}/{ref.key} for {self.ttl_seconds}s")
            return self.storage.presign_download(ref.key, expires_seconds=self.ttl_seconds, bucket=ref.bucket)
        raise TypeError(f"Unsupported storage reference: {ref!r}")
