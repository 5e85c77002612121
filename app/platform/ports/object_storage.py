from typing import BinaryIO, Protocol, runtime_checkable

@runtime_checkable
class ObjectStoragePort(Protocol):
    bucket: str

    def put_object(self, key: str, body: BinaryIO, content_type: str) -> None: ...

    def presign_download(self, key: str, expires_seconds: int, bucket: str | None = None) -> str: ...

    def delete(self, key: str) -> None: ...
