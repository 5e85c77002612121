import os
import shutil
from typing import BinaryIO
from urllib.parse import quote
from app.platform.ports.object_storage import ObjectStoragePort
from app.core.errors import StorageError

class LocalFilesystemStorage(ObjectStoragePort):
    """Stores objects under a directory; used for local development instead of S3."""

    def __init__(self, root: str, bucket: str = "local"):
        self.root = os.path.abspath(root)
        self.bucket = bucket
        os.makedirs(self.root, exist_ok=True)

    def _path(self, key: str) -> str:
        safe = key.replace("..", "").strip("/")
        return os.path.join(self.root, safe)

    def presign_download(self, key: str, expires_seconds: int, bucket: str | None = None) -> str:
        # Nothing to sign locally; serve via nginx or an API proxy in real setups.
        return f"file://{quote(self._path(key))}"

    def put_object(self, key: str, body: BinaryIO, content_type: str) -> None:
        path = self._path(key)
        try:
            os.makedirs(os.path.dirname(path), exist_ok=True)
            with open(path, "wb") as f:
                shutil.copyfileobj(body, f)
        except OSError as e:
            raise StorageError(f"Error writing {key} to {self.root}: {e}", stage="upload") from e

    def delete(self, key: str) -> None:
        path = self._path(key)
        try:
            if os.path.exists(path):
                os.remove(path)
        except OSError as e:
            raise StorageError(f"Error deleting {key} from {self.root}: {e}", stage="delete") from e
