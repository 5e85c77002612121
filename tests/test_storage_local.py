import io
import os

import pytest

from app.core.errors import StorageError
from app.platform.adapters.storage_local import LocalFilesystemStorage


def test_put_and_presign(tmp_path) -> None:
    storage = LocalFilesystemStorage(str(tmp_path / "assets"), bucket="local")
    storage.put_object("portrait/a.mp4", io.BytesIO(b"video"), content_type="video/mp4")

    path = tmp_path / "assets" / "portrait" / "a.mp4"
    assert path.read_bytes() == b"video"
    assert storage.presign_download("portrait/a.mp4", expires_seconds=60).startswith("file://")


def test_keys_cannot_escape_root(tmp_path) -> None:
    storage = LocalFilesystemStorage(str(tmp_path / "assets"))
    storage.put_object("../../evil.mp4", io.BytesIO(b"x"), content_type="video/mp4")
    assert not (tmp_path / "evil.mp4").exists()
    assert (tmp_path / "assets" / "evil.mp4").read_bytes() == b"x"


def test_delete(tmp_path) -> None:
    storage = LocalFilesystemStorage(str(tmp_path))
    storage.put_object("other/a.mp4", io.BytesIO(b"x"), content_type="video/mp4")
    storage.delete("other/a.mp4")
    storage.delete("other/a.mp4")
    assert not os.path.exists(tmp_path / "other" / "a.mp4")


def test_delete_error_is_a_storage_error(tmp_path) -> None:
    storage = LocalFilesystemStorage(str(tmp_path))
    (tmp_path / "portrait" / "a.mp4").mkdir(parents=True)
    with pytest.raises(StorageError) as exc:
        storage.delete("portrait/a.mp4")
    assert exc.value.stage == "delete"
