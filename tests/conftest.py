import uuid

import pytest

from app.core.config import PipelineConfig
from app.modules.videos.models import Video
from app.modules.videos.service import VideoService
from tests.fakes import FakeProbe, FakeRemuxer, FakeStorage, FakeVideoStore


@pytest.fixture
def owner_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture
def video(owner_id) -> Video:
    return Video(id=uuid.uuid4(), user_id=owner_id, title="Boots", description="", video_url=None, thumbnail_url=None)


@pytest.fixture
def config(tmp_path) -> PipelineConfig:
    return PipelineConfig(bucket="tubely-test", tmp_dir=str(tmp_path), max_video_bytes=1024, max_thumbnail_bytes=256)


@pytest.fixture
def store(video) -> FakeVideoStore:
    return FakeVideoStore(video)


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def probe() -> FakeProbe:
    return FakeProbe()


@pytest.fixture
def remuxer() -> FakeRemuxer:
    return FakeRemuxer()


@pytest.fixture
def service(store, storage, probe, remuxer, config) -> VideoService:
    return VideoService(store, storage, probe, remuxer, config)
