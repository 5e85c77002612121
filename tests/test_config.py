import pytest
from pydantic import ValidationError

from app.core.config import PipelineConfig, Settings


def test_pipeline_config_from_settings() -> None:
    s = Settings(
        S3_BUCKET="clips",
        VIDEO_REFERENCE_MODE="public",
        CDN_BASE_URL="https://cdn.example",
        SIGNED_URL_TTL_SECONDS=30,
        ASPECT_RATIO_TOLERANCE=0.05,
        UPLOAD_TMP_DIR="/var/tmp/uploads",
    )
    config = PipelineConfig.from_settings(s)
    assert config.bucket == "clips"
    assert config.reference_mode == "public"
    assert config.signed_url_ttl_seconds == 30
    assert config.aspect_ratio_tolerance == 0.05
    assert config.tmp_dir == "/var/tmp/uploads"


def test_pipeline_config_defaults_tmp_dir() -> None:
    config = PipelineConfig.from_settings(Settings(UPLOAD_TMP_DIR=None))
    assert config.tmp_dir


def test_public_mode_requires_cdn() -> None:
    with pytest.raises(ValidationError):
        PipelineConfig(bucket="clips", reference_mode="public")


def test_pipeline_config_is_frozen() -> None:
    config = PipelineConfig(bucket="clips")
    with pytest.raises(ValidationError):
        config.bucket = "other"


def test_settings_reject_non_asyncpg_dsn() -> None:
    with pytest.raises(ValidationError):
        Settings(POSTGRES_DSN="postgresql://localhost/tubely")


def test_settings_reject_non_positive_ttl() -> None:
    with pytest.raises(ValidationError):
        Settings(SIGNED_URL_TTL_SECONDS=0)
