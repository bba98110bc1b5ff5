"""Tests for configuration management."""

import os
import tempfile
from pathlib import Path

import pytest

from packages.core.config import (
    DEFAULT_BACKEND_URL,
    DEFAULT_METHOD,
    Environment,
    LogLevel,
    TranslatorConfig,
    clear_config_cache,
    get_config,
)
from packages.core.errors import ConfigurationError
from packages.core.i18n import Locale


ENV_VARS = [
    "SIGNTRANSLATOR_DATA_DIR",
    "SIGNTRANSLATOR_RECORDINGS_DIR",
    "SIGNTRANSLATOR_STATE_FILE",
    "SIGNTRANSLATOR_ENV",
    "SIGNTRANSLATOR_LOG_LEVEL",
    "SIGNTRANSLATOR_DEBUG",
    "SIGNTRANSLATOR_BACKEND_URL",
    "SIGNTRANSLATOR_REQUEST_TIMEOUT",
    "SIGNTRANSLATOR_TARGET_FPS",
    "SIGNTRANSLATOR_MAX_SEQ_LEN",
    "SIGNTRANSLATOR_RECORD_MAX_SECONDS",
    "SIGNTRANSLATOR_CAMERA_INDEX",
    "SIGNTRANSLATOR_METHOD",
    "SIGNTRANSLATOR_LANGUAGE",
]


@pytest.fixture(autouse=True)
def clear_cache():
    """Clear config cache before and after each test."""
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def clean_env():
    """Remove translator env vars, point data at a temp dir, restore after test."""
    original = {k: os.environ.get(k) for k in ENV_VARS}
    for var in ENV_VARS:
        os.environ.pop(var, None)

    with tempfile.TemporaryDirectory() as tmpdir:
        os.environ["SIGNTRANSLATOR_DATA_DIR"] = tmpdir
        yield Path(tmpdir)

    for var, value in original.items():
        if value is not None:
            os.environ[var] = value
        else:
            os.environ.pop(var, None)


def make_config(tmpdir: str, **overrides) -> TranslatorConfig:
    args = dict(
        data_dir=Path(tmpdir),
        recordings_dir=Path(tmpdir) / "recordings",
        state_file=Path(tmpdir) / "state.json",
        env=Environment.TESTING,
        log_level=LogLevel.INFO,
        debug=False,
    )
    args.update(overrides)
    return TranslatorConfig(**args)


class TestEnvironment:
    """Tests for Environment enum."""

    def test_values(self):
        assert Environment.DEVELOPMENT.value == "development"
        assert Environment.PRODUCTION.value == "production"
        assert Environment.TESTING.value == "testing"


class TestTranslatorConfig:
    """Tests for TranslatorConfig dataclass."""

    def test_pipeline_defaults(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            config = make_config(tmpdir)

            assert config.target_fps == 25
            assert config.max_seq_len == 190
            assert config.record_max_seconds == 8
            assert config.img_size == (224, 224)
            assert config.max_num_hands == 2
            assert config.min_detection_confidence == 0.4
            assert config.min_tracking_confidence == 0.4
            assert config.model_complexity == 1
            assert config.speech_lang == "de-DE"
            assert config.backend_url == DEFAULT_BACKEND_URL
            assert config.default_method == DEFAULT_METHOD

    def test_config_is_frozen(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            config = make_config(tmpdir)

            with pytest.raises(Exception):  # FrozenInstanceError
                config.target_fps = 30

    def test_testing_env_does_not_create_dirs(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            config = make_config(tmpdir, recordings_dir=Path(tmpdir) / "rec")
            assert not config.recordings_dir.exists()

    def test_other_envs_create_dirs(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            config = make_config(tmpdir, env=Environment.PRODUCTION)
            assert config.recordings_dir.is_dir()
            assert config.is_testing is False


class TestGetConfig:
    """Tests for get_config function."""

    def test_get_config_default(self, clean_env):
        config = get_config()

        assert config.env == Environment.DEVELOPMENT
        assert config.log_level == LogLevel.INFO
        assert config.debug is True  # Default in development
        assert config.data_dir == clean_env
        assert config.recordings_dir == clean_env / "recordings"
        assert config.state_file == clean_env / "state.json"
        assert config.language == Locale.EN

    def test_get_config_singleton(self, clean_env):
        assert get_config() is get_config()

    def test_clear_config_cache(self, clean_env):
        config1 = get_config()
        clear_config_cache()
        assert get_config() is not config1

    def test_env_overrides(self, clean_env):
        os.environ["SIGNTRANSLATOR_ENV"] = "testing"
        os.environ["SIGNTRANSLATOR_LOG_LEVEL"] = "debug"
        os.environ["SIGNTRANSLATOR_BACKEND_URL"] = "http://localhost:7860/api/translate_landmarks"
        os.environ["SIGNTRANSLATOR_TARGET_FPS"] = "30"
        os.environ["SIGNTRANSLATOR_REQUEST_TIMEOUT"] = "2.5"
        os.environ["SIGNTRANSLATOR_METHOD"] = "s2g_greedy_g2t"
        os.environ["SIGNTRANSLATOR_LANGUAGE"] = "de-DE"

        config = get_config()

        assert config.env == Environment.TESTING
        assert config.log_level == LogLevel.DEBUG
        assert config.debug is False
        assert config.backend_url == "http://localhost:7860/api/translate_landmarks"
        assert config.target_fps == 30
        assert config.request_timeout == 2.5
        assert config.default_method == "s2g_greedy_g2t"
        assert config.language == Locale.DE

    def test_invalid_env_falls_back(self, clean_env):
        os.environ["SIGNTRANSLATOR_ENV"] = "staging"
        os.environ["SIGNTRANSLATOR_LOG_LEVEL"] = "loud"

        config = get_config()

        assert config.env == Environment.DEVELOPMENT
        assert config.log_level == LogLevel.INFO

    def test_invalid_number_raises(self, clean_env):
        os.environ["SIGNTRANSLATOR_MAX_SEQ_LEN"] = "lots"

        with pytest.raises(ConfigurationError) as exc_info:
            get_config()

        assert exc_info.value.details["config_key"] == "SIGNTRANSLATOR_MAX_SEQ_LEN"

    def test_number_below_minimum_raises(self, clean_env):
        os.environ["SIGNTRANSLATOR_TARGET_FPS"] = "0"

        with pytest.raises(ConfigurationError):
            get_config()
