"""Tests for the translate command."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from packages.core import Locale, ServiceError, TranslationResult
from packages.session import SessionController
from src.main import app


@pytest.fixture
def video(tmp_path):
    path = tmp_path / "clip.mp4"
    path.write_bytes(b"\x00\x00")
    return path


@pytest.fixture
def session():
    return SessionController(camera_provider=MagicMock(), recorder_factory=MagicMock())


@pytest.fixture
def orchestrator():
    orchestrator = MagicMock()
    orchestrator.locale = Locale.EN
    orchestrator.logs = ["09:00:00: Starting landmark extraction"]
    orchestrator.translate = AsyncMock(return_value=TranslationResult(
        gloss="HALLO", translation="Hallo", confidence=0.91, method="s2g_beam_g2t",
        method_label="Sign2Gloss (beam search) + Gloss2Text",
    ))
    return orchestrator


@pytest.fixture
def wired(session, orchestrator):
    with patch("src.commands.translate.build_session", return_value=session) as build_session, \
         patch("src.commands.translate.build_orchestrator", return_value=orchestrator) as build_orch:
        yield build_session, build_orch


class TestTranslateCommand:
    def test_success(self, cli_runner, video, session, orchestrator, wired):
        result = cli_runner.invoke(app, ["translate", str(video)])

        assert result.exit_code == 0
        assert "Hallo" in result.stdout
        assert "HALLO" in result.stdout
        assert "91%" in result.stdout
        assert session.clip == video
        orchestrator.translate.assert_awaited_once()

    def test_method_is_forwarded(self, cli_runner, video, wired):
        _, build_orch = wired

        result = cli_runner.invoke(app, ["translate", str(video), "--method", "s2g_greedy_g2t"])

        assert result.exit_code == 0
        assert build_orch.call_args.kwargs["method"] == "s2g_greedy_g2t"

    def test_unknown_method(self, cli_runner, video, wired):
        _, build_orch = wired

        result = cli_runner.invoke(app, ["translate", str(video), "--method", "magic"])

        assert result.exit_code == 1
        assert "Unknown method" in result.stdout
        build_orch.assert_not_called()

    def test_not_a_video(self, cli_runner, tmp_path, orchestrator, wired):
        notes = tmp_path / "notes.txt"
        notes.write_text("hello")

        result = cli_runner.invoke(app, ["translate", str(notes)])

        assert result.exit_code == 1
        assert "Please select a valid video file" in result.stdout
        orchestrator.translate.assert_not_awaited()

    def test_service_error_with_log(self, cli_runner, video, orchestrator, wired):
        orchestrator.translate.side_effect = ServiceError("Model not loaded", status_code=500)

        result = cli_runner.invoke(app, ["translate", str(video), "--log"])

        assert result.exit_code == 1
        assert "Error: Model not loaded" in result.stdout
        assert "Starting landmark extraction" in result.stdout
