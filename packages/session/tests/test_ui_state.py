"""Tests for per-section speaking flags."""

import pytest

from packages.session.ui_state import (
    RESULTS_SECTION,
    SectionStates,
    SpeechToggle,
)


class RecordingSpeaker:
    def __init__(self, fail=False):
        self.fail = fail
        self.spoken = []
        self.stops = 0

    def speak(self, text, lang):
        if self.fail:
            raise RuntimeError("no voices installed")
        self.spoken.append((text, lang))

    def stop(self):
        self.stops += 1


@pytest.fixture
def states():
    return SectionStates()


class TestSectionStates:
    def test_speaking_is_exclusive(self, states):
        states.set_speaking(RESULTS_SECTION)
        states.set_speaking("entry-1")

        assert states.speaking_section == "entry-1"
        assert not states.is_speaking(RESULTS_SECTION)

    def test_clear_one_section(self, states):
        states.set_speaking("entry-1")

        states.clear_speaking(RESULTS_SECTION)
        assert states.is_speaking("entry-1")

        states.clear_speaking("entry-1")
        assert states.speaking_section is None


class TestSpeechToggle:
    def test_toggle_starts_then_stops(self, states):
        speaker = RecordingSpeaker()
        toggle = SpeechToggle(speaker, states)

        assert toggle.toggle(RESULTS_SECTION, "Guten Morgen") is True
        assert speaker.spoken == [("Guten Morgen", "de-DE")]
        assert states.is_speaking(RESULTS_SECTION)

        assert toggle.toggle(RESULTS_SECTION, "Guten Morgen") is False
        assert states.speaking_section is None
        assert len(speaker.spoken) == 1

    def test_switching_sections_interrupts(self, states):
        speaker = RecordingSpeaker()
        toggle = SpeechToggle(speaker, states)

        toggle.toggle(RESULTS_SECTION, "Hallo")
        toggle.toggle("entry-1", "Danke")

        assert states.speaking_section == "entry-1"
        assert speaker.spoken[-1] == ("Danke", "de-DE")
        assert speaker.stops == 2

    def test_speak_restarts_same_section(self, states):
        speaker = RecordingSpeaker()
        toggle = SpeechToggle(speaker, states)

        toggle.speak(RESULTS_SECTION, "Hallo")
        assert toggle.speak(RESULTS_SECTION, "Hallo") is True

        assert len(speaker.spoken) == 2

    def test_speech_failure_is_logged(self, states, caplog):
        toggle = SpeechToggle(RecordingSpeaker(fail=True), states)

        assert toggle.toggle(RESULTS_SECTION, "Hallo") is False
        assert states.speaking_section is None
        assert "no voices installed" in caplog.text
