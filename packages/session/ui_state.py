"""Per-section speaking flags.

Sections are keyed by an id ("results" or a history entry id). At most
one section speaks at a time, mirroring a single speech engine.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from packages.core import Speaker

logger = logging.getLogger(__name__)

RESULTS_SECTION = "results"


@dataclass
class SectionState:
    speaking: bool = False


class SectionStates:
    """Registry of per-section UI flags."""

    def __init__(self):
        self._sections: dict[str, SectionState] = {}

    def _section(self, section: str) -> SectionState:
        return self._sections.setdefault(section, SectionState())

    @property
    def speaking_section(self) -> Optional[str]:
        for key, state in self._sections.items():
            if state.speaking:
                return key
        return None

    def is_speaking(self, section: str) -> bool:
        return self._section(section).speaking

    def set_speaking(self, section: str) -> None:
        for key, state in self._sections.items():
            state.speaking = key == section
        self._section(section).speaking = True

    def clear_speaking(self, section: Optional[str] = None) -> None:
        for key, state in self._sections.items():
            if section is None or key == section:
                state.speaking = False


class SpeechToggle:
    """Speak a section's text, or stop if that section is already speaking."""

    def __init__(self, speaker: Speaker, states: Optional[SectionStates] = None, lang: str = "de-DE"):
        self.speaker = speaker
        self.states = states or SectionStates()
        self.lang = lang

    def toggle(self, section: str, text: str) -> bool:
        """Returns True if the section started speaking."""
        if self.states.is_speaking(section):
            self.stop()
            return False
        self.speaker.stop()
        self.states.set_speaking(section)
        try:
            self.speaker.speak(text, self.lang)
        except Exception as e:
            logger.warning("Speech failed: %s", e)
            self.states.clear_speaking(section)
            return False
        return True

    def speak(self, section: str, text: str) -> bool:
        """Start speaking `section` regardless of the current state."""
        self.states.clear_speaking()
        return self.toggle(section, text)

    def stop(self) -> None:
        self.speaker.stop()
        self.states.clear_speaking()
