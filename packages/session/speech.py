"""Text-to-speech through a system speech command (espeak-ng, espeak or say)."""

import logging
import shutil
import subprocess
from typing import Optional

logger = logging.getLogger(__name__)

SPEECH_COMMANDS = ("espeak-ng", "espeak", "say")


def find_speech_command() -> Optional[str]:
    """First available speech program on PATH, None if there is none."""
    for name in SPEECH_COMMANDS:
        if shutil.which(name):
            return name
    return None


class CommandSpeaker:
    """Speaker backed by a speech program; one utterance at a time."""

    def __init__(self, command: Optional[str] = None):
        self.command = command or find_speech_command()
        if self.command is None:
            raise RuntimeError("No speech program found. Please install espeak-ng.")
        self._process: Optional[subprocess.Popen] = None

    def _argv(self, text: str, lang: str) -> list[str]:
        if self.command == "say":
            return ["say", text]
        # espeak voices are named by language, "de-DE" -> "de"
        return [self.command, "-v", lang.split("-")[0].lower(), text]

    @property
    def speaking(self) -> bool:
        return self._process is not None and self._process.poll() is None

    def speak(self, text: str, lang: str) -> None:
        self.stop()
        logger.debug("Speaking %d chars with %s (%s)", len(text), self.command, lang)
        self._process = subprocess.Popen(
            self._argv(text, lang),
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )

    def stop(self) -> None:
        if self.speaking:
            self._process.terminate()
            self._process.wait()
        self._process = None

    def wait(self, timeout: Optional[float] = None) -> None:
        """Block until the current utterance finishes."""
        if self._process is not None:
            try:
                self._process.wait(timeout=timeout)
            except subprocess.TimeoutExpired:
                self.stop()
