"""HTTP client for the remote landmark translation service."""

import logging
import time
from typing import Optional, Sequence

import requests
from pydantic import ValidationError

from packages.core import (
    DEFAULT_BACKEND_URL,
    DEFAULT_METHOD,
    Locale,
    ServiceError,
    ServiceResponseError,
    TranslationResult,
    TranslatorConfig,
    method_label,
)

from .schemas import ErrorResponse, TranslateLandmarksRequest, TranslateLandmarksResponse

logger = logging.getLogger(__name__)

ERROR_SNIPPET_LENGTH = 100


def error_message(response: requests.Response) -> str:
    """User-facing message for a non-2xx response.

    Prefers the JSON ``error`` field; otherwise quotes the start of the
    raw body.
    """
    try:
        return ErrorResponse.model_validate(response.json()).error
    except (ValueError, ValidationError):
        text = response.text or ""
        return f"Server error: {text[:ERROR_SNIPPET_LENGTH]}..."


class TranslationClient:
    """Posts normalized landmark sequences and parses the result.

    A single attempt per call; no retries.
    """

    def __init__(
        self,
        url: str = DEFAULT_BACKEND_URL,
        timeout: float = 60.0,
        session: Optional[requests.Session] = None,
        locale: Locale = Locale.EN,
    ):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()
        self.locale = locale

    @classmethod
    def from_config(cls, config: TranslatorConfig) -> "TranslationClient":
        return cls(url=config.backend_url, timeout=config.request_timeout, locale=config.language)

    def translate(
        self,
        landmarks: Sequence[Sequence[float]],
        method: str = DEFAULT_METHOD,
    ) -> TranslationResult:
        """Send one sequence to the service.

        Raises:
            ServiceError: On transport failure or a non-2xx response
            ServiceResponseError: If a 2xx body is not the expected JSON
        """
        body = TranslateLandmarksRequest(
            landmarks=[list(row) for row in landmarks], method=method
        )
        logger.debug("POST %s (%d frames, method=%s)", self.url, len(body.landmarks), method)

        started = time.perf_counter()
        try:
            response = self.session.post(self.url, json=body.model_dump(), timeout=self.timeout)
        except requests.Timeout as e:
            raise ServiceError(f"Request timed out after {self.timeout:g}s") from e
        except requests.ConnectionError as e:
            raise ServiceError(f"Could not reach translation service: {e}") from e
        except requests.RequestException as e:
            raise ServiceError(str(e)) from e
        round_trip_ms = (time.perf_counter() - started) * 1000

        if not response.ok:
            text = error_message(response)
            logger.error("Translation service returned %s: %s", response.status_code, text)
            raise ServiceError(text, status_code=response.status_code)

        try:
            payload = TranslateLandmarksResponse.model_validate(response.json())
        except ValueError as e:
            # ValidationError is a ValueError too.
            raise ServiceResponseError(str(e)) from e

        return TranslationResult(
            gloss=payload.gloss,
            translation=payload.translation,
            confidence=payload.confidence,
            method=method,
            method_label=method_label(method, self.locale),
            processing_time=payload.timing.total,
            landmarks_shape=tuple(payload.landmarks_shape) if payload.landmarks_shape else None,
            round_trip_ms=round_trip_ms,
        )

    def close(self) -> None:
        self.session.close()
