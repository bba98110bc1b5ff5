"""Translation package - remote translation service client and orchestration.

Components:
- schemas: pydantic wire models for the landmark translation endpoint
- client: requests-based HTTP client with error classification
- orchestrator: clip -> landmarks -> service -> result + history
"""

from .client import TranslationClient, error_message
from .orchestrator import Stage, TranslationOrchestrator
from .schemas import ErrorResponse, TranslateLandmarksRequest, TranslateLandmarksResponse

__all__ = [
    "TranslationClient",
    "error_message",
    "Stage",
    "TranslationOrchestrator",
    "ErrorResponse",
    "TranslateLandmarksRequest",
    "TranslateLandmarksResponse",
]
