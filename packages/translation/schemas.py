"""Pydantic schemas for the remote translation service wire format."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from packages.core import FRAME_VECTOR_SIZE, confidence_value


# ============ Request ============


class TranslateLandmarksRequest(BaseModel):
    """Request body: a normalized sequence as 126-wide rows plus a method key."""
    landmarks: list[list[float]] = Field(..., description="One row of 126 values per frame")
    method: str = Field(..., min_length=1, description="Translation method key")

    @field_validator("landmarks")
    @classmethod
    def check_row_width(cls, rows: list[list[float]]) -> list[list[float]]:
        for i, row in enumerate(rows):
            if len(row) != FRAME_VECTOR_SIZE:
                raise ValueError(f"row {i} has {len(row)} values, expected {FRAME_VECTOR_SIZE}")
        return rows


# ============ Response ============


class Timing(BaseModel):
    model_config = ConfigDict(extra="ignore")
    total: Optional[Any] = None


class TranslateLandmarksResponse(BaseModel):
    """Successful response from the translation endpoint.

    `confidence` arrives as ``{"overall": x}``; a bare number is accepted
    too and anything missing reads as 0.
    """
    model_config = ConfigDict(extra="ignore")

    gloss: str = ""
    translation: str = ""
    confidence: float = Field(default=0.0)
    timing: Timing = Field(default_factory=Timing)
    landmarks_shape: Optional[list[int]] = None

    @field_validator("gloss", "translation", mode="before")
    @classmethod
    def none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("confidence", mode="before")
    @classmethod
    def read_overall(cls, value: Any) -> float:
        return confidence_value(value)

    @field_validator("timing", mode="before")
    @classmethod
    def none_as_empty_timing(cls, value: Any) -> Any:
        return {} if value is None else value


class ErrorResponse(BaseModel):
    """Error body carried by non-2xx responses."""
    model_config = ConfigDict(extra="ignore")
    error: str
