"""
Records owned by the remote analysis service.

Wire names are camelCase (``videoId``, ``aiResponse``); models accept both
the wire name and the Python field name.
"""
from typing import Annotated, Optional
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from evalyn.constants import AnalysisStatus, SCORE_SCALE
from evalyn.utils.api_helpers import MalformedPayloadError, unwrap_optional


class AnalyzeResponse(BaseModel):
    """Answer of the analyze operation: the assigned identifier and status."""
    model_config = ConfigDict(populate_by_name=True)

    video_id: str = Field(alias="videoId")
    status: str


class AnalysisRecord(BaseModel):
    """
    Analysis of one uploaded video, as returned by the result lookup.

    ``timestamp`` is in nanoseconds since epoch. ``ai_response`` holds the
    raw JSON report and is only meaningful once ``status`` is completed.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    video_id: str = Field(alias="videoId")
    status: AnalysisStatus
    timestamp: int
    ai_response: Optional[str] = Field(default=None, alias="aiResponse")

    @field_validator("ai_response", mode="before")
    @classmethod
    def _unwrap_ai_response(cls, value):
        return unwrap_optional(value)


# ============================================================================
# AI REPORT (payload of a completed analysis)
# ============================================================================

Score = Annotated[int, Field(ge=0, le=SCORE_SCALE)]


class Grading(BaseModel):
    overall_score: Score
    creativity: Score
    clarity: Score


class Performance(BaseModel):
    confidence: Score
    engagement: Score
    time_management: Score


class AiReport(BaseModel):
    """Structured AI feedback parsed from ``AnalysisRecord.ai_response``."""
    grading: Grading
    summary: str
    performance: Performance

    @classmethod
    def from_json(cls, raw: str) -> "AiReport":
        """
        Parse the raw AI response.

        Raises:
            MalformedPayloadError: If the text is not JSON or lacks report fields
        """
        try:
            return cls.model_validate_json(raw)
        except ValidationError as e:
            errors = e.errors()
            first = errors[0] if errors else {}
            location = ".".join(str(part) for part in first.get("loc", ()))
            detail = first.get("msg", str(e))
            if location:
                detail = f"{location}: {detail}"
            raise MalformedPayloadError(f"Invalid AI report: {detail}") from e
