"""
Memory model: one user-captured note (text and/or media) with its analysis.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, model_validator


class MediaType(str, Enum):
    """Kind of payload attached to a memory."""

    TEXT = "TEXT"
    IMAGE = "IMAGE"
    AUDIO = "AUDIO"
    VIDEO = "VIDEO"


class AIAnalysis(BaseModel):
    """
    Structured judgment of a single memory.

    ``analyzed_by_model`` is None for pre-existing results. Editing the
    summary never changes it.
    """

    mood: str = Field(..., description="Short mood label")
    summary: str = Field(..., description="Prose summary, editable by the user")
    tags: list[str] = Field(default_factory=list, description="Tags in display order")
    color: str = Field(..., description="Display color hint")
    analyzed_by_model: str | None = Field(
        default=None, description="Model that produced the analysis"
    )

    def with_summary(self, summary: str) -> "AIAnalysis":
        """Return a copy with the summary replaced and attribution kept."""
        return self.model_copy(update={"summary": summary})


class AnalysisPayload(BaseModel):
    """Strict JSON object requested from providers when analyzing a memory."""

    model_config = {"extra": "ignore"}

    mood: str = Field(..., description="One or two word mood label")
    summary: str = Field(..., description="Philosophical, concise reflection")
    tags: list[str] = Field(..., description="Short topical tags")
    color: str = Field(..., description="Hex color matching the mood")

    def to_analysis(self, model_id: str) -> AIAnalysis:
        """Stamp the payload with the model that produced it."""
        return AIAnalysis(
            mood=self.mood,
            summary=self.summary,
            tags=list(self.tags),
            color=self.color,
            analyzed_by_model=model_id,
        )


class Memory(BaseModel):
    """
    A dated note captured by the user.

    A memory is only constructed once its id and content/media are final.
    ``media_blob`` is present exactly when ``media_type`` is not TEXT.
    """

    id: str = Field(..., description="Unique memory ID (mem_xxx)")
    created_at: datetime = Field(default_factory=datetime.now, description="Creation timestamp")
    content: str = Field(default="", description="User's text note")
    media_type: MediaType = Field(default=MediaType.TEXT, description="Attached media kind")
    media_blob: bytes | None = Field(default=None, description="Binary media payload")
    media_mime_type: str | None = Field(default=None, description="Declared mime type of blob")
    ai_analysis: AIAnalysis | None = Field(default=None, description="Attached analysis")
    location: str | None = Field(default=None, description="Optional place description")

    @model_validator(mode="after")
    def _check_media(self) -> "Memory":
        if self.media_type == MediaType.TEXT and self.media_blob is not None:
            raise ValueError("Text memories cannot carry a media blob")
        if self.media_type != MediaType.TEXT and self.media_blob is None:
            raise ValueError(f"{self.media_type.value} memories require a media blob")
        return self

    def has_input(self) -> bool:
        """True when there is something to analyze (text or media)."""
        return bool(self.content.strip()) or self.media_blob is not None

    def describe(self) -> str:
        """Best available description: analysis summary, then content, then 'Media'."""
        if self.ai_analysis and self.ai_analysis.summary:
            return self.ai_analysis.summary
        return self.content or "Media"

    def with_analysis(self, analysis: AIAnalysis | None) -> "Memory":
        """Return a copy with the analysis replaced."""
        return self.model_copy(update={"ai_analysis": analysis})
