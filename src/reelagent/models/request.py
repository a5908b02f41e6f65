"""Upstream request/response models for the edit-producing agent."""

from __future__ import annotations

from pydantic import BaseModel, Field

from reelagent.models.segment import DetectedEvent, Segment


class RequestContext(BaseModel):
    """What the agent is told about the video when asked for edits."""

    duration_seconds: float
    existing_segments: list[Segment] = Field(default_factory=list)
    request: str = ""


class AgentResult(BaseModel):
    """Edit operations (raw, unvalidated) and optionally revised segments."""

    edits: list[dict] = Field(default_factory=list)
    segments: list[Segment] | None = None
    events: list[DetectedEvent] = Field(default_factory=list)
    summary: str = ""
