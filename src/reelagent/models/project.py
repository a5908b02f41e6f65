"""Project manifest — single source of truth for one edit session."""

from __future__ import annotations

from pydantic import BaseModel, Field

from reelagent.models.config import Config
from reelagent.models.intent import Intent
from reelagent.models.segment import Segment


class SourceMedia(BaseModel):
    """The original, unedited video."""

    path: str
    duration_seconds: float = 0.0
    width: int | None = None
    height: int | None = None


class Project(BaseModel):
    """A source video, its segments, the requested edits and settings.

    Edits are stored raw so that malformed operations still reach the
    compiler's normalization step instead of failing manifest validation.
    """

    version: str = "1.0"
    source: SourceMedia
    intent: Intent = Field(default_factory=Intent)
    segments: list[Segment] = Field(default_factory=list)
    edits: list[dict] = Field(default_factory=list)
    config: Config = Field(default_factory=Config)
