"""Segment models — scored spans of source media produced by analysis."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SegmentTags(BaseModel):
    """Content tags attached to a segment."""

    model_config = ConfigDict(populate_by_name=True)

    has_face: bool = Field(default=False, alias="hasFace")
    has_action: bool = Field(default=False, alias="hasAction")
    has_dialogue: bool = Field(default=False, alias="hasDialogue")
    motion_score: float = Field(default=0.0, ge=0.0, le=1.0, alias="motionScore")
    speech_density: float = Field(default=0.0, ge=0.0, le=1.0, alias="speechDensity")


class Segment(BaseModel):
    """A contiguous span of source media with analysis scores.

    Segments partition [0, media duration] without gaps or overlaps. The id
    is derived from (start, end) and is not stable across re-analysis.
    """

    id: str
    start: float
    end: float
    energy: float = Field(default=0.5, ge=0.0, le=1.0)
    tags: SegmentTags = Field(default_factory=SegmentTags)
    label: str | None = None

    @property
    def duration(self) -> float:
        return max(0.0, self.end - self.start)


class Keyframe(BaseModel):
    time: float
    energy: float


class DetectedEvent(BaseModel):
    """A labelled moment found by the upstream agent (e.g. "eggs being mashed")."""

    label: str
    start: float
    end: float
    confidence: float | None = None


class MediaFeatures(BaseModel):
    """Analysis output for one source video."""

    duration: float = 0.0
    segment_count: int = 0
    segments: list[Segment] = Field(default_factory=list)
    keyframes: list[Keyframe] = Field(default_factory=list)
    rhythm_score: float = 0.0
    events: list[DetectedEvent] = Field(default_factory=list)
    edits: list[dict] = Field(default_factory=list)
    summary: str = ""


def make_segment(
    start: float,
    end: float,
    energy: float,
    tags: SegmentTags | None = None,
    *,
    label: str | None = None,
) -> Segment:
    """Create a segment with its (start, end)-derived id."""
    return Segment(
        id=f"{start:.2f}-{end:.2f}",
        start=start,
        end=end,
        energy=energy,
        tags=tags or SegmentTags(),
        label=label,
    )
