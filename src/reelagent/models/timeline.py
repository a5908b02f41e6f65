"""Timeline models — candidate timelines, clips and compiled render timelines."""

from __future__ import annotations

from pydantic import BaseModel, Field

from reelagent.models.edits import BgmEdit, ClipEdit, FadeEdit, TextEdit, Transform
from reelagent.models.segment import SegmentTags


class Clip(BaseModel):
    """A contiguous span of source media kept in the output.

    ``start``/``end`` are media time; ``timeline_start``/``display_duration``
    are timeline time, with ``display_duration = duration / playback_rate``.
    """

    id: str
    start: float
    end: float
    playback_rate: float = 1.0
    timeline_start: float = 0.0
    display_duration: float = 0.0
    edit: ClipEdit | None = None
    volume: float = 1.0
    transform: Transform | None = None
    energy: float | None = None
    tags: SegmentTags | None = None
    reason: str | None = None

    @property
    def duration(self) -> float:
        return self.end - self.start

    @property
    def timeline_end(self) -> float:
        return self.timeline_start + self.display_duration


class CandidateTimeline(BaseModel):
    """Ordered clips chosen by selection, before any edit semantics."""

    clips: list[Clip] = Field(default_factory=list)
    total_duration: float = 0.0
    target_duration: float = 0.0


class TextOverlay(TextEdit):
    """A text edit projected into timeline time."""

    timeline_start: float
    timeline_end: float


class FadeOverlay(FadeEdit):
    """A fade edit projected into timeline time."""

    timeline_start: float
    timeline_end: float


class RenderTimeline(BaseModel):
    """The compiled, ready-to-play/ready-to-export timeline.

    Rebuilt from scratch whenever edits or segments change; never patched.
    """

    clips: list[Clip] = Field(default_factory=list)
    total_timeline_duration: float = 0.0
    media_duration: float = 0.0
    text_edits: list[TextOverlay] = Field(default_factory=list)
    fade_edits: list[FadeOverlay] = Field(default_factory=list)
    bgm_edits: list[BgmEdit] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.clips

    def media_to_timeline_time(self, t: float) -> float:
        from reelagent.timeline.mapping import media_to_timeline_time

        return media_to_timeline_time(t, self.clips)

    def timeline_to_media_time(self, t: float) -> float:
        from reelagent.timeline.mapping import timeline_to_media_time

        return timeline_to_media_time(t, self.clips)
