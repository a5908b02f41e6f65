"""Conversions between media time and timeline time."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from reelagent.models.timeline import Clip

# Slack when locating the clip that holds a time point
LOOKUP_TOLERANCE = 0.05


def find_clip_at_media_time(t: float, clips: Sequence[Clip]) -> Clip | None:
    for clip in clips:
        if clip.start - LOOKUP_TOLERANCE <= t <= clip.end + LOOKUP_TOLERANCE:
            return clip
    return None


def find_clip_at_timeline_time(t: float, clips: Sequence[Clip]) -> Clip | None:
    for clip in clips:
        if (
            clip.timeline_start - LOOKUP_TOLERANCE
            <= t
            <= clip.timeline_start + clip.display_duration + LOOKUP_TOLERANCE
        ):
            return clip
    return None


def media_to_timeline_time(t: float, clips: Sequence[Clip]) -> float:
    """Project a media-time point onto the timeline.

    Points outside every clip (e.g. inside a deleted range) pass through
    unchanged.
    """
    clip = find_clip_at_media_time(t, clips)
    if clip is None:
        return t
    offset = max(0.0, t - clip.start)
    return clip.timeline_start + offset / (clip.playback_rate or 1.0)


def timeline_to_media_time(t: float, clips: Sequence[Clip]) -> float:
    """Inverse of media_to_timeline_time, using the same lookup rule."""
    clip = find_clip_at_timeline_time(t, clips)
    if clip is None:
        return t
    offset = max(0.0, t - clip.timeline_start)
    return clip.start + offset * (clip.playback_rate or 1.0)
