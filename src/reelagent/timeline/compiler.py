"""Timeline edit compiler — turn edit operations into a render timeline.

The steps run in a fixed order and the order is load-bearing: reordering
them changes the output whenever edits overlap.

1. Base clips (candidate clips, or one clip over the whole source)
2. Collect structural boundaries from every non-overlay edit
3. Split clips at each boundary against the current clip list
4. Drop clips covered by a delete range
5. Attach speed/split, volume and transform attributes
6. Lay clips out on the timeline
7. Project text/fade edits from media time into timeline time
"""

from __future__ import annotations

from typing import Protocol

from reelagent.models.edits import (
    TIME_ANCHORED_TYPES,
    BgmEdit,
    DeleteEdit,
    EditOperation,
    FadeEdit,
    SpeedEdit,
    SplitEdit,
    TextEdit,
    TimedEdit,
    TransformEdit,
    VolumeEdit,
)
from reelagent.models.timeline import Clip, FadeOverlay, RenderTimeline, TextOverlay
from reelagent.timeline.mapping import media_to_timeline_time
from reelagent.timeline.normalize import normalize_edits

# Split margin when any delete is present
DELETE_SPLIT_EPSILON = 0.02
# Split margin otherwise
SPLIT_EPSILON = 0.1
DELETE_COVER_TOLERANCE = 0.02
ATTACH_TOLERANCE = 0.2
POINT_DECIMALS = 2


class HasClips(Protocol):
    clips: list[Clip]


def _base_clips(base_timeline: HasClips, total_duration: float) -> list[Clip]:
    """Fresh copies of the base clips with all edit-derived fields reset."""
    if base_timeline.clips:
        return [
            clip.model_copy(update={
                "playback_rate": 1.0,
                "timeline_start": 0.0,
                "display_duration": 0.0,
                "edit": None,
                "volume": 1.0,
                "transform": None,
            })
            for clip in base_timeline.clips
        ]
    if total_duration <= 0:
        return []
    return [Clip(id="base-clip", start=0.0, end=total_duration, energy=0.5, reason="original video")]


def collect_split_points(edits: list[EditOperation]) -> list[float]:
    """Distinct, sorted cut points from every structural edit."""
    points: set[float] = set()
    for edit in edits:
        if edit.type in TIME_ANCHORED_TYPES or not isinstance(edit, TimedEdit):
            continue
        for value in (edit.start, edit.end):
            if value > 0:
                points.add(round(value, POINT_DECIMALS))
    return sorted(points)


def split_clips_at(clips: list[Clip], point: float, epsilon: float) -> list[Clip]:
    """Split every clip whose interior contains ``point`` by more than epsilon."""
    result: list[Clip] = []
    for clip in clips:
        if clip.start + epsilon < point < clip.end - epsilon:
            result.append(clip.model_copy(update={
                "end": point,
                "id": f"split-{clip.start:.2f}-{point:.2f}",
            }))
            result.append(clip.model_copy(update={
                "start": point,
                "id": f"split-{point:.2f}-{clip.end:.2f}",
            }))
        else:
            result.append(clip)
    return result


def _covers(edit: TimedEdit, clip: Clip, tolerance: float) -> bool:
    return edit.start <= clip.start + tolerance and edit.end >= clip.end - tolerance


def remove_deleted(clips: list[Clip], deletes: list[DeleteEdit]) -> list[Clip]:
    """Drop clips fully covered by any delete range.

    Partial overlaps were already split at the delete's boundaries, so each
    clip is either covered or untouched here.
    """
    if not deletes:
        return clips
    return [
        clip for clip in clips
        if not any(_covers(d, clip, DELETE_COVER_TOLERANCE) for d in deletes)
    ]


def _apply_attributes(clip: Clip, edits: list[EditOperation]) -> Clip:
    speed = next(
        (e for e in edits if isinstance(e, SpeedEdit) and _covers(e, clip, ATTACH_TOLERANCE)),
        None,
    )
    split = next(
        (e for e in edits if isinstance(e, SplitEdit) and _covers(e, clip, ATTACH_TOLERANCE)),
        None,
    )
    attached = speed or split

    update: dict = {
        "edit": attached,
        "playback_rate": speed.rate if speed else 1.0,
    }

    for edit in edits:
        if isinstance(edit, VolumeEdit) and _covers(edit, clip, ATTACH_TOLERANCE):
            update["volume"] = edit.volume
        elif isinstance(edit, TransformEdit) and _covers(edit, clip, ATTACH_TOLERANCE):
            update["transform"] = edit.transform

    return clip.model_copy(update=update)


def layout_clips(clips: list[Clip]) -> tuple[list[Clip], float]:
    """Assign timeline positions in media-time order; returns (clips, total)."""
    ordered = sorted(clips, key=lambda c: c.start)
    positioned: list[Clip] = []
    cursor = 0.0
    for clip in ordered:
        display_duration = clip.duration / (clip.playback_rate or 1.0)
        positioned.append(clip.model_copy(update={
            "timeline_start": cursor,
            "display_duration": display_duration,
        }))
        cursor += display_duration
    return positioned, cursor


def apply_edits_to_timeline(
    base_timeline: HasClips,
    edits: list | None,
    total_media_duration: float = 0.0,
) -> RenderTimeline:
    """Compile edit operations against a base timeline.

    ``edits`` may be raw dicts straight from an agent or EditOperation
    models; malformed ones are clamped or dropped. Raises only when the
    base timeline itself is missing.
    """
    if base_timeline is None:
        raise ValueError("base_timeline is required")

    if total_media_duration <= 0 and base_timeline.clips:
        total_media_duration = max(c.end for c in base_timeline.clips)

    operations = normalize_edits(edits, total_media_duration)
    clips = _base_clips(base_timeline, total_media_duration)

    deletes = [e for e in operations if isinstance(e, DeleteEdit)]
    epsilon = DELETE_SPLIT_EPSILON if deletes else SPLIT_EPSILON

    for point in collect_split_points(operations):
        clips = split_clips_at(clips, point, epsilon)

    clips = remove_deleted(clips, deletes)
    clips = [_apply_attributes(clip, operations) for clip in clips]
    clips, total_timeline_duration = layout_clips(clips)

    text_edits = [
        TextOverlay(
            **e.model_dump(),
            timeline_start=media_to_timeline_time(e.start, clips),
            timeline_end=media_to_timeline_time(e.end, clips),
        )
        for e in operations if isinstance(e, TextEdit)
    ]
    fade_edits = [
        FadeOverlay(
            **e.model_dump(),
            timeline_start=media_to_timeline_time(e.start, clips),
            timeline_end=media_to_timeline_time(e.end, clips),
        )
        for e in operations if isinstance(e, FadeEdit)
    ]

    return RenderTimeline(
        clips=clips,
        total_timeline_duration=total_timeline_duration,
        media_duration=total_media_duration,
        text_edits=text_edits,
        fade_edits=fade_edits,
        bgm_edits=[e for e in operations if isinstance(e, BgmEdit)],
    )
