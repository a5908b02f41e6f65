"""Segment scoring and greedy selection into a candidate timeline."""

from __future__ import annotations

from reelagent.models.intent import Intent
from reelagent.models.segment import Segment
from reelagent.models.timeline import CandidateTimeline, Clip
from reelagent.utils.progress import log_step

FOCUS_BONUS = 0.3


def style_score(segment: Segment, intent: Intent) -> float:
    if intent.style == "fast":
        return segment.energy
    if intent.style == "slow":
        return 1 - segment.energy
    return 0.5 + segment.energy * 0.5


def template_score(segment: Segment, intent: Intent) -> float:
    tags = segment.tags
    if intent.template == "vlog":
        return (0.25 if tags.has_face else 0.0) + tags.speech_density * 0.2
    if intent.template == "sport":
        return (0.3 if tags.has_action else 0.0) + tags.motion_score * 0.25
    if intent.template == "story":
        return (0.2 if tags.has_dialogue else 0.0) + (1 - segment.energy) * 0.2
    return 0.1


def focus_score(segment: Segment, intent: Intent) -> float:
    if intent.focus == "face" and segment.tags.has_face:
        return FOCUS_BONUS
    if intent.focus == "action" and segment.tags.has_action:
        return FOCUS_BONUS
    return 0.0


def score_segment(segment: Segment, intent: Intent) -> float:
    """Weighted score: style + focus + template."""
    return (
        style_score(segment, intent)
        + focus_score(segment, intent)
        + template_score(segment, intent)
    )


def build_reason(segment: Segment, intent: Intent) -> str:
    """Human-readable note on which scoring rules fired (diagnostic only)."""
    tags = segment.tags
    parts = []
    if intent.style == "fast" and segment.energy > 0.7:
        parts.append("high energy")
    if intent.style == "slow" and segment.energy < 0.45:
        parts.append("low energy")
    if intent.focus == "face" and tags.has_face:
        parts.append("has people")
    if intent.focus == "action" and tags.has_action:
        parts.append("clear action")
    if intent.template == "vlog" and tags.has_dialogue:
        parts.append("dense dialogue")
    if intent.template == "sport" and tags.motion_score > 0.6:
        parts.append("intense motion")
    if intent.template == "story" and tags.has_dialogue:
        parts.append("story beat")
    if intent.focus == "none":
        parts.append("balanced coverage")
    if not parts:
        parts.append("best overall score")
    return " · ".join(parts)


def _clip_from_segment(segment: Segment, reason: str) -> Clip:
    return Clip(
        id=segment.id,
        start=segment.start,
        end=segment.end,
        energy=segment.energy,
        tags=segment.tags,
        reason=reason,
    )


def build_timeline(
    segments: list[Segment],
    intent: Intent,
    media_duration: float | None = None,
) -> CandidateTimeline:
    """Pick segments that best match the intent, up to the target duration.

    Anchors (first/last segment) are reserved before ranking. Remaining
    segments are taken by score, highest first, with ties kept in input
    order, until the accumulated duration reaches the target. The result is
    chronological regardless of selection order.
    """
    if media_duration is None:
        media_duration = segments[-1].end if segments else 0.0
    target_duration = min(intent.target_duration, media_duration)

    selected: dict[str, Clip] = {}

    if intent.keep_start and segments:
        selected[segments[0].id] = _clip_from_segment(segments[0], "opening kept")
    if intent.keep_end and len(segments) > 1:
        last = segments[-1]
        selected.setdefault(last.id, _clip_from_segment(last, "ending kept"))

    # sorted() is stable, so equal scores keep their original order
    ranked = sorted(segments, key=lambda s: score_segment(s, intent), reverse=True)

    accumulated = sum(c.duration for c in selected.values())
    for segment in ranked:
        if accumulated >= target_duration:
            break
        if segment.id in selected:
            continue
        selected[segment.id] = _clip_from_segment(segment, build_reason(segment, intent))
        accumulated += segment.duration

    clips = sorted(selected.values(), key=lambda c: c.start)
    total = sum(c.duration for c in clips)

    log_step(
        "Select",
        f"Picked {len(clips)}/{len(segments)} segments "
        f"({total:.1f}s for a {target_duration:.1f}s target)",
    )

    return CandidateTimeline(
        clips=clips,
        total_duration=total,
        target_duration=target_duration,
    )
