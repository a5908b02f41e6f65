"""Segment features — placeholder analysis and agent response parsing."""

from __future__ import annotations

import json
import math
import re
from collections.abc import Callable

from pydantic import ValidationError

from reelagent.models.segment import (
    DetectedEvent,
    Keyframe,
    MediaFeatures,
    Segment,
    SegmentTags,
    make_segment,
)
from reelagent.utils.progress import log_step, log_warning

MIN_SEGMENTS = 6
MAX_SEGMENTS = 12
SECONDS_PER_SEGMENT = 6.0

_CODE_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)


def _hash_string(value: str) -> int:
    """32-bit signed rolling hash (h * 31 + c), returned as its absolute value."""
    h = 0
    for ch in value:
        h = ((h << 5) - h + ord(ch)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return abs(h)


def _seeded_random(seed: int) -> Callable[[], float]:
    """Park-Miller minimal standard generator yielding floats in [0, 1)."""
    state = seed % 2147483647
    if state <= 0:
        state += 2147483646

    def next_random() -> float:
        nonlocal state
        state = (state * 16807) % 2147483647
        return (state - 1) / 2147483646

    return next_random


def _summarize(segments: list[Segment]) -> tuple[list[Keyframe], float]:
    keyframes = [
        Keyframe(time=round(s.start + s.duration / 2, 2), energy=s.energy)
        for s in segments
    ]
    rhythm = sum(s.energy for s in segments) / len(segments) if segments else 0.0
    return keyframes, round(rhythm, 2)


def synthesize_segments(name: str, size: int, duration: float) -> MediaFeatures:
    """Produce deterministic placeholder segments for a video.

    Used when no content analysis is available. The same (name, size,
    duration) always yields the same segments.
    """
    if duration <= 0:
        return MediaFeatures(duration=0.0)

    random = _seeded_random(_hash_string(f"{name}-{size}-{duration:g}"))
    count = max(MIN_SEGMENTS, min(MAX_SEGMENTS, int(duration / SECONDS_PER_SEGMENT + 0.5)))
    length = duration / count

    segments: list[Segment] = []
    for index in range(count):
        start = index * length
        end = duration if index == count - 1 else (index + 1) * length
        energy = round(0.3 + random() * 0.7, 2)
        motion_score = round(0.2 + random() * 0.8, 2)
        speech_density = round(0.2 + random() * 0.8, 2)
        tags = SegmentTags(
            has_face=random() > 0.6,
            has_action=random() > 0.55,
            has_dialogue=random() > 0.5,
            motion_score=motion_score,
            speech_density=speech_density,
        )
        segments.append(make_segment(start, end, energy, tags))

    keyframes, rhythm = _summarize(segments)
    log_step("Analysis", f"Synthesized {count} segments over {duration:.1f}s")

    return MediaFeatures(
        duration=duration,
        segment_count=count,
        segments=segments,
        keyframes=keyframes,
        rhythm_score=rhythm,
    )


def _extract_json(text: str) -> dict | None:
    normalized = _CODE_FENCE.sub("", text).strip()
    first = normalized.find("{")
    last = normalized.rfind("}")
    if first == -1 or last <= first:
        return None
    try:
        payload = json.loads(normalized[first:last + 1])
    except json.JSONDecodeError:
        return None
    return payload if isinstance(payload, dict) else None


def _as_finite(value: object) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    value = float(value)
    return value if math.isfinite(value) else None


def parse_agent_response(text: str) -> MediaFeatures | None:
    """Parse an agent's JSON reply into features.

    Markdown code fences are stripped and the outermost ``{...}`` is parsed.
    Returns None when there is no JSON object, or when it carries neither
    usable segments nor edits. An edits-only reply yields features with no
    segments. Edits are passed through raw; they are normalized at compile time.
    """
    payload = _extract_json(text)
    if payload is None:
        return None

    raw_segments = payload.get("segments")
    segments: list[Segment] = []
    for raw in raw_segments if isinstance(raw_segments, list) else []:
        if not isinstance(raw, dict):
            continue
        start = _as_finite(raw.get("start"))
        end = _as_finite(raw.get("end"))
        if start is None or end is None:
            continue
        energy = _as_finite(raw.get("energy")) or 0.5
        energy = min(1.0, max(0.0, energy))
        try:
            tags = SegmentTags.model_validate(raw.get("tags") or {})
        except ValidationError:
            tags = SegmentTags()
        segments.append(make_segment(start, end, energy, tags, label=raw.get("label")))

    raw_edits = payload.get("edits")
    edits = [e for e in raw_edits if isinstance(e, dict)] if isinstance(raw_edits, list) else []
    if not segments and not edits:
        return None

    events: list[DetectedEvent] = []
    for raw in payload.get("events") or []:
        try:
            events.append(DetectedEvent.model_validate(raw))
        except ValidationError:
            log_warning(f"Ignoring malformed event: {raw!r}")

    keyframes, rhythm = _summarize(segments)
    rhythm_score = _as_finite(payload.get("rhythmScore"))

    return MediaFeatures(
        duration=max((s.end for s in segments), default=0.0),
        segment_count=len(segments),
        segments=segments,
        keyframes=keyframes,
        rhythm_score=round(rhythm_score, 2) if rhythm_score is not None else rhythm,
        events=events,
        edits=edits,
        summary=str(payload.get("final_answer") or payload.get("summary") or ""),
    )
