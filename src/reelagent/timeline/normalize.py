"""Edit normalization — coerce, clamp or drop raw edit operations.

Upstream agents produce loosely-typed edits. Nothing here raises for bad
data: each malformed edit is repaired where the fix is unambiguous and
dropped otherwise, with a warning.
"""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, TypeAdapter, ValidationError

from reelagent.models.edits import EDIT_TYPES, EditOperation
from reelagent.utils.progress import log_warning

TEXT_POSITIONS = ("top", "center", "bottom")
FADE_DIRECTIONS = ("in", "out")
DEFAULT_BGM_VOLUME = 0.3

_edit_adapter: TypeAdapter[EditOperation] = TypeAdapter(EditOperation)


def _to_float(value: Any) -> float | None:
    """Coerce to a finite float, or None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    return result if math.isfinite(result) else None


def _clamp_unit(value: Any, default: float) -> float:
    number = _to_float(value)
    if number is None:
        return default
    return min(1.0, max(0.0, number))


def _describe(data: dict) -> str:
    return f"{data.get('type')} [{data.get('start')}, {data.get('end')}]"


def normalize_edit(raw: Any, total_duration: float = 0.0) -> EditOperation | None:
    """Normalize a single edit; returns None when it must be dropped."""
    if isinstance(raw, BaseModel):
        raw = raw.model_dump()
    if not isinstance(raw, dict):
        log_warning(f"Skipping non-object edit: {raw!r}")
        return None

    data = dict(raw)
    edit_type = data.get("type")
    if edit_type not in EDIT_TYPES:
        log_warning(f"Skipping edit with unknown type: {edit_type!r}")
        return None

    if edit_type == "bgm":
        keywords = str(data.get("keywords") or "").strip()
        if not keywords:
            log_warning("Skipping bgm edit without keywords")
            return None
        data["keywords"] = keywords
        data["volume"] = _clamp_unit(data.get("volume"), DEFAULT_BGM_VOLUME)
        return _validate(data)

    start = _to_float(data.get("start"))
    end = _to_float(data.get("end"))
    if start is None or end is None:
        log_warning(f"Skipping edit with unusable times: {_describe(data)}")
        return None

    start, end = max(0.0, start), max(0.0, end)
    if total_duration > 0:
        start, end = min(start, total_duration), min(end, total_duration)

    # A split is a point cut, so only splits may have zero length
    if start > end or (start == end and edit_type != "split"):
        log_warning(f"Dropping empty or inverted edit: {_describe(data)}")
        return None
    data["start"], data["end"] = start, end

    if edit_type == "speed":
        rate = _to_float(data.get("rate"))
        data["rate"] = rate if rate is not None and rate > 0 else 1.0
    elif edit_type == "volume":
        data["volume"] = _clamp_unit(data.get("volume"), 1.0)
    elif edit_type == "text":
        text = str(data.get("text") or "").strip()
        if not text:
            log_warning(f"Dropping text edit without text: {_describe(data)}")
            return None
        data["text"] = text
        if data.get("position") not in TEXT_POSITIONS:
            data["position"] = "bottom"
    elif edit_type == "fade":
        direction = data.get("direction") or data.get("mode")
        if direction not in FADE_DIRECTIONS:
            log_warning(f"Dropping fade edit with direction {direction!r}")
            return None
        data["direction"] = direction
    elif edit_type == "transform":
        if not isinstance(data.get("transform"), dict):
            data["transform"] = {}

    return _validate(data)


def _validate(data: dict) -> EditOperation | None:
    try:
        return _edit_adapter.validate_python(data)
    except ValidationError as e:
        log_warning(f"Dropping invalid {data.get('type')} edit: {e.error_count()} error(s)")
        return None


def normalize_edits(raw_edits: list[Any] | None, total_duration: float = 0.0) -> list[EditOperation]:
    """Normalize an ordered list of edits, preserving order of the survivors."""
    normalized = []
    for raw in raw_edits or []:
        edit = normalize_edit(raw, total_duration)
        if edit is not None:
            normalized.append(edit)
    return normalized
