"""Tests for segment scoring and selection."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from reelagent.models.intent import Intent
from reelagent.models.segment import SegmentTags, make_segment
from reelagent.selection.scoring import build_reason, build_timeline, score_segment


def test_style_scores():
    segment = make_segment(0, 5, 0.8)

    assert score_segment(segment, Intent(style="fast")) == pytest.approx(0.8 + 0.1)
    assert score_segment(segment, Intent(style="slow")) == pytest.approx(0.2 + 0.1)
    assert score_segment(segment, Intent(style="balanced")) == pytest.approx(0.9 + 0.1)


def test_template_and_focus_scores():
    tags = SegmentTags(has_face=True, has_action=True, has_dialogue=True, motion_score=0.4, speech_density=0.5)
    segment = make_segment(0, 5, 0.6, tags)
    base = 0.5 + 0.6 * 0.5

    assert score_segment(segment, Intent(template="vlog")) == pytest.approx(base + 0.25 + 0.1)
    assert score_segment(segment, Intent(template="sport")) == pytest.approx(base + 0.3 + 0.1)
    assert score_segment(segment, Intent(template="story")) == pytest.approx(base + 0.2 + 0.08)
    assert score_segment(segment, Intent(focus="face")) == pytest.approx(base + 0.3 + 0.1)
    assert score_segment(make_segment(0, 5, 0.6), Intent(focus="action")) == pytest.approx(base + 0.1)


def test_selects_best_segments_up_to_target(segments):
    timeline = build_timeline(segments, Intent(target_duration=10, style="fast", keep_start=False))

    # Highest energy first: 5-10 (0.9) then 15-20 (0.7)
    assert [c.id for c in timeline.clips] == ["5.00-10.00", "15.00-20.00"]
    assert timeline.total_duration == pytest.approx(10)
    assert timeline.target_duration == 10


def test_anchors_are_always_kept(segments):
    timeline = build_timeline(
        segments,
        Intent(target_duration=5, style="fast", keep_start=True, keep_end=True),
    )

    assert [c.id for c in timeline.clips] == ["0.00-5.00", "15.00-20.00"]
    assert timeline.clips[0].reason == "opening kept"
    assert timeline.clips[1].reason == "ending kept"


def test_result_is_chronological(segments):
    timeline = build_timeline(segments, Intent(target_duration=15, style="slow", keep_start=False))
    starts = [c.start for c in timeline.clips]

    assert starts == sorted(starts)
    assert len(starts) == 3


def test_ties_keep_input_order():
    flat = [make_segment(i * 2.0, i * 2.0 + 2, 0.5) for i in range(5)]
    timeline = build_timeline(flat, Intent(target_duration=4, keep_start=False))

    assert [c.start for c in timeline.clips] == [0.0, 2.0]


def test_target_capped_at_media_duration(segments):
    timeline = build_timeline(segments, Intent(target_duration=500))

    assert timeline.target_duration == 20
    assert len(timeline.clips) == 4


def test_single_segment_is_not_duplicated_by_keep_end():
    only = [make_segment(0, 8.75, 0.5)]
    timeline = build_timeline(only, Intent(keep_start=True, keep_end=True))

    assert len(timeline.clips) == 1


def test_empty_segments():
    timeline = build_timeline([], Intent())
    assert timeline.clips == []
    assert timeline.target_duration == 0


def test_reasons_describe_fired_rules():
    hot = make_segment(0, 5, 0.9, SegmentTags(has_action=True, motion_score=0.8))

    assert build_reason(hot, Intent(style="fast", focus="action", template="sport")) == (
        "high energy · clear action · intense motion"
    )
    assert build_reason(hot, Intent()) == "balanced coverage"
    assert build_reason(make_segment(0, 5, 0.5), Intent(focus="face")) == "best overall score"


def test_intent_is_immutable():
    intent = Intent()
    with pytest.raises(ValidationError):
        intent.style = "fast"
