"""Tests for placeholder analysis and agent response parsing."""

from __future__ import annotations

import json

import pytest

from reelagent.analysis.features import (
    _hash_string,
    _seeded_random,
    parse_agent_response,
    synthesize_segments,
)
from reelagent.analysis.providers import ResponseFileProvider
from reelagent.models.request import RequestContext


def test_hash_matches_java_style_string_hash():
    assert _hash_string("") == 0
    assert _hash_string("abc") == 96354


def test_seeded_random_is_deterministic():
    first, second = _seeded_random(42), _seeded_random(42)
    values = [first() for _ in range(5)]

    assert values == [second() for _ in range(5)]
    assert all(0 <= v < 1 for v in values)
    assert _seeded_random(1)() == pytest.approx(16806 / 2147483646)


def test_synthesized_segments_partition_the_video():
    features = synthesize_segments("clip.mp4", 1024, 60.0)
    segments = features.segments

    assert features.segment_count == len(segments) == 10
    assert segments[0].start == 0
    assert segments[-1].end == 60.0
    for prev, cur in zip(segments, segments[1:]):
        assert cur.start == pytest.approx(prev.end)
    assert all(0.3 <= s.energy <= 1.0 for s in segments)
    assert len(features.keyframes) == 10


@pytest.mark.parametrize("duration, count", [(10.0, 6), (60.0, 10), (600.0, 12)])
def test_segment_count_is_clamped(duration, count):
    assert synthesize_segments("v.mp4", 1, duration).segment_count == count


def test_synthesis_depends_only_on_inputs():
    a = synthesize_segments("v.mp4", 100, 30.0)
    b = synthesize_segments("v.mp4", 100, 30.0)
    c = synthesize_segments("other.mp4", 100, 30.0)

    assert a == b
    assert [s.energy for s in a.segments] != [s.energy for s in c.segments]


def test_zero_duration_has_no_segments():
    assert synthesize_segments("v.mp4", 1, 0).segments == []


REPLY = """Here is the plan:
```json
{
  "segments": [
    {"start": 0, "end": 4, "energy": 0.8, "tags": {"hasFace": true, "motionScore": 0.4}, "label": "intro"},
    {"start": 4, "end": 9, "energy": 0, "tags": {"motionScore": 3}},
    {"start": "x", "end": 12}
  ],
  "events": [{"label": "eggs being mashed", "start": 2, "end": 3}, {"label": "broken"}],
  "edits": [{"type": "delete", "start": 1, "end": 2}, "nonsense"],
  "final_answer": "Trimmed the intro"
}
```"""


def test_parse_fenced_reply():
    features = parse_agent_response(REPLY)

    assert features is not None
    first, second = features.segments
    assert first.id == "0.00-4.00"
    assert first.label == "intro"
    assert first.tags.has_face is True
    assert first.tags.motion_score == 0.4
    # Zero energy falls back to the neutral default
    assert second.energy == 0.5
    assert second.tags.motion_score == 0.0
    assert features.duration == 9
    assert [e.label for e in features.events] == ["eggs being mashed"]
    assert features.edits == [{"type": "delete", "start": 1, "end": 2}]
    assert features.summary == "Trimmed the intro"


@pytest.mark.parametrize("text", ["no json here", "{not json}", '{"segments": "nope"}', '{"segments": []}'])
def test_unusable_replies(text):
    assert parse_agent_response(text) is None


def test_response_file_provider(tmp_path):
    path = tmp_path / "reply.json"
    path.write_text(REPLY)

    result = ResponseFileProvider(path).analyze(RequestContext(duration_seconds=9.0))

    assert len(result.segments) == 2
    assert result.edits == [{"type": "delete", "start": 1, "end": 2}]
    assert result.summary == "Trimmed the intro"


def test_parse_edits_only_reply():
    features = parse_agent_response('{"edits": [{"type": "fade", "start": 0, "end": 1, "direction": "in"}], "summary": "Faded in"}')

    assert features is not None
    assert features.segments == []
    assert features.duration == 0
    assert features.edits == [{"type": "fade", "start": 0, "end": 1, "direction": "in"}]
    assert features.summary == "Faded in"


def test_response_file_without_segments_keeps_its_edits(tmp_path):
    path = tmp_path / "reply.json"
    path.write_text(json.dumps({"edits": [{"type": "delete", "start": 1, "end": 2}]}))

    result = ResponseFileProvider(path).analyze(RequestContext(duration_seconds=9.0))

    assert result.segments is None
    assert result.edits == [{"type": "delete", "start": 1, "end": 2}]


def test_response_file_with_nothing_usable(tmp_path):
    path = tmp_path / "reply.json"
    path.write_text(json.dumps({"edits": []}))

    result = ResponseFileProvider(path).analyze(RequestContext(duration_seconds=9.0))

    assert result.segments is None
    assert result.edits == []


def test_response_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        ResponseFileProvider(tmp_path / "missing.json").analyze(RequestContext(duration_seconds=1))
