"""Timeline interchange — JSON sidecar + OpenTimelineIO export."""

from __future__ import annotations

from pathlib import Path

import opentimelineio as otio

from reelagent.models.timeline import RenderTimeline
from reelagent.utils.io import save_model
from reelagent.utils.progress import log_step


def _rt(seconds: float, fps: int) -> otio.opentime.RationalTime:
    return otio.opentime.RationalTime(round(seconds * fps), fps)


def _range(start: float, duration: float, fps: int) -> otio.opentime.TimeRange:
    return otio.opentime.TimeRange(start_time=_rt(start, fps), duration=_rt(duration, fps))


def build_otio_timeline(
    timeline: RenderTimeline,
    *,
    name: str = "",
    source_url: str | None = None,
    fps: int = 30,
) -> otio.schema.Timeline:
    """Convert a render timeline into an OTIO timeline.

    Each clip keeps its media-time source range; speed changes become
    LinearTimeWarp effects and text overlays become markers on the track
    (in timeline time).
    """
    otio_timeline = otio.schema.Timeline(name=name)
    track = otio.schema.Track(name="V1", kind=otio.schema.TrackKind.Video)

    for clip in timeline.clips:
        media_reference = (
            otio.schema.ExternalReference(target_url=source_url)
            if source_url
            else otio.schema.MissingReference()
        )
        otio_clip = otio.schema.Clip(
            name=clip.id,
            media_reference=media_reference,
            source_range=_range(clip.start, clip.duration, fps),
        )
        if clip.playback_rate != 1.0:
            otio_clip.effects.append(
                otio.schema.LinearTimeWarp(name="speed", time_scalar=clip.playback_rate)
            )
        otio_clip.metadata["reelagent"] = {
            "timeline_start": clip.timeline_start,
            "display_duration": clip.display_duration,
            "volume": clip.volume,
        }
        track.append(otio_clip)

    for overlay in timeline.text_edits:
        track.markers.append(otio.schema.Marker(
            name=overlay.text,
            marked_range=_range(
                overlay.timeline_start,
                max(0.0, overlay.timeline_end - overlay.timeline_start),
                fps,
            ),
            color=otio.schema.MarkerColor.YELLOW,
            metadata={"reelagent": {"position": overlay.position}},
        ))

    otio_timeline.tracks.append(track)
    return otio_timeline


def write_timeline_files(
    timeline: RenderTimeline,
    output_dir: Path,
    *,
    name: str = "",
    source_url: str | None = None,
    fps: int = 30,
) -> tuple[Path, Path]:
    """Write ``timeline.json`` and ``timeline.otio`` into output_dir."""
    output_dir.mkdir(parents=True, exist_ok=True)
    json_path = output_dir / "timeline.json"
    otio_path = output_dir / "timeline.otio"

    save_model(json_path, timeline)
    otio.adapters.write_to_file(
        build_otio_timeline(timeline, name=name, source_url=source_url, fps=fps),
        str(otio_path),
    )

    log_step("Export", f"Wrote {json_path.name} and {otio_path.name} ({len(timeline.clips)} clips)")
    return json_path, otio_path
