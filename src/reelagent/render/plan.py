"""Render plan builder — FFmpeg filter graph for a render timeline.

Graph layout:

    [0:v] trim -> setpts reset -> setpts rescale   [v0] ...
    [0:a] atrim -> asetpts reset -> atempo chain   [a0] ...
    [v0][a0]...concat                              [concatv][concata]
    -> fade/afade stages (timeline time)
    -> text overlays, each gated with between(t, st, et)
    -> bgm amix
    -> null/anull                                  [outv][outa]

Without overlays or bgm the concat writes [outv][outa] directly.
"""

from __future__ import annotations

import math

from reelagent.models.plan import PlanInput, RenderPlan
from reelagent.models.timeline import Clip, RenderTimeline
from reelagent.render.tempo import atempo_filter

OUT_VIDEO = "[outv]"
OUT_AUDIO = "[outa]"
MIN_FADE_SECONDS = 0.1


def _t(value: float) -> str:
    return f"{value:.3f}"


def _video_stage(clip: Clip, i: int) -> str:
    # Reset timestamps before rescaling them
    filters = [
        f"trim=start={_t(clip.start)}:end={_t(clip.end)}",
        "setpts=PTS-STARTPTS",
        f"setpts={1 / clip.playback_rate:.6g}*PTS",
    ]
    if clip.transform is not None:
        if clip.transform.flip_x:
            filters.append("hflip")
        if clip.transform.flip_y:
            filters.append("vflip")
    return f"[0:v]{','.join(filters)}[v{i}]"


def _audio_stage(clip: Clip, i: int) -> str:
    filters = [
        f"atrim=start={_t(clip.start)}:end={_t(clip.end)}",
        "asetpts=PTS-STARTPTS",
        atempo_filter(clip.playback_rate),
    ]
    if clip.volume != 1.0:
        filters.append(f"volume={clip.volume:.3f}")
    return f"[0:a]{','.join(filters)}[a{i}]"


def build_render_plan(timeline: RenderTimeline, *, include_bgm: bool = True) -> RenderPlan:
    """Build the encoder plan for a compiled timeline.

    Pure: describes extra inputs (overlay images, music) without creating
    them. A timeline without clips yields an empty plan.
    """
    if timeline is None:
        raise ValueError("timeline is required")
    if timeline.is_empty:
        return RenderPlan(empty=True)

    clips = timeline.clips
    texts = [t for t in timeline.text_edits if t.text]
    fades = timeline.fade_edits
    bgm = timeline.bgm_edits[-1] if include_bgm and timeline.bgm_edits else None
    needs_post = bool(texts or fades or bgm)

    parts: list[str] = []
    for i, clip in enumerate(clips):
        parts.append(_video_stage(clip, i))
        parts.append(_audio_stage(clip, i))

    video = "[concatv]" if needs_post else OUT_VIDEO
    audio = "[concata]" if needs_post else OUT_AUDIO
    concat_inputs = "".join(f"[v{i}][a{i}]" for i in range(len(clips)))
    parts.append(f"{concat_inputs}concat=n={len(clips)}:v=1:a=1{video}{audio}")

    for i, fade in enumerate(fades):
        st = fade.timeline_start
        d = max(MIN_FADE_SECONDS, fade.timeline_end - st)
        parts.append(f"{video}fade=t={fade.direction}:st={_t(st)}:d={_t(d)}[vfade{i}]")
        parts.append(f"{audio}afade=t={fade.direction}:st={_t(st)}:d={_t(d)}[afade{i}]")
        video, audio = f"[vfade{i}]", f"[afade{i}]"

    inputs: list[PlanInput] = []
    loop_seconds = math.ceil(timeline.total_timeline_duration) + 1
    for i, text in enumerate(texts):
        index = len(inputs) + 1
        inputs.append(PlanInput(
            index=index,
            kind="text",
            text=text.text,
            position=text.position,
            loop_seconds=loop_seconds,
        ))
        parts.append(f"[{index}:v]setpts=PTS-STARTPTS[txt{i}]")
        parts.append(
            f"{video}[txt{i}]overlay=0:0:"
            f"enable='between(t,{_t(text.timeline_start)},{_t(text.timeline_end)})'[vtxt{i}]"
        )
        video = f"[vtxt{i}]"

    if bgm is not None:
        index = len(inputs) + 1
        inputs.append(PlanInput(index=index, kind="bgm", keywords=bgm.keywords, volume=bgm.volume))
        parts.append(f"[{index}:a]volume={bgm.volume:.3f}[bgm]")
        parts.append(f"{audio}[bgm]amix=inputs=2:duration=first:normalize=0[abgm]")
        audio = "[abgm]"

    if video != OUT_VIDEO:
        parts.append(f"{video}null{OUT_VIDEO}")
    if audio != OUT_AUDIO:
        parts.append(f"{audio}anull{OUT_AUDIO}")

    return RenderPlan(
        filter_graph=";".join(parts),
        output_map=[OUT_VIDEO, OUT_AUDIO],
        # Looping inputs would run past the end without an explicit cap
        duration_hint=timeline.total_timeline_duration if inputs else None,
        inputs=inputs,
    )
