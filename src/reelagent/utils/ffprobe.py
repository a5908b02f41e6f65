"""FFprobe wrapper for media file metadata extraction."""

from __future__ import annotations

import json
import subprocess
from dataclasses import dataclass
from pathlib import Path

DEFAULT_WIDTH = 1920
DEFAULT_HEIGHT = 1080


@dataclass
class MediaInfo:
    """Video file metadata extracted via FFprobe."""

    path: str
    width: int
    height: int
    duration_seconds: float
    has_audio: bool
    codec: str
    format_name: str

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height


def probe_media(path: Path | str) -> MediaInfo:
    """Probe a media file with FFprobe and return metadata."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Media file not found: {path}")

    result = subprocess.run(
        [
            "ffprobe",
            "-v", "quiet",
            "-print_format", "json",
            "-show_format",
            "-show_streams",
            str(path),
        ],
        capture_output=True,
        text=True,
        check=True,
    )

    return parse_probe_output(str(path), json.loads(result.stdout or "{}"))


def parse_probe_output(path: str, data: dict) -> MediaInfo:
    """Build a MediaInfo from ffprobe's JSON output.

    Frame size falls back to 1920x1080 when the stream does not report it.
    """
    streams = data.get("streams", [])
    video_stream = next((s for s in streams if s.get("codec_type") == "video"), {})
    has_audio = any(s.get("codec_type") == "audio" for s in streams)
    fmt = data.get("format", {})

    duration = fmt.get("duration", video_stream.get("duration", 0))

    return MediaInfo(
        path=path,
        width=int(video_stream.get("width") or DEFAULT_WIDTH),
        height=int(video_stream.get("height") or DEFAULT_HEIGHT),
        duration_seconds=float(duration or 0),
        has_audio=has_audio,
        codec=video_stream.get("codec_name", ""),
        format_name=fmt.get("format_name", ""),
    )
