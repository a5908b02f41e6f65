"""Background-music providers."""

from __future__ import annotations

import re
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from reelagent.utils.progress import log_step, log_warning

AUDIO_SUFFIXES = {".mp3", ".wav", ".m4a", ".aac", ".ogg", ".flac"}

_TOKEN = re.compile(r"[a-z0-9]+")


@dataclass
class BgmTrack:
    """A music file ready to be used as an encoder input."""

    path: Path
    duration_seconds: float | None = None
    title: str = ""
    artist: str = ""


class BgmProvider(Protocol):
    """Protocol for background-music providers."""

    name: str

    def fetch(self, keywords: str, workdir: Path) -> BgmTrack | None: ...


def _tokens(value: str) -> set[str]:
    return set(_TOKEN.findall(value.lower()))


class LocalLibraryProvider:
    """Picks music from a local directory by filename keyword overlap.

    ``calm-piano-ambient.mp3`` matches keywords "calm piano" with score 2.
    Ties go to the alphabetically first file; with no overlap at all the
    first file is used.
    """

    name = "local"

    def __init__(self, library_dir: Path | str):
        self.library_dir = Path(library_dir)

    def candidates(self) -> list[Path]:
        if not self.library_dir.is_dir():
            return []
        return sorted(
            p for p in self.library_dir.iterdir()
            if p.is_file() and p.suffix.lower() in AUDIO_SUFFIXES
        )

    def fetch(self, keywords: str, workdir: Path) -> BgmTrack | None:
        files = self.candidates()
        if not files:
            log_warning(f"No music files in {self.library_dir}")
            return None

        wanted = _tokens(keywords)
        best = max(files, key=lambda p: len(wanted & _tokens(p.stem)))
        if not wanted & _tokens(best.stem):
            log_warning(f"No music matches '{keywords}' — using {best.name}")

        dest = workdir / f"bgm{best.suffix.lower()}"
        shutil.copy2(best, dest)
        log_step("Music", f"'{keywords}' → {best.name}")
        return BgmTrack(path=dest, title=best.stem)
