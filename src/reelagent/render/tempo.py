"""Tempo chains for FFmpeg's atempo filter."""

from __future__ import annotations

import math

# atempo is only accurate inside this band
ATEMPO_MIN = 0.5
ATEMPO_MAX = 2.0
STEP_DECIMALS = 4


def tempo_chain(rate: float) -> list[float]:
    """Decompose a playback rate into atempo steps inside [0.5, 2.0].

    Rates above 2.0 become repeated 2.0 steps plus a residual, rates below
    0.5 repeated 0.5 steps plus a residual: 5.0 -> [2.0, 2.0, 1.25].
    """
    if not math.isfinite(rate) or rate <= 0:
        rate = 1.0

    steps: list[float] = []
    remaining = rate
    if rate > ATEMPO_MAX:
        while remaining > ATEMPO_MAX:
            steps.append(ATEMPO_MAX)
            remaining /= ATEMPO_MAX
    elif rate < ATEMPO_MIN:
        while remaining < ATEMPO_MIN:
            steps.append(ATEMPO_MIN)
            remaining /= ATEMPO_MIN
    steps.append(round(remaining, STEP_DECIMALS))
    return steps


def atempo_filter(rate: float) -> str:
    """Comma-joined atempo filters for a playback rate."""
    return ",".join(f"atempo={step:.4f}" for step in tempo_chain(rate))
