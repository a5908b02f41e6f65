"""Selection intent — immutable description of what the cut should favour."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class Intent(BaseModel):
    """Style, focus and template for segment selection.

    Passed explicitly into selection; there is no ambient default state.
    """

    model_config = ConfigDict(frozen=True)

    target_duration: float = Field(default=30.0, gt=0.0)
    style: Literal["fast", "slow", "balanced"] = "balanced"
    focus: Literal["none", "face", "action"] = "none"
    template: Literal["general", "vlog", "sport", "story"] = "general"
    keep_start: bool = True
    keep_end: bool = False
