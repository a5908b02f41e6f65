"""Render plan and export result models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class PlanInput(BaseModel):
    """An extra encoder input the plan expects, in input-index order.

    The plan only describes the input; the export step materialises it
    (overlay image or music file) and passes its path to the encoder.
    """

    index: int
    kind: Literal["text", "bgm"]
    text: str | None = None
    position: str | None = None
    keywords: str | None = None
    volume: float | None = None
    loop_seconds: int | None = None


class RenderPlan(BaseModel):
    """A filter graph plus input/output wiring for the external encoder."""

    filter_graph: str = ""
    output_map: list[str] = Field(default_factory=list)
    duration_hint: float | None = None
    inputs: list[PlanInput] = Field(default_factory=list)
    empty: bool = False

    @property
    def text_inputs(self) -> list[PlanInput]:
        return [i for i in self.inputs if i.kind == "text"]


class ExportResult(BaseModel):
    """Outcome of one export request."""

    request_id: str
    status: Literal["success", "render_failed", "nothing_to_render"]
    output_path: str | None = None
    exit_code: int | None = None
    stderr: str = ""
    elapsed_seconds: float = 0.0

    @property
    def ok(self) -> bool:
        return self.status == "success"
