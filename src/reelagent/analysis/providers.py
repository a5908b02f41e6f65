"""Edit-producing agent providers."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from reelagent.analysis.features import parse_agent_response
from reelagent.models.request import AgentResult, RequestContext
from reelagent.utils.progress import log_step, log_warning


class AgentProvider(Protocol):
    """Protocol for anything that turns a request into edit operations."""

    name: str

    def analyze(self, context: RequestContext) -> AgentResult: ...


class ResponseFileProvider:
    """Replays a saved agent reply (JSON, optionally fenced) from disk."""

    name = "response-file"

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def analyze(self, context: RequestContext) -> AgentResult:
        if not self.path.exists():
            raise FileNotFoundError(f"Agent response not found: {self.path}")

        features = parse_agent_response(self.path.read_text())
        if features is None:
            log_warning(f"No usable segments or edits in {self.path.name}; nothing to apply")
            return AgentResult()

        if not features.segments:
            log_warning(
                f"No usable segments in {self.path.name}; keeping existing segments, "
                f"{len(features.edits)} edit(s) kept"
            )

        if context.duration_seconds > 0 and features.duration > context.duration_seconds + 0.5:
            log_warning(
                f"Agent segments end at {features.duration:.1f}s, "
                f"past the {context.duration_seconds:.1f}s source"
            )

        log_step(
            "Agent",
            f"{len(features.edits)} edit(s), {features.segment_count} segment(s) "
            f"from {self.path.name}",
        )
        return AgentResult(
            edits=features.edits,
            segments=features.segments or None,
            events=features.events,
            summary=features.summary,
        )
