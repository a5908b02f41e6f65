"""Pydantic data models for ReelAgent."""

from reelagent.models.config import Config, RenderConfig
from reelagent.models.edits import EditOperation
from reelagent.models.intent import Intent
from reelagent.models.plan import ExportResult, RenderPlan
from reelagent.models.project import Project
from reelagent.models.segment import Segment
from reelagent.models.timeline import CandidateTimeline, Clip, RenderTimeline

__all__ = [
    "CandidateTimeline",
    "Clip",
    "Config",
    "EditOperation",
    "ExportResult",
    "Intent",
    "Project",
    "RenderConfig",
    "RenderPlan",
    "RenderTimeline",
    "Segment",
]
