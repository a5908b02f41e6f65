"""Configuration models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class RenderConfig(BaseModel):
    """Configuration for rendering and export."""

    video_codec: str = "libx264"
    video_preset: str | None = "veryfast"
    video_bitrate: str = "4000k"
    audio_codec: str = "aac"
    audio_bitrate: str = "128k"
    font_path: str | None = None
    text_scale: float = Field(default=0.04, ge=0.01, le=0.2)
    bgm_library_dir: str | None = None
    temp_dir: str | None = None


class Config(BaseModel):
    """All module configurations."""

    render: RenderConfig = Field(default_factory=RenderConfig)
