"""Edit operation models — a closed tagged union over ``type``."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

EDIT_TYPES = ("split", "speed", "delete", "text", "fade", "volume", "transform", "bgm")

# Edits that only anchor overlays in time and never cut clips
TIME_ANCHORED_TYPES = ("text", "fade")


class TimedEdit(BaseModel):
    """Base for edits bound to a [start, end] range of media time."""

    start: float
    end: float


class SplitEdit(TimedEdit):
    """Marks cut boundaries; may carry a range."""

    type: Literal["split"] = "split"


class SpeedEdit(TimedEdit):
    """Multiplies playback speed over a media-time range."""

    type: Literal["speed"] = "speed"
    rate: float = 1.0


class DeleteEdit(TimedEdit):
    type: Literal["delete"] = "delete"


class TextEdit(TimedEdit):
    type: Literal["text"] = "text"
    text: str
    position: Literal["top", "center", "bottom"] = "bottom"


class FadeEdit(TimedEdit):
    type: Literal["fade"] = "fade"
    direction: Literal["in", "out"]


class VolumeEdit(TimedEdit):
    type: Literal["volume"] = "volume"
    volume: float = Field(default=1.0, ge=0.0, le=1.0)


class Crop(BaseModel):
    """Crop rectangle as fractions of the frame."""

    x: float = Field(default=0.0, ge=0.0, le=1.0)
    y: float = Field(default=0.0, ge=0.0, le=1.0)
    width: float = Field(default=1.0, gt=0.0, le=1.0)
    height: float = Field(default=1.0, gt=0.0, le=1.0)


class Transform(BaseModel):
    """Per-clip visual transform."""

    model_config = ConfigDict(populate_by_name=True)

    scale: float = 1.0
    x: float = 0.0
    y: float = 0.0
    rotate: float = 0.0
    flip_x: bool = Field(default=False, alias="flipX")
    flip_y: bool = Field(default=False, alias="flipY")
    crop: Crop | None = None


class TransformEdit(TimedEdit):
    type: Literal["transform"] = "transform"
    transform: Transform = Field(default_factory=Transform)


class BgmEdit(BaseModel):
    """Background music request; global, not tied to media time."""

    type: Literal["bgm"] = "bgm"
    keywords: str
    volume: float = Field(default=0.3, ge=0.0, le=1.0)


EditOperation = Annotated[
    Union[
        SplitEdit,
        SpeedEdit,
        DeleteEdit,
        TextEdit,
        FadeEdit,
        VolumeEdit,
        TransformEdit,
        BgmEdit,
    ],
    Field(discriminator="type"),
]

# Edits that can be attached to a clip as its structural edit
ClipEdit = Annotated[Union[SpeedEdit, SplitEdit], Field(discriminator="type")]
