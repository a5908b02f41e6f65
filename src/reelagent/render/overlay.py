"""Text overlay images — transparent PNGs composited by the encoder."""

from __future__ import annotations

from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from reelagent.utils.progress import log_step

EDGE_MARGIN = 0.08


def text_box_top(position: str, height: int, box_height: int) -> int:
    """Top edge of the text band: 8% from the top/bottom edge, or centered."""
    if position == "top":
        return round(height * EDGE_MARGIN)
    if position == "center":
        return round((height - box_height) / 2)
    return height - box_height - round(height * EDGE_MARGIN)


def _load_font(font_path: str | None, size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    if font_path:
        return ImageFont.truetype(font_path, size)
    return ImageFont.load_default(size=size)


def render_text_overlay(
    text: str,
    position: str,
    width: int,
    height: int,
    output_path: Path,
    *,
    font_path: str | None = None,
    text_scale: float = 0.04,
) -> Path:
    """Draw white, black-stroked text on a transparent frame-sized PNG.

    Font size is ``text_scale`` of the frame height, with a quarter of the
    font size as padding above and below.
    """
    font_size = max(1, round(height * text_scale))
    padding = round(font_size * 0.25)
    box_height = font_size + padding * 2
    top = text_box_top(position, height, box_height)

    image = Image.new("RGBA", (width, height), (0, 0, 0, 0))
    draw = ImageDraw.Draw(image)
    draw.text(
        (width / 2, top + box_height / 2),
        text,
        font=_load_font(font_path, font_size),
        fill=(255, 255, 255, 255),
        anchor="mm",
        stroke_width=max(2, round(font_size * 0.08)),
        stroke_fill=(0, 0, 0, 230),
    )
    image.save(output_path, format="PNG")

    log_step("Overlay", f"{position} text '{text[:30]}' → {output_path.name}")
    return output_path
