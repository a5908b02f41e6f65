"""Tests for text overlay image rendering."""

from __future__ import annotations

import pytest
from PIL import Image

from reelagent.render.overlay import render_text_overlay, text_box_top


@pytest.mark.parametrize(
    "position, expected",
    [("top", 80), ("center", 450), ("bottom", 820)],
)
def test_text_box_placement(position, expected):
    assert text_box_top(position, 1000, 100) == expected


def _alpha_bbox(path):
    with Image.open(path) as image:
        assert image.mode == "RGBA"
        assert image.size == (320, 180)
        assert image.getpixel((0, 0))[3] == 0
        return image.getchannel("A").getbbox()


def test_bottom_text_is_drawn_near_the_bottom(tmp_path):
    path = render_text_overlay("Hello", "bottom", 320, 180, tmp_path / "bottom.png")

    bbox = _alpha_bbox(path)
    assert bbox is not None
    assert bbox[1] > 90


def test_top_text_is_drawn_near_the_top(tmp_path):
    path = render_text_overlay("Hello", "top", 320, 180, tmp_path / "top.png")

    bbox = _alpha_bbox(path)
    assert bbox is not None
    assert bbox[3] < 90
