"""Tests for atempo chain decomposition."""

from __future__ import annotations

import math

import pytest

from reelagent.render.tempo import ATEMPO_MAX, ATEMPO_MIN, atempo_filter, tempo_chain


@pytest.mark.parametrize(
    "rate, expected",
    [
        (5.0, [2.0, 2.0, 1.25]),
        (4.0, [2.0, 2.0]),
        (1.0, [1.0]),
        (1.5, [1.5]),
        (0.1, [0.5, 0.5, 0.5, 0.8]),
        (0.3, [0.5, 0.6]),
    ],
)
def test_chain_steps(rate, expected):
    chain = tempo_chain(rate)

    assert chain == pytest.approx(expected)
    assert all(ATEMPO_MIN <= step <= ATEMPO_MAX for step in chain)
    assert math.prod(chain) == pytest.approx(rate, rel=1e-3)


def test_invalid_rate_is_unit_tempo():
    assert tempo_chain(0) == [1.0]
    assert tempo_chain(float("nan")) == [1.0]


def test_filter_text():
    assert atempo_filter(5.0) == "atempo=2.0000,atempo=2.0000,atempo=1.2500"
    assert atempo_filter(1.0) == "atempo=1.0000"
