"""Text size estimates for transition labels and state names."""

from __future__ import annotations

import math

from fsmviz.geometry import STATE_RADIUS

MIN_LABEL_WIDTH = 60
BASE_FONT_SIZE = 20
MIN_FONT_SIZE = 12


def _char_counts(text: str) -> tuple[int, int]:
    narrow = sum(1 for ch in text if ch.isascii())
    return narrow, len(text) - narrow


def text_width(text: str) -> int:
    """Estimated pixel width of a label's background box."""
    narrow, wide = _char_counts(text)
    return max(narrow * 8 + wide * 16 + 20, MIN_LABEL_WIDTH)


def state_font_size(name: str, radius: float = STATE_RADIUS) -> int:
    """Largest font size (within limits) that keeps ``name`` inside its circle."""
    narrow, wide = _char_counts(name)
    estimated_em = narrow * 0.55 + wide * 0.9
    available = radius * 1.7

    if estimated_em * BASE_FONT_SIZE > available:
        size = math.floor(available / estimated_em)
    else:
        size = BASE_FONT_SIZE
    return max(size, MIN_FONT_SIZE)
