"""Left-to-right placement of states that have no coordinates yet."""

from __future__ import annotations

import logging
from collections.abc import Hashable

from fsmviz.models import Automaton

logger = logging.getLogger(__name__)

MARGIN = 100
DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600


def layout_order(automaton: Automaton) -> list[Hashable]:
    """Initial state first (when it is known), then the rest in insertion order."""
    ordered: list[Hashable] = []
    if automaton.initial_state is not None and automaton.initial_state in automaton.states:
        ordered.append(automaton.initial_state)
    for name in automaton.states:
        if name not in ordered:
            ordered.append(name)
    return ordered


def auto_layout(
    automaton: Automaton, width: float = DEFAULT_WIDTH, height: float = DEFAULT_HEIGHT
) -> None:
    """Assign coordinates to every state missing one or both of them.

    States that already carry both coordinates are left alone, so positions
    are sticky across calls with different dimensions.
    """
    if not automaton.states:
        return

    ordered = layout_order(automaton)
    spacing = (width - 2 * MARGIN) / max(len(ordered) - 1, 1)
    y_center = height / 2

    placed = 0
    for index, name in enumerate(ordered):
        state = automaton.states[name]
        if not state.is_placed:
            state.x = MARGIN + index * spacing
            state.y = y_center
            placed += 1

    logger.debug("Placed %d of %d states on a %sx%s canvas", placed, len(ordered), width, height)
