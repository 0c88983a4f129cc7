"""Edge geometry for state diagrams.

Every transition becomes one of three shapes:

- a cubic self-loop bump above its state,
- a straight segment between neighbouring states drawn left to right,
- a quadratic curve for everything else (skip edges, backward edges and
  edges sharing their pair of states with other transitions).

The resolver folds over the transition list once. The only state carried
between transitions lives in an explicit ``EdgeCounters`` accumulator, so a
single edge can be resolved in isolation given a hand-built counter state.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Hashable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import NamedTuple, Union

from fsmviz.models import Automaton, Transition, UnknownStateError

logger = logging.getLogger(__name__)

STATE_RADIUS = 40
STATE_INNER_RADIUS = 32
LOOP_HEIGHT = 80
LOOP_WIDTH = 45
LABEL_LIFT = 10
VERTICAL_NUDGE = 50
PARALLEL_STEP = 50
SKIP_STEP = 30
FAN_OUT_STEP = 120


class Point(NamedTuple):
    x: float
    y: float


@dataclass(frozen=True)
class SelfLoop:
    """Cubic loop from -135 deg to -45 deg on the state's circle."""

    transition: Transition
    start: Point
    control1: Point
    control2: Point
    end: Point
    label_anchor: Point

    def path_data(self) -> str:
        return (
            f"M {fmt(self.start.x)} {fmt(self.start.y)} "
            f"C {fmt(self.control1.x)} {fmt(self.control1.y)}, "
            f"{fmt(self.control2.x)} {fmt(self.control2.y)}, "
            f"{fmt(self.end.x)} {fmt(self.end.y)}"
        )


@dataclass(frozen=True)
class StraightEdge:
    transition: Transition
    start: Point
    end: Point
    label_anchor: Point


@dataclass(frozen=True)
class CurvedEdge:
    """Quadratic curve through a single control point."""

    transition: Transition
    start: Point
    control: Point
    end: Point
    label_anchor: Point
    curve_offset: float
    pair_index: int

    def path_data(self) -> str:
        return (
            f"M {fmt(self.start.x)} {fmt(self.start.y)} "
            f"Q {fmt(self.control.x)} {fmt(self.control.y)}, "
            f"{fmt(self.end.x)} {fmt(self.end.y)}"
        )


EdgeGeometry = Union[SelfLoop, StraightEdge, CurvedEdge]


def pair_key(a: Hashable, b: Hashable) -> frozenset:
    """Order-independent key for the pair of states ``a`` and ``b``."""
    return frozenset((a, b))


@dataclass
class EdgeCounters:
    """Running counters for one render pass.

    ``pair_index`` counts transitions seen per undirected pair, regardless of
    direction. ``outgoing_index`` counts non-self-loop transitions seen per
    source state.
    """

    pair_index: dict[frozenset, int] = field(default_factory=dict)
    outgoing_index: dict[Hashable, int] = field(default_factory=dict)

    def next_pair_index(self, a: Hashable, b: Hashable) -> int:
        key = pair_key(a, b)
        current = self.pair_index.get(key, 0)
        self.pair_index[key] = current + 1
        return current

    def next_outgoing_index(self, source: Hashable) -> int:
        current = self.outgoing_index.get(source, 0)
        self.outgoing_index[source] = current + 1
        return current


def fmt(value: float) -> str:
    if math.isclose(value, round(value), abs_tol=1e-9):
        return str(int(round(value)))
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def quadratic_point(p0: Point, control: Point, p1: Point, t: float) -> Point:
    """Evaluate a quadratic Bezier curve at parameter ``t``."""
    u = 1 - t
    return Point(
        u * u * p0.x + 2 * u * t * control.x + t * t * p1.x,
        u * u * p0.y + 2 * u * t * control.y + t * t * p1.y,
    )


def precedes(a: Hashable, b: Hashable, order: Sequence[Hashable]) -> bool:
    """Direction tie-break between two state identifiers.

    Identifiers that are totally ordered by ``<`` use their natural order.
    Anything else (opaque tokens, mixed types, partial orders such as set
    inclusion) falls back to the order in which the states were added.
    """
    try:
        forward = bool(a < b)  # type: ignore[operator]
        backward = bool(b < a)  # type: ignore[operator]
    except TypeError:
        forward = backward = False
    if forward != backward:
        return forward
    return order.index(a) < order.index(b)


def self_loop_geometry(
    transition: Transition, center: Point, radius: float = STATE_RADIUS
) -> SelfLoop:
    cx, cy = center
    start_angle = math.radians(-135)
    end_angle = math.radians(-45)
    return SelfLoop(
        transition=transition,
        start=Point(cx + radius * math.cos(start_angle), cy + radius * math.sin(start_angle)),
        control1=Point(cx - LOOP_WIDTH, cy - LOOP_HEIGHT),
        control2=Point(cx + LOOP_WIDTH, cy - LOOP_HEIGHT),
        end=Point(cx + radius * math.cos(end_angle), cy + radius * math.sin(end_angle)),
        label_anchor=Point(cx, cy - LOOP_HEIGHT + LABEL_LIFT),
    )


def resolve_edge(
    transition: Transition,
    positions: Mapping[Hashable, Point],
    order: Sequence[Hashable],
    parallel_count: int,
    counters: EdgeCounters,
    radius: float = STATE_RADIUS,
) -> StraightEdge | CurvedEdge:
    """Geometry for one transition between two distinct states.

    ``order`` is the state iteration order used for adjacency. ``counters``
    is advanced for this transition's pair and source state.
    """
    source, target = transition.from_state, transition.to_state
    x1, y1 = positions[source]
    x2, y2 = positions[target]

    pair_index = counters.next_pair_index(source, target)
    outgoing_index = counters.next_outgoing_index(source)

    dx = x2 - x1
    dy = y2 - y1
    dist = math.hypot(dx, dy)
    if dist == 0:
        logger.warning("States %r and %r share a position", source, target)
        ux = uy = 0.0
    else:
        ux, uy = dx / dist, dy / dist

    start = Point(x1 + ux * radius, y1 + uy * radius)
    end = Point(x2 - ux * radius, y2 - uy * radius)

    index_gap = abs(order.index(target) - order.index(source))
    states_between = index_gap - 1

    if index_gap == 1 and x1 < x2 and parallel_count <= 1:
        anchor = Point((start.x + end.x) / 2, (start.y + end.y) / 2 - LABEL_LIFT)
        return StraightEdge(transition=transition, start=start, end=end, label_anchor=anchor)

    if states_between > 0:
        base_offset = radius * 1.5 + states_between * SKIP_STEP + outgoing_index * FAN_OUT_STEP
    else:
        base_offset = radius * 2

    if parallel_count > 1:
        magnitude = base_offset + PARALLEL_STEP * pair_index
        curve_offset = -magnitude if precedes(source, target, order) else magnitude
    elif x1 < x2:
        curve_offset = -base_offset
    else:
        curve_offset = base_offset

    mid_x = (start.x + end.x) / 2
    mid_y = (start.y + end.y) / 2
    if abs(x2 - x1) < 10:
        control_x = mid_x + VERTICAL_NUDGE * (1 if pair_index % 2 == 0 else -1)
    else:
        control_x = mid_x
    control = Point(control_x, mid_y + curve_offset)

    return CurvedEdge(
        transition=transition,
        start=start,
        control=control,
        end=end,
        label_anchor=quadratic_point(start, control, end, 0.5),
        curve_offset=curve_offset,
        pair_index=pair_index,
    )


def state_positions(automaton: Automaton) -> dict[Hashable, Point]:
    """Centers of all placed states. Raises if any state is still unplaced."""
    positions: dict[Hashable, Point] = {}
    for name, state in automaton.states.items():
        if not state.is_placed:
            raise ValueError(f"State {name!r} has no coordinates; run auto_layout first")
        positions[name] = Point(float(state.x), float(state.y))  # type: ignore[arg-type]
    return positions


def resolve_edges(automaton: Automaton, radius: float = STATE_RADIUS) -> list[EdgeGeometry]:
    """Resolve every transition, in order, into renderable geometry."""
    for t in automaton.transitions:
        for name in (t.from_state, t.to_state):
            if name not in automaton.states:
                raise UnknownStateError(name, f"transition {t.from_state!r} -> {t.to_state!r}")

    positions = state_positions(automaton)
    order = automaton.state_order()
    counters = EdgeCounters()
    edges: list[EdgeGeometry] = []

    for t in automaton.transitions:
        if t.is_self_loop:
            edges.append(self_loop_geometry(t, positions[t.from_state], radius))
            continue
        parallel = automaton.count_parallel_transitions(t.from_state, t.to_state)
        edges.append(resolve_edge(t, positions, order, parallel, counters, radius))

    logger.debug("Resolved %d transitions", len(edges))
    return edges
