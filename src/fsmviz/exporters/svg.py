"""SVG export for state diagrams."""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from pathlib import Path

from fsmviz.geometry import (
    STATE_INNER_RADIUS,
    STATE_RADIUS,
    CurvedEdge,
    EdgeGeometry,
    SelfLoop,
    StraightEdge,
    fmt,
    resolve_edges,
)
from fsmviz.layout import DEFAULT_HEIGHT, DEFAULT_WIDTH, auto_layout
from fsmviz.metrics import state_font_size, text_width
from fsmviz.models import Automaton, UnknownStateError

logger = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"
ET.register_namespace("", SVG_NS)

# Characters outside the XML 1.0 Char production.
INVALID_XML_CHARS = re.compile(r"[^\t\n\r\x20-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]")

STYLE = """
      .state-circle { fill: white; stroke: #333; stroke-width: 2; }
      .final-state { stroke-width: 4; }
      .state-text { font-family: Arial, sans-serif; text-anchor: middle; }
      .transition-line { stroke: #333; stroke-width: 1.5; fill: none; marker-end: url(#arrowhead); }
      .transition-label { font-family: Arial, sans-serif; font-size: 14px; fill: #666; }
      .initial-arrow { stroke: #333; stroke-width: 2; fill: none; marker-end: url(#arrowhead); }
      .label-bg { fill: white; opacity: 0.9; }
"""


def _q(tag: str) -> str:
    return f"{{{SVG_NS}}}{tag}"


def _sub(parent: ET.Element, tag: str, **attrs: object) -> ET.Element:
    values = {
        key.replace("_", "-"): fmt(value) if isinstance(value, (int, float)) else str(value)
        for key, value in attrs.items()
    }
    return ET.SubElement(parent, _q(tag), values)


def build_svg(
    automaton: Automaton, width: float = DEFAULT_WIDTH, height: float = DEFAULT_HEIGHT
) -> ET.Element:
    """Lay out ``automaton`` and return the diagram as an SVG element tree.

    References and text are checked before layout, so a rejected model is
    left without new coordinates.
    """
    _check_model(automaton)

    auto_layout(automaton, width, height)
    edges = resolve_edges(automaton)

    svg = ET.Element(
        _q("svg"),
        {
            "width": fmt(width),
            "height": fmt(height),
            "viewBox": f"0 0 {fmt(width)} {fmt(height)}",
        },
    )
    _add_defs(svg)
    style = _sub(svg, "style")
    style.text = STYLE

    for edge in edges:
        _add_edge(svg, edge)
    _add_initial_arrow(svg, automaton)
    _add_states(svg, automaton)

    logger.debug(
        "Rendered %d states and %d transitions", len(automaton.states), len(edges)
    )
    return svg


def export_svg(
    automaton: Automaton, width: float = DEFAULT_WIDTH, height: float = DEFAULT_HEIGHT
) -> str:
    """Export an Automaton as an SVG document string."""
    svg = build_svg(automaton, width, height)
    ET.indent(svg, space="  ")
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + ET.tostring(svg, encoding="unicode") + "\n"


def save_svg(
    automaton: Automaton,
    path: Path,
    width: float = DEFAULT_WIDTH,
    height: float = DEFAULT_HEIGHT,
) -> Path:
    path = Path(path)
    path.write_text(export_svg(automaton, width, height), encoding="utf-8")
    logger.info("Wrote %s", path)
    return path


def _check_model(automaton: Automaton) -> None:
    for t in automaton.transitions:
        for name in (t.from_state, t.to_state):
            if name not in automaton.states:
                raise UnknownStateError(name, f"transition {t.from_state!r} -> {t.to_state!r}")
    for name in automaton.final_states:
        if name not in automaton.states:
            raise UnknownStateError(name, "final state")

    for name in automaton.states:
        if INVALID_XML_CHARS.search(str(name)):
            raise ValueError(f"State name {name!r} contains characters not allowed in XML")
    for t in automaton.transitions:
        if INVALID_XML_CHARS.search(str(t.label)):
            raise ValueError(
                f"Label {t.label!r} of transition {t.from_state!r} -> {t.to_state!r} "
                "contains characters not allowed in XML"
            )


def _add_defs(svg: ET.Element) -> None:
    defs = _sub(svg, "defs")
    marker = _sub(
        defs,
        "marker",
        id="arrowhead",
        markerWidth=10,
        markerHeight=10,
        refX=9,
        refY=3,
        orient="auto",
    )
    _sub(marker, "polygon", points="0 0, 10 3, 0 6", fill="#333")


def _add_edge(svg: ET.Element, edge: EdgeGeometry) -> None:
    label = edge.transition.label
    anchor = edge.label_anchor

    if isinstance(edge, StraightEdge):
        _sub(
            svg,
            "line",
            **{"class": "transition-line"},
            x1=edge.start.x,
            y1=edge.start.y,
            x2=edge.end.x,
            y2=edge.end.y,
        )
    elif isinstance(edge, (SelfLoop, CurvedEdge)):
        _sub(svg, "path", **{"class": "transition-line"}, d=edge.path_data())

    if isinstance(edge, SelfLoop):
        # Box sits over the top of the loop; anchor already carries the lift.
        _add_label(svg, anchor.x, anchor.y - 15, anchor.y, label)
    else:
        _add_label(svg, anchor.x, anchor.y - 10, anchor.y + 5, label)


def _add_label(svg: ET.Element, x: float, box_y: float, text_y: float, text: str) -> None:
    box_width = text_width(text)
    _sub(
        svg,
        "rect",
        **{"class": "label-bg"},
        x=x - box_width / 2,
        y=box_y,
        width=box_width,
        height=20,
        rx=3,
    )
    node = _sub(svg, "text", **{"class": "transition-label"}, x=x, y=text_y, text_anchor="middle")
    node.text = text


def _add_initial_arrow(svg: ET.Element, automaton: Automaton) -> None:
    initial = automaton.initial_state
    if initial is None or initial not in automaton.states:
        return
    state = automaton.states[initial]
    x, y = state.x, state.y
    _sub(svg, "line", **{"class": "initial-arrow"}, x1=x - 60, y1=y, x2=x - 30, y2=y)
    caption = _sub(svg, "text", **{"class": "transition-label"}, x=x - 70, y=y - 10, text_anchor="end")
    caption.text = "start"


def _add_states(svg: ET.Element, automaton: Automaton) -> None:
    for name, state in automaton.states.items():
        final = automaton.is_final(name)
        css = "state-circle final-state" if final else "state-circle"
        _sub(svg, "circle", **{"class": css}, cx=state.x, cy=state.y, r=STATE_RADIUS)
        if final:
            _sub(svg, "circle", **{"class": "state-circle"}, cx=state.x, cy=state.y, r=STATE_INNER_RADIUS)

        label = str(name)
        font_size = state_font_size(label)
        node = _sub(
            svg,
            "text",
            **{"class": "state-text"},
            x=state.x,
            y=state.y + font_size * 0.35,
            font_size=font_size,
        )
        node.text = label
