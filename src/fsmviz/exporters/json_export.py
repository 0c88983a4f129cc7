"""JSON export for state diagrams."""

from __future__ import annotations

import json

from fsmviz.graph import automaton_to_json
from fsmviz.models import Automaton


def export_json(automaton: Automaton, indent: int = 2) -> str:
    """Export an Automaton as a JSON string."""
    return json.dumps(automaton_to_json(automaton), indent=indent, ensure_ascii=False)
