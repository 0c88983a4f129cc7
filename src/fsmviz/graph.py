"""Graph views and reachability checks over an Automaton."""

from __future__ import annotations

from collections.abc import Hashable

import networkx as nx

from fsmviz.models import Automaton


def to_networkx(automaton: Automaton) -> nx.MultiDiGraph:
    """Convert an Automaton to a NetworkX MultiDiGraph.

    Parallel transitions are kept as separate edges carrying their label.
    """
    g: nx.MultiDiGraph = nx.MultiDiGraph()
    for name, state in automaton.states.items():
        g.add_node(name, x=state.x, y=state.y, final=automaton.is_final(name))
    for t in automaton.transitions:
        g.add_edge(t.from_state, t.to_state, label=t.label)
    return g


def unreachable_states(automaton: Automaton) -> list[Hashable]:
    """States that cannot be reached from the initial state.

    Returns an empty list when no (known) initial state is set.
    """
    initial = automaton.initial_state
    if initial is None or initial not in automaton.states:
        return []
    g = to_networkx(automaton)
    reachable = nx.descendants(g, initial) | {initial}
    return [name for name in automaton.states if name not in reachable]


def dead_end_states(automaton: Automaton) -> list[Hashable]:
    """Non-final states with no outgoing transitions."""
    g = to_networkx(automaton)
    return [
        name
        for name in automaton.states
        if g.out_degree(name) == 0 and not automaton.is_final(name)
    ]


def automaton_to_json(automaton: Automaton) -> dict:
    """Export an Automaton as a JSON-serializable dictionary."""
    return {
        "states": {
            str(name): {"x": state.x, "y": state.y}
            for name, state in automaton.states.items()
        },
        "transitions": [
            {"from": str(t.from_state), "to": str(t.to_state), "label": t.label}
            for t in automaton.transitions
        ],
        "initial": None if automaton.initial_state is None else str(automaton.initial_state),
        "final": [str(name) for name in automaton.final_states],
    }
