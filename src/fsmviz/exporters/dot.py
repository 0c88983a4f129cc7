"""Graphviz DOT export for state diagrams."""

from __future__ import annotations

from fsmviz.models import Automaton


def export_dot(automaton: Automaton) -> str:
    """Export an Automaton as a Graphviz DOT string."""
    lines = ["digraph finite_state_machine {", "    rankdir=LR;", "    node [shape = circle];", ""]

    # Invisible point node feeding the initial state
    if automaton.initial_state is not None:
        lines.append("    __start__ [shape=point];")
        lines.append(f'    __start__ -> "{_escape(automaton.initial_state)}";')
        lines.append("")

    if automaton.final_states:
        final_ids = " ".join(f'"{_escape(s)}"' for s in automaton.final_states)
        lines.append(f"    node [shape = doublecircle]; {final_ids};")
        lines.append("    node [shape = circle];")
        lines.append("")

    for t in automaton.transitions:
        from_s = _escape(t.from_state)
        to_s = _escape(t.to_state)
        label = _escape(t.label)
        lines.append(f'    "{from_s}" -> "{to_s}" [label="{label}"];')

    lines.append("}")
    return "\n".join(lines)


def _escape(value: object) -> str:
    """Escape a value for use inside a quoted DOT identifier."""
    return str(value).replace('"', '\\"').replace("\n", "\\n")
