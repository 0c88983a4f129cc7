"""PlantUML state diagram export."""

from __future__ import annotations

from fsmviz.exporters.mermaid import sanitize_state_name
from fsmviz.models import Automaton


def export_plantuml(automaton: Automaton) -> str:
    """Export an Automaton as a PlantUML ``@startuml`` document."""
    lines = ["@startuml", "hide empty description", ""]

    if automaton.initial_state is not None:
        lines.append(f"[*] --> {sanitize_state_name(automaton.initial_state)}")

    for t in automaton.transitions:
        lines.append(
            f"{sanitize_state_name(t.from_state)} --> {sanitize_state_name(t.to_state)} : {t.label}"
        )

    for name in automaton.final_states:
        lines.append(f"{sanitize_state_name(name)} --> [*]")

    lines.append("")
    lines.append("@enduml")
    return "\n".join(lines)
