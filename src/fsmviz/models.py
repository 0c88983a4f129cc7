"""Core data models for fsmviz."""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass, field


class UnknownStateError(ValueError):
    """A transition or final-state designation names a state that was never added."""

    def __init__(self, state: Hashable, context: str) -> None:
        self.state = state
        self.context = context
        super().__init__(f"Unknown state {state!r} referenced by {context}")


@dataclass
class State:
    """A state in the diagram. Coordinates stay ``None`` until placed."""

    name: Hashable
    x: float | None = None
    y: float | None = None

    @property
    def is_placed(self) -> bool:
        return self.x is not None and self.y is not None


@dataclass(frozen=True)
class Transition:
    """A directed, labeled edge between two states."""

    from_state: Hashable
    to_state: Hashable
    label: str

    @property
    def is_self_loop(self) -> bool:
        return self.from_state == self.to_state

    def connects(self, a: Hashable, b: Hashable) -> bool:
        """True when this transition joins ``a`` and ``b`` in either direction."""
        return (self.from_state == a and self.to_state == b) or (
            self.from_state == b and self.to_state == a
        )


@dataclass
class Automaton:
    """The complete state machine to be drawn."""

    states: dict[Hashable, State] = field(default_factory=dict)
    transitions: list[Transition] = field(default_factory=list)
    initial_state: Hashable | None = None
    final_states: list[Hashable] = field(default_factory=list)

    def add_state(
        self, name: Hashable, x: float | None = None, y: float | None = None
    ) -> Hashable:
        self.states[name] = State(name=name, x=x, y=y)
        return name

    def add_transition(self, from_state: Hashable, to_state: Hashable, label: str) -> Transition:
        transition = Transition(from_state=from_state, to_state=to_state, label=label)
        self.transitions.append(transition)
        return transition

    def set_initial(self, name: Hashable) -> None:
        self.initial_state = name

    def add_final(self, name: Hashable) -> None:
        if name not in self.final_states:
            self.final_states.append(name)

    def is_final(self, name: Hashable) -> bool:
        return name in self.final_states

    def state_order(self) -> list[Hashable]:
        """Return state identifiers in insertion order."""
        return list(self.states)

    def count_parallel_transitions(self, a: Hashable, b: Hashable) -> int:
        """Count transitions between ``a`` and ``b`` in either direction."""
        return sum(1 for t in self.transitions if t.connects(a, b))

    def transition_index(self, from_state: Hashable, to_state: Hashable, label: str) -> int:
        """Position of a transition within its undirected pair group.

        Returns the group size when no transition matches.
        """
        index = 0
        for t in self.transitions:
            if not t.connects(from_state, to_state):
                continue
            if t.from_state == from_state and t.to_state == to_state and t.label == label:
                return index
            index += 1
        return index
