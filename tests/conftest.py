"""Shared test fixtures for fsmviz."""

from pathlib import Path

import pytest

from fsmviz.models import Automaton


@pytest.fixture
def basic_automaton() -> Automaton:
    """Two states, each with a self-loop, joined in both directions."""
    a = Automaton()
    a.add_state("q0")
    a.add_state("q1")
    a.set_initial("q0")
    a.add_final("q0")
    a.add_transition("q0", "q0", "0")
    a.add_transition("q0", "q1", "1")
    a.add_transition("q1", "q1", "0")
    a.add_transition("q1", "q0", "1")
    return a


@pytest.fixture
def skip_automaton() -> Automaton:
    """Four-state chain where A also jumps to C and D."""
    a = Automaton()
    for name in ("A", "B", "C", "D"):
        a.add_state(name)
    a.set_initial("A")
    a.add_final("D")
    a.add_transition("A", "B", "1 step")
    a.add_transition("A", "C", "skip 1 state")
    a.add_transition("A", "D", "skip 2 states")
    return a


@pytest.fixture
def basic_definition_content() -> str:
    """Return the basic automaton as a YAML definition."""
    return """\
states: [q0, q1]
initial: q0
final: [q0]
transitions:
  - [q0, q0, "0"]
  - [q0, q1, "1"]
  - [q1, q1, "0"]
  - [q1, q0, "1"]
"""


@pytest.fixture
def basic_definition_file(tmp_path: Path, basic_definition_content: str) -> Path:
    """Write the basic definition to a file and return the path."""
    path = tmp_path / "basic.yaml"
    path.write_text(basic_definition_content)
    return path
