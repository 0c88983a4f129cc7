"""Load automaton definitions from YAML (or JSON) files."""

from __future__ import annotations

import logging
from collections.abc import Hashable
from pathlib import Path
from typing import Any

import yaml

from fsmviz.models import Automaton

logger = logging.getLogger(__name__)

_SCALARS = (str, int, float, bool)


class DefinitionError(ValueError):
    """Raised when an automaton definition is malformed."""


def load_definition(path: Path) -> Automaton:
    """Read and parse an automaton definition file."""
    path = Path(path)
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise DefinitionError(f"Invalid YAML in {path}: {exc}") from exc
    except OSError as exc:
        raise DefinitionError(f"Cannot read {path}: {exc}") from exc

    automaton = parse_definition(raw, source=str(path))
    logger.debug(
        "Loaded %s: %d states, %d transitions",
        path,
        len(automaton.states),
        len(automaton.transitions),
    )
    return automaton


def parse_definition(raw: Any, source: str = "<definition>") -> Automaton:
    """Build an Automaton from already-decoded YAML/JSON data.

    States referenced by transitions, ``initial`` or ``final`` without being
    declared are added in order of first reference.
    """
    if not isinstance(raw, dict):
        raise DefinitionError(f"Invalid definition in {source}: expected mapping")

    unknown = set(raw) - {"states", "transitions", "initial", "final"}
    if unknown:
        raise DefinitionError(f"Unknown keys in {source}: {', '.join(sorted(map(str, unknown)))}")

    automaton = Automaton()
    _add_declared_states(automaton, raw.get("states"), source)

    initial = raw.get("initial")
    if initial is not None:
        _ensure_state(automaton, _state_name(initial, "initial", source))
        automaton.set_initial(initial)

    for index, entry in enumerate(raw.get("transitions") or []):
        from_state, to_state, label = _parse_transition(entry, index, source)
        _ensure_state(automaton, from_state)
        _ensure_state(automaton, to_state)
        automaton.add_transition(from_state, to_state, label)

    finals = raw.get("final") or []
    if not isinstance(finals, list):
        finals = [finals]
    for name in finals:
        _ensure_state(automaton, _state_name(name, "final", source))
        automaton.add_final(name)

    return automaton


def _add_declared_states(automaton: Automaton, states: Any, source: str) -> None:
    if states is None:
        return
    if isinstance(states, list):
        for name in states:
            automaton.add_state(_state_name(name, "states", source))
        return
    if isinstance(states, dict):
        for name, position in states.items():
            name = _state_name(name, "states", source)
            if position is None:
                automaton.add_state(name)
                continue
            if not isinstance(position, dict):
                raise DefinitionError(f"states.{name} must be a mapping with x and y in {source}")
            automaton.add_state(
                name,
                _coordinate(position.get("x"), f"states.{name}.x", source),
                _coordinate(position.get("y"), f"states.{name}.y", source),
            )
        return
    raise DefinitionError(f"states must be a list or mapping in {source}")


def _parse_transition(entry: Any, index: int, source: str) -> tuple[Hashable, Hashable, str]:
    where = f"transitions[{index}]"
    if isinstance(entry, list):
        if len(entry) != 3:
            raise DefinitionError(f"{where} must be [from, to, label] in {source}")
        from_state, to_state, label = entry
    elif isinstance(entry, dict):
        missing = [k for k in ("from", "to") if k not in entry]
        if missing:
            raise DefinitionError(f"{where} is missing {', '.join(missing)} in {source}")
        from_state, to_state, label = entry["from"], entry["to"], entry.get("label", "")
    else:
        raise DefinitionError(f"{where} must be a list or mapping in {source}")

    return (
        _state_name(from_state, where, source),
        _state_name(to_state, where, source),
        "" if label is None else str(label),
    )


def _state_name(value: Any, where: str, source: str) -> Hashable:
    if not isinstance(value, _SCALARS):
        raise DefinitionError(f"{where}: state names must be scalars, got {value!r} in {source}")
    return value


def _coordinate(value: Any, where: str, source: str) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DefinitionError(f"{where} must be a number in {source}")
    return float(value)


def _ensure_state(automaton: Automaton, name: Hashable) -> None:
    if name not in automaton.states:
        automaton.add_state(name)
