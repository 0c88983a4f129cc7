"""Unit tests for fsmviz.models."""

import pytest

from fsmviz.models import Automaton, State, Transition, UnknownStateError


class TestState:
    def test_unplaced_by_default(self) -> None:
        s = State("q0")
        assert s.x is None
        assert s.y is None
        assert not s.is_placed

    def test_partial_position_is_not_placed(self) -> None:
        assert not State("q0", x=10.0).is_placed

    def test_placed(self) -> None:
        assert State("q0", 0.0, 0.0).is_placed


class TestTransition:
    def test_self_loop(self) -> None:
        assert Transition("a", "a", "x").is_self_loop
        assert not Transition("a", "b", "x").is_self_loop

    def test_connects_either_direction(self) -> None:
        t = Transition("a", "b", "x")
        assert t.connects("a", "b")
        assert t.connects("b", "a")
        assert not t.connects("a", "c")

    def test_frozen(self) -> None:
        t = Transition("a", "b", "x")
        with pytest.raises(AttributeError):
            t.label = "y"  # type: ignore[misc]


class TestAutomaton:
    def test_empty(self) -> None:
        a = Automaton()
        assert a.states == {}
        assert a.transitions == []
        assert a.initial_state is None
        assert a.final_states == []

    def test_add_state_returns_name(self) -> None:
        a = Automaton()
        assert a.add_state("q0") == "q0"
        assert a.states["q0"] == State("q0")

    def test_add_state_with_position(self) -> None:
        a = Automaton()
        a.add_state("q1", 100, 200)
        assert a.states["q1"] == State("q1", 100, 200)

    def test_readding_keeps_order(self) -> None:
        a = Automaton()
        a.add_state("a")
        a.add_state("b")
        a.add_state("a", 5, 5)
        assert a.state_order() == ["a", "b"]
        assert a.states["a"].x == 5

    def test_add_transition(self) -> None:
        a = Automaton()
        t = a.add_transition("q0", "q1", "a")
        assert a.transitions == [t]
        assert t == Transition("q0", "q1", "a")

    def test_set_initial_overwrites(self) -> None:
        a = Automaton()
        a.set_initial("q0")
        a.set_initial("q1")
        assert a.initial_state == "q1"

    def test_add_final_is_idempotent(self) -> None:
        a = Automaton()
        a.add_final("q0")
        a.add_final("q0")
        a.add_final("q1")
        assert a.final_states == ["q0", "q1"]
        assert a.is_final("q1")
        assert not a.is_final("q2")

    def test_count_parallel_both_directions(self) -> None:
        a = Automaton()
        a.add_transition("q0", "q1", "a")
        a.add_transition("q1", "q0", "b")
        a.add_transition("q1", "q2", "c")
        assert a.count_parallel_transitions("q0", "q1") == 2
        assert a.count_parallel_transitions("q1", "q0") == 2
        assert a.count_parallel_transitions("q0", "q2") == 0

    def test_transition_index(self) -> None:
        a = Automaton()
        a.add_transition("q0", "q1", "a")
        a.add_transition("q0", "q1", "b")
        a.add_transition("q1", "q0", "c")
        assert a.transition_index("q0", "q1", "a") == 0
        assert a.transition_index("q0", "q1", "b") == 1
        assert a.transition_index("q1", "q0", "c") == 2

    def test_transition_index_missing(self) -> None:
        a = Automaton()
        a.add_transition("q0", "q1", "a")
        assert a.transition_index("q0", "q1", "zzz") == 1


class TestUnknownStateError:
    def test_message_and_fields(self) -> None:
        err = UnknownStateError("q9", "final state")
        assert err.state == "q9"
        assert err.context == "final state"
        assert "'q9'" in str(err)
        assert isinstance(err, ValueError)
