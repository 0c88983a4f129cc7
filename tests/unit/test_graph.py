"""Unit tests for fsmviz.graph."""

import networkx as nx

from fsmviz.graph import automaton_to_json, dead_end_states, to_networkx, unreachable_states
from fsmviz.models import Automaton


class TestToNetworkx:
    def test_parallel_edges_kept(self, basic_automaton: Automaton) -> None:
        g = to_networkx(basic_automaton)
        assert isinstance(g, nx.MultiDiGraph)
        assert g.number_of_nodes() == 2
        assert g.number_of_edges() == 4
        labels = sorted(d["label"] for _, _, d in g.edges(data=True))
        assert labels == ["0", "0", "1", "1"]

    def test_node_attributes(self, basic_automaton: Automaton) -> None:
        g = to_networkx(basic_automaton)
        assert g.nodes["q0"]["final"] is True
        assert g.nodes["q1"]["final"] is False


class TestUnreachable:
    def test_all_reachable(self, basic_automaton: Automaton) -> None:
        assert unreachable_states(basic_automaton) == []

    def test_orphan(self, basic_automaton: Automaton) -> None:
        basic_automaton.add_state("orphan")
        basic_automaton.add_transition("orphan", "q0", "x")
        assert unreachable_states(basic_automaton) == ["orphan"]

    def test_without_initial(self) -> None:
        a = Automaton()
        a.add_state("a")
        assert unreachable_states(a) == []


class TestDeadEnds:
    def test_none(self, basic_automaton: Automaton) -> None:
        assert dead_end_states(basic_automaton) == []

    def test_final_states_are_not_dead_ends(self, skip_automaton: Automaton) -> None:
        assert dead_end_states(skip_automaton) == ["B", "C"]


def test_automaton_to_json_stringifies_names() -> None:
    a = Automaton()
    a.add_state(1, 10, 20)
    a.add_transition(1, 1, "x")
    data = automaton_to_json(a)
    assert data["states"] == {"1": {"x": 10, "y": 20}}
    assert data["transitions"] == [{"from": "1", "to": "1", "label": "x"}]
    assert data["initial"] is None
