# test/core_tests/test_reachability_scenarios.py

import pytest
from core import (
    build_graph,
    create_initial_configuration,
    extract_rc,
    find_path_to_state,
    min_cost_path,
    path_cost,
    paths_at_depth,
)

JAMMED = {"locked": "jammed"}


@pytest.fixture
def door_graph(door_machine):
    """Transition graph of the door machine, costs annotated."""
    return build_graph(extract_rc(door_machine, with_costs=True))


def events(path):
    return [rc.event for rc in path]


class TestReachabilityScenarios:
    """
    Test suite for path queries over the door machine's transition graph.
    """

    def test_01_shortest_path(self, door_graph):
        """The shortest route to the jammed lock goes through LOCK then JAM."""
        assert events(find_path_to_state(door_graph, "closed", JAMMED)) == ["LOCK", "JAM"]

    def test_02_path_to_self_is_empty(self, door_graph):
        """A source that already is the target yields the empty path."""
        assert find_path_to_state(door_graph, "opened", "opened") == []

    def test_03_unreachable_state(self, door_graph):
        """Unknown targets are unreachable."""
        assert find_path_to_state(door_graph, "closed", "ajar") is None

    def test_04_structured_target_matches_by_structure(self, door_graph):
        """A nested target given as a fresh mapping is still found."""
        path = find_path_to_state(door_graph, {"locked": "jammed"}, "closed")
        assert events(path) == ["FIX", "UNLOCK"]

    def test_05_paths_at_exact_depth(self, door_graph):
        """One path per reached target at exactly the requested depth."""
        paths = paths_at_depth(door_graph, "closed", ["closed", JAMMED], 2)
        assert sorted(events(p) for p in paths) == [["LOCK", "JAM"], ["OPEN", "CLOSE"]]

    def test_06_depth_zero(self, door_graph):
        """Depth 0 only reports the source itself."""
        assert paths_at_depth(door_graph, "closed", ["closed"], 0) == [[]]
        assert paths_at_depth(door_graph, "closed", ["opened"], 0) == []

    def test_07_path_cost(self, door_machine, door_graph):
        """Costs along a path are summed."""
        gamma0 = create_initial_configuration(door_machine)
        open_close = find_path_to_state(door_graph, "closed", "opened") + door_graph["opened"]
        assert path_cost(open_close, gamma0) == 3
        assert path_cost([], gamma0) == 0

    def test_08_min_cost_path(self, door_machine, door_graph):
        """The cheaper of the candidate paths is returned even if it is longer."""
        gamma0 = create_initial_configuration(door_machine)
        best = min_cost_path(door_graph, "closed", ["opened", JAMMED], gamma0)
        assert events(best) == ["LOCK", "JAM"]

    def test_09_min_cost_path_without_reachable_target(self, door_machine, door_graph):
        """None when no target can be reached."""
        gamma0 = create_initial_configuration(door_machine)
        assert min_cost_path(door_graph, "closed", ["ajar"], gamma0) is None
