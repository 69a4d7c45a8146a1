# test/core_tests/test_replay_scenarios.py

import pytest
from core import (
    create_configuration_from_state,
    create_initial_configuration,
    extract_rc,
    replay,
)
from model import Configuration, RCStep


def steps_by_event(machine):
    """Map event names to the door machine's extracted steps."""
    return {rc.event: rc for rc in extract_rc(machine)}


class TestReplayScenarios:
    """
    Test suite for configuration replay. Replay is pure: it never changes
    its input and only assign actions touch the context.
    """

    def test_01_initial_configuration(self, door_machine):
        """γ₀ holds the initial state and a copy of the declared context."""
        gamma0 = create_initial_configuration(door_machine)
        assert gamma0.state == "closed"
        assert gamma0.context == {"opens": 0}
        assert gamma0.machine is door_machine
        assert gamma0.last_event is None
        gamma0.context["opens"] = 99
        assert door_machine.context == {"opens": 0}

    def test_02_replay_applies_assign_function(self, door_machine):
        """The OPEN assign function receives the context and the synthetic event."""
        gamma0 = create_initial_configuration(door_machine)
        gamma1 = replay(steps_by_event(door_machine)["OPEN"], gamma0)
        assert gamma1.state == "opened"
        assert gamma1.context == {"opens": 1, "last": "OPEN"}
        assert gamma1.last_event == {"type": "OPEN"}
        assert gamma1.machine is door_machine

    def test_03_replay_does_not_touch_input(self, door_machine):
        """The input configuration is unchanged and replay is repeatable."""
        gamma0 = create_initial_configuration(door_machine)
        rc = steps_by_event(door_machine)["OPEN"]
        first = replay(rc, gamma0)
        second = replay(rc, gamma0)
        assert gamma0.context == {"opens": 0}
        assert gamma0.state == "closed"
        assert first == second
        assert first.context is not second.context

    def test_04_patches_merge_in_order(self):
        """Patch assigns are shallow-merged, later patches override earlier ones."""
        rc = RCStep("a", "GO", "b", actions=[{"assign": {"x": 1}}, {"assign": {"x": 2, "y": 3}}])
        gamma = replay(rc, Configuration("a", {"keep": True}))
        assert gamma.context == {"keep": True, "x": 2, "y": 3}

    def test_05_function_assign_replaces_context(self):
        """A function assign's return value becomes the whole context."""
        rc = RCStep("a", "GO", "b", actions=[{"assign": lambda ctx, ev: {"only": ev["type"]}}])
        gamma = replay(rc, Configuration("a", {"dropped": 1}))
        assert gamma.context == {"only": "GO"}

    def test_06_function_sees_previous_patch(self):
        """Assigns apply left to right on the working context."""
        rc = RCStep("a", "GO", "b", actions=[
            {"assign": {"n": 1}},
            {"assign": lambda ctx, ev: {**ctx, "n": ctx["n"] + 10}},
        ])
        assert replay(rc, Configuration("a")).context == {"n": 11}

    def test_07_non_assign_actions_are_ignored(self):
        """Cost, executable and plain actions leave the context alone."""
        calls = []
        rc = RCStep("a", "GO", "b", actions=[{"cost": 3}, {"exec": lambda: calls.append(1)}, "log"])
        gamma = replay(rc, Configuration("a", {"v": 1}))
        assert gamma.context == {"v": 1}
        assert calls == []

    def test_08_source_is_not_checked(self):
        """Replay trusts the caller to pick a step matching γ.state."""
        rc = RCStep("a", "GO", "b")
        assert replay(rc, Configuration("elsewhere")).state == "b"

    @pytest.mark.parametrize("action, expected", [
        ({"assign": {"x": 1}, "cost": 3}, {"x": 1}),
        ({"type": "setCost:5", "assign": lambda ctx, ev: {**ctx, "n": 1}}, {"n": 1}),
        ({"type": "charge.setCost(2)", "assign": {"charged": True}}, {"charged": True}),
        ({"assign": {"y": 2}, "exec": lambda: 4}, {"y": 2}),
    ])
    def test_09_assign_applies_next_to_a_cost(self, action, expected):
        """
        An action declaring both a cost and an assign still updates the
        context; the cost does not hide the assign.
        """
        rc = RCStep("a", "GO", "b", actions=[action])
        assert replay(rc, Configuration("a", {})).context == expected


class TestConfigurationFromStateScenarios:
    """
    Test suite for snapshotting arbitrary states.
    """

    def test_01_explicit_context_wins(self, door_machine):
        """A given context is used as-is (copied)."""
        ctx = {"opens": 5}
        gamma = create_configuration_from_state(door_machine, "opened", ctx)
        assert gamma.context == {"opens": 5}
        assert gamma.context is not ctx

    def test_02_machine_context_fallback(self, door_machine):
        """Without a context the machine's declared context is used."""
        gamma = create_configuration_from_state(door_machine, {"locked": "jammed"})
        assert gamma.state == {"locked": "jammed"}
        assert gamma.context == {"opens": 0}

    def test_03_empty_context_fallback(self, door_machine):
        """A machine without a context yields an empty one."""
        door_machine.context = {}
        assert create_configuration_from_state(door_machine, "closed").context == {}

    def test_04_empty_explicit_context_is_kept(self, door_machine):
        """An explicitly empty context is not replaced by the machine's."""
        assert create_configuration_from_state(door_machine, "closed", {}).context == {}
