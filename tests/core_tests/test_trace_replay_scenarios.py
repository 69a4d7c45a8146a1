# test/core_tests/test_trace_replay_scenarios.py

import pytest
from core import create_initial_configuration, extract_rc, match_step, replay_trace
from model import TraceEvent


class TestTraceReplayScenarios:
    """
    Test suite for walking recorded traces through the RC-step relation.
    """

    def test_01_clean_trace(self, door_machine, sample_trace):
        """A genuine run matches a step for every event."""
        rc_steps = extract_rc(door_machine)
        result = replay_trace(sample_trace, rc_steps, create_initial_configuration(door_machine))

        assert result.deviated is False
        assert len(result.configurations) == len(sample_trace) + 1
        assert [rc.event for rc in result.matched_steps] == ["OPEN", "CLOSE", "LOCK", "UNLOCK"]
        assert result.final.state == "closed"
        assert result.final.context == {"opens": 1, "last": "OPEN"}

    def test_02_wrong_message_deviates(self, door_machine, sample_trace):
        """
        Replacing CLOSE with an unknown event leaves the machine in 'opened',
        so every later event also fails to match.
        """
        trace = list(sample_trace)
        trace[1] = TraceEvent("BOOM", {})
        result = replay_trace(trace, extract_rc(door_machine), create_initial_configuration(door_machine))

        assert result.unmatched_indices == (1, 2, 3)
        assert result.matched_steps[1] is None
        assert result.final.state == "opened"

    def test_03_match_step_accepts_mappings(self, door_machine):
        """Events may be given as plain mappings."""
        gamma0 = create_initial_configuration(door_machine)
        rc, gamma1 = match_step({"event": "LOCK", "message": {}}, extract_rc(door_machine), gamma0)
        assert rc.event == "LOCK"
        assert gamma1.state == {"locked": "engaged"}

    def test_04_match_step_without_match(self, door_machine):
        """No matching step returns None and the same configuration."""
        gamma0 = create_initial_configuration(door_machine)
        rc, gamma = match_step(TraceEvent("CLOSE"), extract_rc(door_machine), gamma0)
        assert rc is None
        assert gamma is gamma0

    def test_05_empty_trace(self, door_machine):
        """An empty trace replays to the starting configuration."""
        gamma0 = create_initial_configuration(door_machine)
        result = replay_trace([], extract_rc(door_machine), gamma0)
        assert result.final is gamma0
        assert result.deviated is False
