# tests/conftest.py
# This file is part of Raten - Robustness-Aware Test Suite Reduction
#
# Test configuration and shared fixtures for pytest

"""Test configuration and shared fixtures for Raten tests.

This module provides pytest configuration, fixtures, and utilities for testing
RC-step extraction, configuration replay, cost resolution and CRF mutant
generation. It ensures proper module path setup and provides a small
hierarchical door machine plus recorded traces shared across test modules.
"""

import sys
import random
import pytest
from pathlib import Path

# Ensure project modules can be imported
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Verify the project packages are importable before running tests.

    Yields:
        None: Control to test execution

    Raises:
        pytest.skip: If required modules cannot be imported
    """
    try:
        import core
        import model
        import mutation
        import parser
        import utils
    except ImportError as e:
        pytest.skip(f"Cannot import required modules: {e}")

    yield


def count_open(context, event):
    """Assign function used by the door machine's OPEN transition."""
    return {**context, "opens": context.get("opens", 0) + 1, "last": event["type"]}


@pytest.fixture
def door_definition():
    """Provide a hierarchical door machine definition.

    closed --OPEN--> opened --CLOSE--> closed, closed --LOCK--> locked
    (compound, initial 'engaged'), locked.engaged <--JAM/FIX--> locked.jammed,
    locked --UNLOCK--> closed. KNOCK on 'closed' is targetless.

    Returns:
        dict: Definition accepted by TableMachine
    """
    return {
        "id": "door",
        "initial": "closed",
        "context": {"opens": 0},
        "states": {
            "closed": {
                "on": {
                    "OPEN": {
                        "target": "opened",
                        "actions": [{"type": "countOpen", "assign": count_open}, "setCost(2)"],
                    },
                    "LOCK": "locked",
                    "KNOCK": None,
                }
            },
            "opened": {"on": {"CLOSE": {"target": "closed", "actions": [{"cost": 1}]}}},
            "locked": {
                "initial": "engaged",
                "on": {"UNLOCK": {"target": "closed", "actions": [{"type": "setCost:5"}]}},
                "states": {
                    "engaged": {"on": {"JAM": "jammed"}},
                    "jammed": {"on": {"FIX": "engaged"}},
                },
            },
        },
    }


@pytest.fixture
def door_machine(door_definition):
    """Provide the door machine as a TableMachine host."""
    from model import TableMachine

    return TableMachine(door_definition)


@pytest.fixture
def sample_trace():
    """Provide a recorded run of the door machine.

    Returns:
        tuple: TraceEvents OPEN, CLOSE, LOCK, UNLOCK
    """
    from model import TraceEvent

    return (
        TraceEvent("OPEN", {"user": "alice"}),
        TraceEvent("CLOSE", {"user": "alice"}),
        TraceEvent("LOCK", {"code": 1234}),
        TraceEvent("UNLOCK", {"code": 1234}),
    )


@pytest.fixture
def seeded_rng():
    """Provide a deterministic random source."""
    return random.Random(1337)
