# utils/trace_generator.py
import random
from typing import List, Optional, Sequence

from model.state_value import StateValue, state_key
from model.trace import Trace, TraceEvent

# Time interval between consecutive events in a generated trace
EVENT_TIME_INTERVAL = 100

# Range of the random data value attached to each message
DATA_VALUE_RANGE = 100


def _message(index: int, start_time: int, rng: random.Random) -> dict:
    return {
        "timestamp": start_time + index * EVENT_TIME_INTERVAL,
        "index": index,
        "data": {"value": rng.random() * DATA_VALUE_RANGE},
    }


def generate_random_trace(
        events: Sequence[str],
        length: int,
        variance: float = 0,
        rng: Optional[random.Random] = None,
        start_time: int = 0,
) -> Trace:
    """
    Generates a trace of events drawn uniformly from an alphabet.

    The actual length is length + uniform(-variance, variance), rounded and
    clamped to at least one event. Messages carry a timestamp, the index and
    a random data value.

    Args:
        events: Event identifiers to draw from.
        length: Average trace length.
        variance: Maximum deviation from the average length.
        rng: Random source; a fresh unseeded one when omitted.
        start_time: Timestamp of the first event.
    """
    if not events:
        raise ValueError("events cannot be empty.")
    rng = rng if rng is not None else random.Random()

    actual_length = max(1, round(length + (rng.random() - 0.5) * variance * 2))
    return tuple(
        TraceEvent(rng.choice(events), _message(i, start_time, rng))
        for i in range(actual_length)
    )


def generate_walk_trace(
        graph,
        start: StateValue,
        length: int,
        rng: Optional[random.Random] = None,
        start_time: int = 0,
) -> Trace:
    """
    Generates a trace by a random walk over a transition graph.

    Every event is taken from an outgoing RC-step of the current state, so the
    trace replays without deviation. The walk stops early at a state with no
    outgoing steps.

    Args:
        graph: Mapping of source-state key to outgoing RC-steps.
        start: State the walk starts from.
        length: Maximum number of events.
        rng: Random source; a fresh unseeded one when omitted.
        start_time: Timestamp of the first event.
    """
    rng = rng if rng is not None else random.Random()
    events: List[TraceEvent] = []
    current = state_key(start)

    for i in range(length):
        outgoing = graph.get(current)
        if not outgoing:
            break
        step = rng.choice(outgoing)
        events.append(TraceEvent(step.event, _message(i, start_time, rng)))
        current = step.target_key

    return tuple(events)
