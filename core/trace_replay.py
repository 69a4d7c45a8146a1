# core/trace_replay.py
# This file is part of Raten - Robustness-Aware Test Suite Reduction
#
# Driving recorded traces through the RC-step relation

"""Trace replay over extracted RC-steps.

A recorded trace is walked event by event: from the current configuration
the first RC-step with the same event and source state is taken. Events with
no matching step leave the configuration unchanged and are reported by index,
which is how a mutated trace shows up as a deviation.
"""

from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from model.configuration import Configuration
from model.rc_step import RCStep
from model.trace import TraceEvent, as_trace
from utils.logger import get_logger

from .replay import replay


@dataclass(frozen=True, slots=True)
class TraceReplay:
    configurations: Tuple[Configuration, ...]
    matched_steps: Tuple[Optional[RCStep], ...]
    unmatched_indices: Tuple[int, ...]

    @property
    def final(self) -> Configuration:
        return self.configurations[-1]

    @property
    def deviated(self) -> bool:
        return bool(self.unmatched_indices)


def match_step(
    trace_event: Union[TraceEvent, Mapping[str, Any]],
    rc_steps: Sequence[RCStep],
    gamma: Configuration,
) -> Tuple[Optional[RCStep], Configuration]:
    """Take the first step matching the event from γ.state.

    Returns:
        (step, γ') where γ' is the replayed configuration, or (None, γ) when
        no step matches
    """
    event = trace_event.event if isinstance(trace_event, TraceEvent) else trace_event["event"]
    current = gamma.state_key
    for step in rc_steps:
        if step.event == event and step.source_key == current:
            return step, replay(step, gamma)
    return None, gamma


def replay_trace(
    trace: Iterable[Union[TraceEvent, Mapping[str, Any]]],
    rc_steps: Sequence[RCStep],
    gamma: Configuration,
) -> TraceReplay:
    """Walk a whole trace from `gamma`.

    ``configurations`` starts with `gamma` and holds one entry per trace
    event; ``matched_steps`` is aligned with the trace.
    """
    logger = get_logger()
    configurations: List[Configuration] = [gamma]
    matched: List[Optional[RCStep]] = []
    unmatched: List[int] = []

    current = gamma
    for index, trace_event in enumerate(as_trace(trace)):
        step, current = match_step(trace_event, rc_steps, current)
        if step is None:
            logger.debug(f"  trace[{index}] {trace_event.event} has no step from {current.state_key}")
            unmatched.append(index)
        matched.append(step)
        configurations.append(current)

    return TraceReplay(
        configurations=tuple(configurations),
        matched_steps=tuple(matched),
        unmatched_indices=tuple(unmatched),
    )
