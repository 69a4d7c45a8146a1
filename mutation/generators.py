# mutation/generators.py
# This file is part of Raten - Robustness-Aware Test Suite Reduction
#
# Common Robustness Failure (CRF) mutant generation

"""CRF mutant generators.

Each generator copies the input trace, picks injection positions and corrupts
the elements at those positions:

- WM replaces the event identifier with one drawn from the wrong-message pool
  and annotates the retained payload with provenance.
- WP keeps the event identifier and replaces the payload with one drawn from
  the malformed-payload pool.
- MM substitutes a ``TIMEOUT`` marker for the element. The trace length is
  preserved; the element is replaced, not removed.

Positions are the caller's explicit ones (bounds-checked, de-duplicated,
ascending) or an independent Bernoulli trial per index at the configured
rate. A non-empty trace whose trial selects nothing gets one uniformly random
position instead.

All randomness comes from the ``rng`` argument; when omitted a fresh unseeded
``random.Random`` is used, so passing a seeded generator makes runs
reproducible.
"""

import copy
import random
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from model.trace import Trace, TraceEvent, as_trace
from utils.logger import get_logger

from .config import MUTATION_DEFAULTS, MutantConfig, make_config
from .kinds import CRFKind, parse_crf_kind
from .mutant import Mutant, MutantMetrics

TraceLike = Iterable[Union[TraceEvent, Mapping[str, Any]]]


def _clone(event: TraceEvent) -> TraceEvent:
    return TraceEvent(event.event, copy.deepcopy(event.message))


def select_positions(length: int, config: MutantConfig, rng: random.Random) -> List[int]:
    """Pick the indices to corrupt in a trace of `length` elements."""
    if config.injection_positions:
        return sorted({
            pos for pos in config.injection_positions
            if isinstance(pos, int) and not isinstance(pos, bool) and 0 <= pos < length
        })

    positions = [i for i in range(length) if rng.random() < config.injection_rate]
    if not positions and length > 0:
        positions.append(rng.randrange(length))
    return positions


def _mutate(
    trace: TraceLike,
    kind: CRFKind,
    config: MutantConfig,
    rng: Optional[random.Random],
    corrupt: Callable[[TraceEvent, random.Random], TraceEvent],
) -> Mutant:
    rng = rng if rng is not None else random.Random()
    original = as_trace(trace)
    positions = select_positions(len(original), config, rng)

    mutated = [_clone(ev) for ev in original]
    for pos in positions:
        mutated[pos] = corrupt(original[pos], rng)

    get_logger().mutant_generated(kind.value, positions, len(original))
    return Mutant(
        original_trace=tuple(_clone(ev) for ev in original),
        mutated_trace=tuple(mutated),
        injection_points=tuple(positions),
        crf_type=kind,
        expected_bad_state=len(positions) > 0,
        position_kinds={pos: (kind,) for pos in positions},
    )


def generate_wm_mutant(
    trace: TraceLike, config: Optional[MutantConfig] = None, rng: Optional[random.Random] = None
) -> Mutant:
    """Wrong Message: replace event identifiers with unexpected ones."""
    config = make_config(config)

    def corrupt(event: TraceEvent, gen: random.Random) -> TraceEvent:
        message = copy.deepcopy(event.message)
        message.update({
            "__mutated": True,
            "__original_event": event.event,
            "__mutation_type": CRFKind.WM.value,
        })
        return TraceEvent(gen.choice(config.wrong_messages), message)

    return _mutate(trace, CRFKind.WM, config, rng, corrupt)


def generate_wp_mutant(
    trace: TraceLike, config: Optional[MutantConfig] = None, rng: Optional[random.Random] = None
) -> Mutant:
    """Wrong Payload: keep event identifiers, replace payloads with malformed ones."""
    config = make_config(config)

    def corrupt(event: TraceEvent, gen: random.Random) -> TraceEvent:
        message = copy.deepcopy(dict(gen.choice(config.wrong_payloads)))
        message.update({
            "__mutated": True,
            "__original_payload": copy.deepcopy(event.message),
            "__mutation_type": CRFKind.WP.value,
        })
        return TraceEvent(event.event, message)

    return _mutate(trace, CRFKind.WP, config, rng, corrupt)


def generate_mm_mutant(
    trace: TraceLike, config: Optional[MutantConfig] = None, rng: Optional[random.Random] = None
) -> Mutant:
    """Missing Message: substitute a timeout marker for the expected element."""
    config = make_config(config)

    def corrupt(event: TraceEvent, gen: random.Random) -> TraceEvent:
        return TraceEvent(MUTATION_DEFAULTS.TIMEOUT_EVENT, {
            "__mutated": True,
            "__original_event": event.event,
            "__original_payload": copy.deepcopy(event.message),
            "__mutation_type": CRFKind.MM.value,
            "__timeout": config.missing_message_timeout,
        })

    return _mutate(trace, CRFKind.MM, config, rng, corrupt)


_GENERATORS = {
    CRFKind.WM: generate_wm_mutant,
    CRFKind.WP: generate_wp_mutant,
    CRFKind.MM: generate_mm_mutant,
}


def generate_mutant(
    trace: TraceLike,
    kind: Union[CRFKind, str],
    config: Optional[MutantConfig] = None,
    rng: Optional[random.Random] = None,
) -> Mutant:
    """Generate a mutant of the given CRF kind.

    Raises:
        UnknownCRFTypeError: `kind` is not one of WM, WP, MM
    """
    return _GENERATORS[parse_crf_kind(kind)](trace, config, rng)


def generate_compound_mutant(
    trace: TraceLike,
    kinds: Sequence[Union[CRFKind, str]],
    config: Optional[MutantConfig] = None,
    rng: Optional[random.Random] = None,
) -> Mutant:
    """Apply several CRF kinds in order, each on the previous round's output.

    Each round runs at ``injection_rate / len(kinds)``. The result's
    ``crf_type`` is always WM; ``position_kinds`` records which kinds hit
    each index.
    """
    config = make_config(config)
    resolved = [parse_crf_kind(k) for k in kinds]
    rng = rng if rng is not None else random.Random()

    original = as_trace(trace)
    current: Trace = original
    points: set = set()
    position_kinds: Dict[int, Tuple[CRFKind, ...]] = {}

    for kind in resolved:
        round_config = make_config(config, injection_rate=config.injection_rate / len(resolved))
        result = generate_mutant(current, kind, round_config, rng)
        current = result.mutated_trace
        points.update(result.injection_points)
        for pos in result.injection_points:
            position_kinds[pos] = position_kinds.get(pos, ()) + (kind,)

    return Mutant(
        original_trace=tuple(_clone(ev) for ev in original),
        mutated_trace=tuple(_clone(ev) for ev in current),
        injection_points=tuple(sorted(points)),
        crf_type=CRFKind.WM,
        expected_bad_state=len(points) > 0,
        position_kinds=dict(sorted(position_kinds.items())),
    )


def batch_generate_mutants(
    trace: TraceLike,
    count: int,
    kind: Union[CRFKind, str],
    config: Optional[MutantConfig] = None,
    rng: Optional[random.Random] = None,
) -> List[Mutant]:
    """Generate `count` independent mutants of the same base trace."""
    kind = parse_crf_kind(kind)
    base = as_trace(trace)
    rng = rng if rng is not None else random.Random()
    return [generate_mutant(base, kind, config, rng) for _ in range(count)]


def calculate_mutant_metrics(mutants: Sequence[Mutant]) -> MutantMetrics:
    """Aggregate counts over a batch of mutants.

    An empty batch yields zero counts and an average of 0.0.
    """
    distribution = {kind.value: 0 for kind in CRFKind}
    total_points = 0
    violations = 0

    for mutant in mutants:
        distribution[CRFKind(mutant.crf_type).value] += 1
        total_points += len(mutant.injection_points)
        if mutant.expected_bad_state:
            violations += 1

    metrics = MutantMetrics(
        total_mutants=len(mutants),
        expected_violations=violations,
        average_injection_points=total_points / len(mutants) if mutants else 0.0,
        crf_distribution=distribution,
    )
    get_logger().metrics_summary(metrics.to_dict())
    return metrics
