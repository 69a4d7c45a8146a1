# test/mutation_tests/test_compound_and_metrics_scenarios.py

import random
import pytest
import mutation.generators as generators
from model import TraceEvent
from mutation import (
    CRFKind,
    Mutant,
    MutantConfig,
    UnknownCRFTypeError,
    batch_generate_mutants,
    calculate_mutant_metrics,
    generate_compound_mutant,
)


def M(kind, points=(0,), length=3):
    """Factory for a mutant with placeholder traces."""
    trace = tuple(TraceEvent(f"E{i}") for i in range(length))
    return Mutant(
        original_trace=trace,
        mutated_trace=trace,
        injection_points=tuple(points),
        crf_type=kind,
        expected_bad_state=bool(points),
    )


class TestCompoundMutantScenarios:
    """
    Test suite for compound mutants: kinds applied in sequence, each on the
    previous round's output.
    """

    def test_01_kinds_stack_on_the_same_position(self, sample_trace):
        """
        WM then MM at position 1: the timeout marker records the wrong
        message, not the original event.
        """
        config = MutantConfig(injection_positions=(1,), wrong_messages=("BOOM",))
        mutant = generate_compound_mutant(sample_trace, ["WM", "MM"], config, random.Random(0))

        marker = mutant.mutated_trace[1]
        assert marker.event == "TIMEOUT"
        assert marker.message["__original_event"] == "BOOM"
        assert mutant.injection_points == (1,)
        assert mutant.position_kinds == {1: (CRFKind.WM, CRFKind.MM)}
        assert mutant.original_trace == sample_trace

    def test_02_aggregate_tag_is_wm(self, sample_trace):
        """The aggregate crf_type is WM whatever kinds were applied."""
        config = MutantConfig(injection_positions=(0,))
        mutant = generate_compound_mutant(sample_trace, [CRFKind.WP, CRFKind.MM], config, random.Random(0))
        assert mutant.crf_type is CRFKind.WM
        assert mutant.position_kinds[0] == (CRFKind.WP, CRFKind.MM)

    def test_03_points_are_the_sorted_union(self, sample_trace, monkeypatch):
        """Injection points of all rounds are merged and sorted."""
        rounds = iter([(3,), (0, 3)])
        real = generators.generate_mutant

        def fake(trace, kind, config, rng):
            return real(trace, kind, MutantConfig(injection_positions=next(rounds)), rng)

        monkeypatch.setattr(generators, "generate_mutant", fake)
        mutant = generate_compound_mutant(sample_trace, ["WP", "WM"], rng=random.Random(0))
        assert mutant.injection_points == (0, 3)
        assert mutant.position_kinds == {0: (CRFKind.WM,), 3: (CRFKind.WP, CRFKind.WM)}
        assert mutant.expected_bad_state is True

    def test_04_rate_is_split_between_rounds(self, sample_trace, monkeypatch):
        """Each round runs at the configured rate divided by the number of kinds."""
        seen = []
        real = generators.generate_mutant

        def spy(trace, kind, config, rng):
            seen.append(config.injection_rate)
            return real(trace, kind, config, rng)

        monkeypatch.setattr(generators, "generate_mutant", spy)
        generate_compound_mutant(sample_trace, ["WM", "WP", "MM", "WM"],
                                 MutantConfig(injection_rate=0.4), random.Random(0))
        assert seen == pytest.approx([0.1, 0.1, 0.1, 0.1])

    def test_05_unknown_kind_is_rejected_up_front(self, sample_trace):
        """An unknown kind anywhere in the list raises before mutating."""
        with pytest.raises(UnknownCRFTypeError):
            generate_compound_mutant(sample_trace, ["WM", "BAD"])


class TestBatchAndMetricsScenarios:
    """
    Test suite for batch generation and aggregate metrics.
    """

    def test_01_batch_size_and_kind(self, sample_trace):
        """A batch holds `count` mutants of the requested kind."""
        mutants = batch_generate_mutants(sample_trace, 5, "WP", rng=random.Random(9))
        assert len(mutants) == 5
        assert all(m.crf_type is CRFKind.WP for m in mutants)
        assert all(m.original_trace == sample_trace for m in mutants)

    def test_02_batch_is_reproducible_with_seed(self, sample_trace):
        """Two batches from equally seeded sources are identical."""
        config = MutantConfig(injection_rate=0.5)
        first = batch_generate_mutants(sample_trace, 4, "WM", config, random.Random(3))
        second = batch_generate_mutants(sample_trace, 4, "WM", config, random.Random(3))
        assert first == second

    def test_03_zero_count(self, sample_trace):
        """A zero count yields an empty batch."""
        assert batch_generate_mutants(sample_trace, 0, "MM") == []

    def test_04_metrics_distribution(self):
        """[WM, WM, WP] counts three mutants with MM reported as zero."""
        metrics = calculate_mutant_metrics([M(CRFKind.WM), M(CRFKind.WM), M(CRFKind.WP)])
        assert metrics.total_mutants == 3
        assert metrics.crf_distribution == {"WM": 2, "WP": 1, "MM": 0}

    def test_05_metrics_averages_and_violations(self):
        """Violations count expected bad states; points are averaged."""
        metrics = calculate_mutant_metrics([
            M(CRFKind.MM, points=(0, 1, 2)),
            M(CRFKind.MM, points=()),
        ])
        assert metrics.expected_violations == 1
        assert metrics.average_injection_points == 1.5

    def test_06_empty_metrics(self):
        """An empty batch reports zeros rather than dividing by zero."""
        metrics = calculate_mutant_metrics([])
        assert metrics.total_mutants == 0
        assert metrics.average_injection_points == 0.0
        assert metrics.crf_distribution == {"WM": 0, "WP": 0, "MM": 0}

    def test_07_export_shapes(self):
        """Mutants and metrics export with camelCase keys."""
        mutant = M(CRFKind.WP, points=(1,))
        exported = mutant.to_dict()
        assert exported["crfType"] == "WP"
        assert exported["injectionPoints"] == [1]
        assert exported["expectedBadState"] is True
        assert calculate_mutant_metrics([mutant]).to_dict()["crfDistribution"]["WP"] == 1
