#!/usr/bin/env python3
# run_mutator.py
# This file is part of Raten - Robustness-Aware Test Suite Reduction
#
# Command-line interface for CRF mutant generation and trace replay

import sys
import json
import random
import argparse
from pathlib import Path
from typing import Dict, List, Optional

from core import (
    DEFAULT_DEPTH_MAX,
    DEFAULT_USR_MAX,
    UINT_MAX,
    build_graph,
    compute_bt_cost,
    create_initial_configuration,
    extract_rc,
    good_states,
    replay_trace,
)
from model import MachineDefinitionError, TableMachine
from mutation import (
    CRFKind,
    Mutant,
    MutantConfig,
    UnknownCRFTypeError,
    batch_generate_mutants,
    calculate_mutant_metrics,
    generate_compound_mutant,
)
from utils.trace_reader import read_trace, validate_trace_file, write_mutants, write_trace, TraceFormatError
from utils.graph_visualizer import render_transition_graph
from utils.logger import configure_logging, get_logger


def read_machine_file(filepath: Path) -> TableMachine:
    """Load a table machine definition from a JSON file.

    Raises:
        FileNotFoundError: If the definition file doesn't exist
        MachineDefinitionError: If the definition is not valid JSON or malformed
    """
    try:
        with open(filepath, "r", encoding="utf-8") as f:
            definition = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Machine definition not found: {filepath}")
    except json.JSONDecodeError as e:
        raise MachineDefinitionError(f"Invalid JSON in {filepath}: {e}")

    return TableMachine(definition)


def generate_mutants(args: argparse.Namespace, trace) -> List[Mutant]:
    """Generate the requested mutants for a trace.

    A single kind produces a batch of independent mutants; several kinds
    produce compound mutants, one per requested count.
    """
    rng = random.Random(args.seed)
    config = MutantConfig(
        injection_rate=args.rate,
        injection_positions=tuple(args.positions or ()),
        missing_message_timeout=args.timeout,
    )
    kinds = args.kind or [CRFKind.WM.value]

    if len(kinds) == 1:
        return batch_generate_mutants(trace, args.count, kinds[0], config, rng)
    return [generate_compound_mutant(trace, kinds, config, rng) for _ in range(args.count)]


def report_detection(
    machine: TableMachine,
    trace,
    mutants: List[Mutant],
    graph_image: Optional[str] = None,
    usr_max=DEFAULT_USR_MAX,
    depth_max: int = DEFAULT_DEPTH_MAX,
) -> Dict[int, Optional[int]]:
    """Replay the original and every mutated trace over the machine's RC-steps.

    Returns:
        Back-track cost per detected mutant index, taken from the configuration
        at its first new deviation; None when the machine tags no Good state
    """
    logger = get_logger()

    rc_steps = extract_rc(machine, with_costs=True)
    graph = build_graph(rc_steps)
    logger.graph_summary(len(graph), len(rc_steps))
    good = good_states(machine)

    gamma0 = create_initial_configuration(machine)
    baseline = replay_trace(trace, rc_steps, gamma0)
    if baseline.deviated:
        logger.warning(f"⚠️  Original trace deviates at {list(baseline.unmatched_indices)}")
    else:
        logger.info(f"✅ Original trace replays cleanly to {baseline.final.state_key}")

    recovery: Dict[int, Optional[int]] = {}
    for i, mutant in enumerate(mutants):
        result = replay_trace(mutant.mutated_trace, rc_steps, gamma0)
        new_deviations = sorted(set(result.unmatched_indices) - set(baseline.unmatched_indices))
        line = (f"  Mutant {i} ({mutant.crf_type}): points={list(mutant.injection_points)} "
                f"deviations={new_deviations}")
        if new_deviations:
            recovery[i] = None
            if good:
                gamma = result.configurations[new_deviations[0]]
                recovery[i] = compute_bt_cost(rc_steps, gamma, good, usr_max, depth_max)
                shown = "unreachable" if recovery[i] == UINT_MAX else recovery[i]
                line += f" recovery from {gamma.state_key}: {shown}"
        logger.info(line)

    logger.info(f"\n📊 Mutants deviating from the RC-step relation: {len(recovery)}/{len(mutants)}")

    if graph_image:
        render_transition_graph(graph, graph_image, initial=gamma0.state)
    return recovery


def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser for command line interface.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        description="Raten CRF mutant generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_mutator.py -t trace.csv -k WM -n 10 -o mutants.json
  python run_mutator.py -t trace.csv -k WM -k MM --seed 7 -v
  python run_mutator.py -t trace.csv -k WP -p 0 3 --mutated-trace bad.csv
  python run_mutator.py -t trace.csv -k MM -m door.json --graph-image door -v
  python run_mutator.py -t trace.csv -k WM -n 5 -m door.json --usr-max 10 -v

Output:
  Warnings and errors only by default; -v adds progress, --debug adds detail.
  Recovery costs need states tagged "Good" in the machine definition.

Trace file format:
  event,message
  OPEN,"{""user"": ""alice""}"
  CLOSE,
        """,
    )

    parser.add_argument(
        "-t", "--trace", required=True, type=Path, help="Path to CSV trace file"
    )

    parser.add_argument(
        "-k", "--kind", action="append", choices=[k.value for k in CRFKind],
        help="CRF kind to inject; repeat for compound mutants (default: WM)",
    )

    parser.add_argument(
        "-n", "--count", type=int, default=1, help="Number of mutants to generate"
    )

    parser.add_argument(
        "-r", "--rate", type=float, default=0.1, help="Per-event injection probability"
    )

    parser.add_argument(
        "-p", "--positions", type=int, nargs="+", help="Explicit injection positions"
    )

    parser.add_argument(
        "--timeout", type=int, default=5000, help="Timeout recorded on missing-message markers"
    )

    parser.add_argument(
        "--seed", type=int, default=None, help="Seed for reproducible mutants"
    )

    parser.add_argument(
        "-o", "--output", type=Path, help="Write mutants and metrics as JSON"
    )

    parser.add_argument(
        "--mutated-trace", type=Path, help="Write the first mutated trace as CSV"
    )

    parser.add_argument(
        "-m", "--machine", type=Path, help="JSON machine definition to replay traces against"
    )

    parser.add_argument(
        "--graph-image", help="Render the machine's transition graph (requires --machine)"
    )

    parser.add_argument(
        "--usr-max", type=float, default=DEFAULT_USR_MAX,
        help="Largest acceptable recovery cost for detected mutants"
    )

    parser.add_argument(
        "--depth-max", type=int, default=DEFAULT_DEPTH_MAX,
        help="Deepest recovery path searched past the direct one"
    )

    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Report progress (INFO level)"
    )

    parser.add_argument(
        "--debug", action="store_true", help="Enable debug output (overrides --verbose)"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the mutant generator.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=args.verbose, debug=args.debug)
    logger = get_logger()

    try:
        logger.info(f"🔍 Validating trace file: {args.trace}")
        event_count = validate_trace_file(str(args.trace))
        trace = tuple(read_trace(str(args.trace)))
        logger.info(f"📋 Trace loaded: {event_count} events")

        mutants = generate_mutants(args, trace)
        metrics = calculate_mutant_metrics(mutants)
        logger.info(f"🧬 Generated {metrics.total_mutants} mutants, "
                    f"{metrics.expected_violations} expected violations, "
                    f"{metrics.average_injection_points:.2f} injection points on average")

        if args.output:
            write_mutants(str(args.output), mutants, metrics)
            logger.info(f"💾 Mutants written to {args.output}")

        if args.mutated_trace and mutants:
            write_trace(str(args.mutated_trace), mutants[0].mutated_trace)
            logger.info(f"💾 Mutated trace written to {args.mutated_trace}")

        if args.machine:
            machine = read_machine_file(args.machine)
            report_detection(machine, trace, mutants, args.graph_image, args.usr_max, args.depth_max)

        return 0

    except TraceFormatError as e:
        logger.error(f"Trace file error: {e}")
        return 1

    except UnknownCRFTypeError as e:
        logger.error(f"Mutation error: {e}")
        return 2

    except (FileNotFoundError, MachineDefinitionError) as e:
        logger.error(f"Machine definition error: {e}")
        return 3

    except KeyboardInterrupt:
        logger.error("Mutation interrupted by user")
        return 4

    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        import traceback

        traceback.print_exc()
        return 5


if __name__ == "__main__":
    sys.exit(main())
