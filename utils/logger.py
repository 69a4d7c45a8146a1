# utils/logger.py
# This file is part of Raten - Robustness-Aware Test Suite Reduction
#
# Process-wide logger for extraction, replay and mutation runs

"""Raten logging.

One named standard-library logger is shared by every component. Progress and
debug lines go to stdout; warnings and errors go to stderr so that redirected
reports stay clean. Domain helpers keep the wording of recurring events
(skipped transitions, generated mutants, graph sizes) in one place.
"""

import logging
import sys
from enum import Enum
from typing import Any, Dict, Optional, Sequence


class LogLevel(Enum):
    """Log levels accepted by :func:`set_log_level`."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR

    @classmethod
    def from_flags(cls, verbose: bool = False, debug: bool = False) -> "LogLevel":
        if debug:
            return cls.DEBUG
        return cls.INFO if verbose else cls.WARNING


class _BelowWarning(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < logging.WARNING


class RatenFormatter(logging.Formatter):
    """Bare messages for progress output, tagged lines otherwise."""

    def format(self, record):
        text = record.getMessage()
        if record.levelno == logging.INFO:
            return text
        return f"[{record.levelname}] {text}"


class RatenLogger:
    """Thin wrapper over ``logging.Logger`` with Raten-specific helpers."""

    def __init__(self, name: str = "raten", level: LogLevel = LogLevel.INFO):
        self.logger = logging.getLogger(name)
        self.logger.propagate = False
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)

        progress = logging.StreamHandler(sys.stdout)
        progress.addFilter(_BelowWarning())
        problems = logging.StreamHandler(sys.stderr)
        for handler in (progress, problems):
            handler.setFormatter(RatenFormatter())
            self.logger.addHandler(handler)

        self.progress_handler, self.problem_handler = progress, problems
        self.set_level(level)

    def set_level(self, level: LogLevel):
        self.logger.setLevel(level.value)
        self.progress_handler.setLevel(level.value)
        self.problem_handler.setLevel(max(level.value, logging.WARNING))

    def debug(self, message: str, *args, **kwargs):
        self.logger.debug(message, *args, **kwargs)

    def info(self, message: str, *args, **kwargs):
        self.logger.info(message, *args, **kwargs)

    def warning(self, message: str, *args, **kwargs):
        self.logger.warning(message, *args, **kwargs)

    def error(self, message: str, *args, **kwargs):
        self.logger.error(message, *args, **kwargs)

    # Domain events
    def extraction_summary(self, node_count: int, step_count: int):
        self.debug("Extraction visited %d nodes, recorded %d RC-steps", node_count, step_count)

    def transition_skipped(self, source: str, event: str, reason: str):
        self.debug("    skipped %s --%s-->: %s", source, event, reason)

    def mutant_generated(self, crf_type: str, positions: Sequence[int], trace_length: int):
        self.debug("  %s mutant: %d/%d positions %s", crf_type, len(positions), trace_length, list(positions))

    def metrics_summary(self, metrics: Dict[str, Any]):
        self.debug("Mutant metrics: %s", metrics)

    def graph_summary(self, graph_size: int, step_count: int):
        self.info("Transition graph: %d source states, %d RC-steps", graph_size, step_count)


_global_logger: Optional[RatenLogger] = None


def get_logger(name: str = "raten") -> RatenLogger:
    """Return the process-wide logger, creating it on first use.

    `name` only matters for that first call.
    """
    global _global_logger
    if _global_logger is None:
        _global_logger = RatenLogger(name)
    return _global_logger


def set_log_level(level: LogLevel):
    get_logger().set_level(level)


def configure_logging(verbose: bool = False, debug: bool = False):
    """Apply the ``-v`` / ``--debug`` command line flags; debug wins."""
    set_log_level(LogLevel.from_flags(verbose, debug))
