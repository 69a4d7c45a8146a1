# utils/__init__.py
# This file is part of Raten - Robustness-Aware Test Suite Reduction
#
# Utility module exports

from .trace_reader import (
    read_trace,
    write_trace,
    write_mutants,
    validate_trace_file,
    TraceFormatError,
)
from .trace_generator import generate_random_trace, generate_walk_trace

__all__ = [
    "read_trace",
    "write_trace",
    "write_mutants",
    "validate_trace_file",
    "TraceFormatError",
    "generate_random_trace",
    "generate_walk_trace",
]
