# utils/trace_reader.py
# This file is part of Raten - Robustness-Aware Test Suite Reduction
#
# CSV trace file reader/writer and JSON export of mutants

import csv
import json
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, Sequence

from model.trace import UNDEFINED, TraceEvent
from utils.logger import get_logger

REQUIRED_HEADERS = ("event", "message")


class TraceFormatError(Exception):
    """Exception raised when trace files contain invalid format or data."""

    pass


def read_trace(filepath: str) -> Iterator[TraceEvent]:
    """Read events from a CSV trace file.

    Each row holds an event identifier and its message payload as JSON text.
    An empty message cell means an empty payload.

    Expected CSV format:
        event,message
        OPEN,"{""user"": ""alice""}"
        CLOSE,

    Args:
        filepath: Path to the CSV trace file

    Yields:
        TraceEvent: Parsed events in file order

    Raises:
        TraceFormatError: If file format is invalid or events cannot be parsed
    """
    logger = get_logger()
    path = Path(filepath)

    if not path.exists():
        raise TraceFormatError(f"Trace file not found: {filepath}")

    logger.debug(f"Reading trace file: {filepath}")

    try:
        with open(path, "r", newline="", encoding="utf-8") as file:
            reader = csv.DictReader(file)

            missing = set(REQUIRED_HEADERS) - set(reader.fieldnames or [])
            if missing:
                raise TraceFormatError(f"Missing required headers: {sorted(missing)}")

            for row_num, row in enumerate(reader, start=2):
                try:
                    event = _parse_event_row(row)
                except (ValueError, TypeError) as e:
                    raise TraceFormatError(f"Error parsing row {row_num}: {e}") from e
                logger.debug(f"Parsed event {event.event} from row {row_num}")
                yield event

    except TraceFormatError:
        raise
    except OSError as e:
        raise TraceFormatError(f"Cannot open trace file: {filepath}: {e}") from e
    except csv.Error as e:
        raise TraceFormatError(f"Error reading trace file: {e}") from e


def validate_trace_file(filepath: str) -> int:
    """Validate a trace file by parsing every event.

    Returns:
        Number of events in the file

    Raises:
        TraceFormatError: If validation fails
    """
    logger = get_logger()
    logger.debug(f"Validating trace file: {filepath}")
    events = list(read_trace(filepath))
    logger.debug(f"Trace validation successful: {len(events)} events")
    return len(events)


def write_trace(filepath: str, trace: Iterable[TraceEvent]) -> None:
    """Write a trace in the CSV format read by :func:`read_trace`."""
    with open(filepath, "w", newline="", encoding="utf-8") as file:
        writer = csv.writer(file)
        writer.writerow(REQUIRED_HEADERS)
        for event in trace:
            message = _dumps(event.message) if event.message else ""
            writer.writerow([event.event, message])


def write_mutants(filepath: str, mutants: Sequence[Any], metrics: Any = None) -> None:
    """Export mutants (and optional metrics) as JSON for the report layer."""
    document: Dict[str, Any] = {"mutants": [m.to_dict() for m in mutants]}
    if metrics is not None:
        document["metrics"] = metrics.to_dict()
    with open(filepath, "w", encoding="utf-8") as file:
        file.write(_dumps(document, indent=2))


def _json_default(value: Any) -> Any:
    # UNDEFINED payload values serialize as null
    if value is UNDEFINED:
        return None
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _dumps(value: Any, **kwargs) -> str:
    return json.dumps(value, default=_json_default, **kwargs)


def _parse_event_row(row: Dict[str, str]) -> TraceEvent:
    """Parse a single CSV row into a TraceEvent.

    Raises:
        ValueError: Empty event identifier, malformed JSON or non-object message
    """
    event = (row.get("event") or "").strip()
    if not event:
        raise ValueError("Empty event field")

    raw_message = (row.get("message") or "").strip()
    if not raw_message:
        return TraceEvent(event, {})

    message = json.loads(raw_message)
    if not isinstance(message, dict):
        raise ValueError(f"Message must be a JSON object, got {type(message).__name__}")
    return TraceEvent(event, message)
