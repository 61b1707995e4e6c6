"""
Diagnostic trace sinks.

The parser narrates its decisions (sections found, strategy scores, why the AI
path was abandoned) as TraceEvents handed to a caller-supplied sink. The
default sink drops them, so the core stays silent unless asked.
"""

import logging
from typing import Any, Dict, List, Protocol

from pydantic import BaseModel, Field


class TraceEvent(BaseModel):
    name: str
    data: Dict[str, Any] = Field(default_factory=dict)


class TraceSink(Protocol):
    def record(self, event: TraceEvent) -> None:
        ...


class NullTraceSink:
    """Default sink: discards everything."""

    def record(self, event: TraceEvent) -> None:
        return None


class LoggingTraceSink:
    """Forwards every event to a logger at DEBUG."""

    def __init__(self, logger: logging.Logger = None):
        self.logger = logger or logging.getLogger("profile_parser.trace")

    def record(self, event: TraceEvent) -> None:
        self.logger.debug(f"[trace] {event.name}: {event.data}")


class RecordingTraceSink:
    """Keeps events in memory (tests, and API responses with debug=true)."""

    def __init__(self):
        self.events: List[TraceEvent] = []

    def record(self, event: TraceEvent) -> None:
        self.events.append(event)

    def names(self) -> List[str]:
        return [e.name for e in self.events]

    def as_dicts(self) -> List[Dict[str, Any]]:
        return [e.model_dump() for e in self.events]
