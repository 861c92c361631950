"""
Structured per-check events and the sinks that receive them.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Protocol

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class Outcome(str, Enum):
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"  # condition not observed in this sample
    ERROR = "error"


class CheckEvent(BaseModel):
    """The result of running a single check."""

    group: str
    name: str
    outcome: Outcome
    message: str = ""
    observed: Dict[str, Any] = Field(default_factory=dict)
    duration: float = 0.0

    @property
    def passed(self) -> bool:
        """Skipped checks count as vacuous passes."""
        return self.outcome in (Outcome.PASSED, Outcome.SKIPPED)


class EventSink(Protocol):
    """Protocol defining the interface for something that receives check events."""

    def emit(self, event: CheckEvent) -> None:
        ...


class LoggingSink:
    """Writes one log line per check."""

    def __init__(self, log: logging.Logger = logger):
        self.log = log

    def emit(self, event: CheckEvent) -> None:
        level = logging.INFO if event.passed else logging.ERROR
        self.log.log(
            level,
            "[%s] %s: %s%s observed=%s (%.2fs)",
            event.group,
            event.name,
            event.outcome.value,
            f" - {event.message}" if event.message else "",
            event.observed,
            event.duration,
        )


class JsonLinesSink:
    """Appends every event as a JSON object on its own line."""

    def __init__(self, path: str):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def emit(self, event: CheckEvent) -> None:
        with open(self.path, "a") as f:
            f.write(event.model_dump_json() + "\n")


class MultiSink:
    """Fans each event out to several sinks."""

    def __init__(self, sinks: List[EventSink]):
        self.sinks = sinks

    def emit(self, event: CheckEvent) -> None:
        for sink in self.sinks:
            sink.emit(event)
