"""
Diagnostic tracing for the annotation engine.

The engine reports what it did with each citation (replaced, skipped,
not found) through an injectable tracer instead of printing. The default
tracer forwards events to logging; RecordingTracer keeps them in memory
so callers can inspect a run.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

# Event names
CITATION_SKIPPED = "citation_skipped"
CITATION_NOT_FOUND = "citation_not_found"
CITATION_REPLACED = "citation_replaced"
ORPHAN_CHANGE_REPLACED = "orphan_change_replaced"
REFERENCE_SECTION_FOUND = "reference_section_found"
REFERENCE_SECTION_MISSING = "reference_section_missing"
ANNOTATION_COMPLETE = "annotation_complete"


@dataclass(frozen=True)
class AnnotationEvent:
    """One diagnostic event emitted during annotation."""

    name: str
    fields: Dict[str, Any] = field(default_factory=dict)


class AnnotationTracer:
    """Base tracer; ignores every event."""

    def emit(self, name: str, **fields: Any) -> None:
        """Record a diagnostic event.

        Args:
            name: Event name (see module constants)
            **fields: Event details
        """
        pass


class LoggingTracer(AnnotationTracer):
    """Forward events to a logger with the event name and fields in extra."""

    def __init__(self, log: Optional[logging.Logger] = None, level: int = logging.DEBUG):
        self.log = log or logger
        self.level = level

    def emit(self, name: str, **fields: Any) -> None:
        details = ", ".join(f"{k}={v!r}" for k, v in fields.items())
        level = logging.INFO if name == CITATION_NOT_FOUND else self.level
        self.log.log(level, f"{name}: {details}", extra={"event": name, "event_fields": fields})


class RecordingTracer(AnnotationTracer):
    """Keep events in memory, in emission order."""

    def __init__(self):
        self.events: List[AnnotationEvent] = []

    def emit(self, name: str, **fields: Any) -> None:
        self.events.append(AnnotationEvent(name=name, fields=dict(fields)))

    def named(self, name: str) -> List[AnnotationEvent]:
        """Events with the given name."""
        return [e for e in self.events if e.name == name]

    def clear(self) -> None:
        """Drop all recorded events."""
        self.events.clear()
