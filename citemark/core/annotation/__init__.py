"""Citation annotation engine and its building blocks."""
from citemark.core.annotation.engine import (
    AnnotationResult,
    CitationAnnotator,
    CitationSummary,
    annotate,
    summarize,
)
from citemark.core.annotation.classifier import (
    Classification,
    ClassificationState,
    ValidityClassifier,
)
from citemark.core.annotation.range_expander import expand_citation_range
from citemark.core.annotation.author_year import parse_author_year
from citemark.core.annotation.tracing import (
    AnnotationTracer,
    LoggingTracer,
    RecordingTracer,
)

__all__ = [
    "AnnotationResult",
    "CitationAnnotator",
    "CitationSummary",
    "annotate",
    "summarize",
    "Classification",
    "ClassificationState",
    "ValidityClassifier",
    "expand_citation_range",
    "parse_author_year",
    "AnnotationTracer",
    "LoggingTracer",
    "RecordingTracer",
]
