"""
Annotation service.

Composes payload conversion, the annotation engine and the sanitizer so an
HTTP route only has to hand over the parsed request.

Usage:
    service = AnnotationService()
    response = service.annotate(AnnotationRequest.model_validate(payload))
    response.model_dump(by_alias=True)
"""
import logging
from typing import Optional

from citemark.adapters.sanitizer.bleach_sanitizer import get_sanitizer
from citemark.api.schemas import AnnotationRequest, AnnotationResponse, CitationSummaryResponse
from citemark.core.annotation.engine import CitationAnnotator
from citemark.core.ports.sanitizer import SanitizerPort

logger = logging.getLogger(__name__)


class AnnotationService:
    """Annotate a document payload and report citation counts."""

    def __init__(
        self,
        sanitizer: Optional[SanitizerPort] = None,
        annotator: Optional[CitationAnnotator] = None,
    ):
        self.sanitizer = sanitizer or get_sanitizer()
        self.annotator = annotator or CitationAnnotator()

    def annotate(self, request: AnnotationRequest) -> AnnotationResponse:
        """
        Annotate the request's document.

        Args:
            request: Parsed AnnotationRequest

        Returns:
            AnnotationResponse with (sanitized) markup and summary counts

        Raises:
            SanitizerError: If sanitization fails
        """
        citations = request.domain_citations()
        references = request.domain_references()
        changes = request.domain_changes()

        result = self.annotator.annotate_document(
            request.full_html,
            citations,
            references,
            changes,
            full_text=request.full_text,
        )
        summary = self.annotator.summarize(citations, references, changes)

        markup = result.markup
        if request.sanitize:
            markup = self.sanitizer.sanitize(markup)

        logger.info(
            f"Annotated {result.highlighted_count} occurrences of {len(citations)} citations "
            f"({summary.unmatched_count} unmatched, {summary.orphaned_count} orphaned)"
        )

        return AnnotationResponse(
            markup=markup,
            highlighted_count=result.highlighted_count,
            not_found=result.not_found,
            summary=CitationSummaryResponse(
                unmatched_count=summary.unmatched_count,
                orphaned_count=summary.orphaned_count,
                unmatched_texts=summary.unmatched_texts,
                orphaned_texts=summary.orphaned_texts,
            ),
        )
