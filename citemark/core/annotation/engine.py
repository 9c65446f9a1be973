"""
CitationAnnotator - Locate citations in document markup and wrap them.

Pipeline:
1. Split off the References section (excluded from annotation)
2. Drop empty citations, deduplicate by raw text, longest text first
3. Classify each citation and render its markup fragment
4. Phase 1: claim every occurrence of the first search variant still
   present, mapping it to a placeholder
5. Orphan change records with no live citation are claimed the same way
6. Phase 2: expand placeholders to their fragments

Longer citation texts are claimed first and claimed text is never matched
again, so "[1]" cannot eat into "[1,2]" and no fragment is rewritten.

Usage:
    from citemark.core.annotation.engine import annotate, summarize

    html = annotate(document_html, citations, references, change_records)
    counts = summarize(citations, references, change_records)
"""
import html as html_lib
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from citemark.config.annotation_limits import PLACEHOLDER_CLOSE, PLACEHOLDER_OPEN
from citemark.config.annotator_settings import ANNOTATOR_SETTINGS, AnnotatorSettings
from citemark.core.annotation import tracing
from citemark.core.annotation.change_resolver import ChangeResolver
from citemark.core.annotation.classifier import (
    Classification,
    ClassificationState,
    ValidityClassifier,
)
from citemark.core.annotation.fragments import FragmentRenderer
from citemark.core.annotation.markup_loader import MarkupTemplateLoader, get_markup_loader
from citemark.core.annotation.reference_section import split_reference_section
from citemark.core.annotation.tracing import AnnotationTracer, LoggingTracer
from citemark.core.annotation.variant_index import ClaimedSpans, VariantIndex
from citemark.core.models.citation import ChangeRecord, Citation, ReferenceEntry

logger = logging.getLogger(__name__)

# Tags and their attribute values are never annotated
TAG_PATTERN = re.compile(r"<[^>]*>")


@dataclass
class AnnotationResult:
    """Annotated body plus what happened to each citation."""

    markup: str
    reference_section: str = ""
    highlighted_count: int = 0
    not_found: List[str] = field(default_factory=list)
    classifications: List[Classification] = field(default_factory=list)


@dataclass
class CitationSummary:
    """Badge counts for the document viewer."""

    unmatched_count: int = 0
    orphaned_count: int = 0
    unmatched_texts: List[str] = field(default_factory=list)
    orphaned_texts: List[str] = field(default_factory=list)


@dataclass
class _Plan:
    """One unit of work for phase 1: what to search for and what to insert."""

    label: str
    fragment: str
    variants: List[str]
    citation_id: Optional[str] = None
    state: ClassificationState = ClassificationState.ORPHANED


def html_encode(text: str) -> str:
    """Escape &, < and > the way rendered markup stores text content."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def search_variants(text: str) -> List[str]:
    """
    Encodings a citation text may have in rendered markup.

    Args:
        text: Citation search text

    Returns:
        Literal, en-dash entity forms, escaped form and its en-dash forms,
        deduplicated in that order
    """
    encoded = html_encode(text)
    candidates = [
        text,
        text.replace("–", "&#8211;"),
        text.replace("–", "&ndash;"),
        encoded,
        encoded.replace("–", "&#8211;"),
        encoded.replace("–", "&ndash;"),
    ]
    variants = []
    for candidate in candidates:
        if candidate and candidate not in variants:
            variants.append(candidate)
    return variants


class CitationAnnotator:
    """
    Annotate citation occurrences in document markup.

    Stateless between calls: every call builds its own resolver,
    classifier, index and placeholder map from the supplied snapshots.
    """

    def __init__(
        self,
        settings: Optional[AnnotatorSettings] = None,
        tracer: Optional[AnnotationTracer] = None,
        renderer: Optional[FragmentRenderer] = None,
    ):
        """
        Initialize annotator.

        Args:
            settings: AnnotatorSettings (defaults to ANNOTATOR_SETTINGS)
            tracer: Diagnostic tracer (defaults to LoggingTracer)
            renderer: Fragment renderer (defaults to one on the configured templates)
        """
        self.settings = settings or ANNOTATOR_SETTINGS
        self.tracer = tracer or LoggingTracer()
        if renderer is None:
            if self.settings.templates_path:
                templates = MarkupTemplateLoader(self.settings.templates_path)
            else:
                templates = get_markup_loader()
            renderer = FragmentRenderer(templates)
        self.renderer = renderer

    def annotate_document(
        self,
        markup: Optional[str],
        citations: Sequence[Citation],
        references: Optional[Sequence[ReferenceEntry]] = None,
        changes: Optional[Sequence[ChangeRecord]] = None,
        full_text: Optional[str] = None,
    ) -> AnnotationResult:
        """
        Wrap every citation occurrence with its markup fragment.

        Args:
            markup: Rendered document body (HTML)
            citations: Detected citations
            references: Current reference list
            changes: Pending change records
            full_text: Plain-text rendering (offset fallback, or the body
                       itself when markup is empty)

        Returns:
            AnnotationResult with the annotated body
        """
        content = markup or ""
        if not content and full_text:
            logger.debug("No markup supplied, annotating escaped plain text")
            content = html_lib.escape(full_text, quote=False)
        if not content:
            return AnnotationResult(markup="")

        split = split_reference_section(content)
        if split.heading is not None:
            self.tracer.emit(
                tracing.REFERENCE_SECTION_FOUND,
                heading=split.heading,
                position=len(split.body),
            )
        else:
            self.tracer.emit(tracing.REFERENCE_SECTION_MISSING)
        body = split.body

        resolver = ChangeResolver(changes)
        classifier = ValidityClassifier(references)
        unique = self._unique_citations(citations)
        seen_texts = {c.raw_text for c in unique}

        plans: List[_Plan] = []
        classifications: List[Classification] = []
        for citation in unique:
            result = classifier.classify(citation, resolver.resolve(citation))
            classifications.append(result)
            plans.append(self._citation_plan(result, full_text))

        for change in resolver.deletions():
            text = change.display_text
            if not text or text in seen_texts:
                continue
            seen_texts.add(text)
            plans.append(_Plan(
                label=text,
                fragment=self.renderer.render_deleted_change(change),
                variants=list(dict.fromkeys([text, html_encode(text)])),
            ))

        index = VariantIndex((v for plan in plans for v in plan.variants), body)
        claims = ClaimedSpans(len(body))
        for tag in TAG_PATTERN.finditer(body):
            claims.claim(tag.start(), tag.end())
        replacements: List[Tuple[int, int, int]] = []
        fragments: Dict[int, str] = {}
        not_found: List[str] = []

        for plan in plans:
            claimed = self._claim(plan.variants, index, claims)
            if claimed is None:
                if plan.citation_id is not None:
                    not_found.append(plan.label)
                    self.tracer.emit(
                        tracing.CITATION_NOT_FOUND,
                        citation_id=plan.citation_id,
                        texts=plan.variants,
                    )
                continue

            variant, starts = claimed
            placeholder_id = len(fragments)
            fragments[placeholder_id] = plan.fragment
            replacements.extend((s, s + len(variant), placeholder_id) for s in starts)

            if plan.citation_id is not None:
                self.tracer.emit(
                    tracing.CITATION_REPLACED,
                    citation_id=plan.citation_id,
                    variant=variant,
                    count=len(starts),
                    state=plan.state.value,
                )
            else:
                self.tracer.emit(tracing.ORPHAN_CHANGE_REPLACED, text=variant, count=len(starts))

        annotated = self._expand_placeholders(body, replacements, fragments)
        if self.settings.append_reference_section:
            annotated += split.reference_section

        self.tracer.emit(
            tracing.ANNOTATION_COMPLETE,
            highlighted=len(replacements),
            citations=len(citations),
            not_found=len(not_found),
        )

        return AnnotationResult(
            markup=annotated,
            reference_section=split.reference_section,
            highlighted_count=len(replacements),
            not_found=not_found,
            classifications=classifications,
        )

    def summarize(
        self,
        citations: Sequence[Citation],
        references: Optional[Sequence[ReferenceEntry]] = None,
        changes: Optional[Sequence[ChangeRecord]] = None,
    ) -> CitationSummary:
        """
        Count unmatched and orphaned citations without rewriting markup.

        Args:
            citations: Detected citations
            references: Current reference list
            changes: Pending change records

        Returns:
            CitationSummary with counts and the texts behind them
        """
        resolver = ChangeResolver(changes)
        classifier = ValidityClassifier(references)
        summary = CitationSummary()

        for citation in citations:
            if not citation.raw_text:
                continue
            result = classifier.classify(citation, resolver.resolve(citation))
            if result.state == ClassificationState.UNMATCHED:
                summary.unmatched_texts.append(citation.raw_text)
            elif result.state == ClassificationState.ORPHANED:
                if result.search_text not in summary.orphaned_texts:
                    summary.orphaned_texts.append(result.search_text)

        for change in resolver.deletions():
            text = change.display_text
            if text and text not in summary.orphaned_texts:
                summary.orphaned_texts.append(text)

        summary.unmatched_count = len(summary.unmatched_texts)
        summary.orphaned_count = len(summary.orphaned_texts)
        return summary

    def _unique_citations(self, citations: Sequence[Citation]) -> List[Citation]:
        """Drop empty texts, keep the first citation per text, longest first."""
        unique: Dict[str, Citation] = {}
        for citation in citations:
            if not citation.raw_text:
                self.tracer.emit(
                    tracing.CITATION_SKIPPED,
                    citation_id=citation.id,
                    reason="empty_raw_text",
                )
                continue
            unique.setdefault(citation.raw_text, citation)
        return sorted(unique.values(), key=lambda c: len(c.raw_text), reverse=True)

    def _citation_plan(self, result: Classification, full_text: Optional[str]) -> _Plan:
        """Build search variants and fragment for one classified citation."""
        citation = result.citation
        texts = result.search_texts
        position_text = citation.plain_text_span(full_text)
        if position_text and position_text not in texts:
            texts.append(position_text)

        variants: List[str] = []
        for text in texts:
            for variant in search_variants(text):
                if variant not in variants:
                    variants.append(variant)

        return _Plan(
            label=citation.raw_text,
            fragment=self.renderer.render(result),
            variants=variants,
            citation_id=citation.id,
            state=result.state,
        )

    @staticmethod
    def _claim(
        variants: List[str],
        index: VariantIndex,
        claims: ClaimedSpans,
    ) -> Optional[Tuple[str, List[int]]]:
        """
        Claim all unclaimed occurrences of the first variant that has any.

        Occurrences are taken left to right without overlapping each other
        or earlier claims, exactly as a global replace on the partially
        rewritten body would.

        Returns:
            (variant, start offsets) or None when no variant is present
        """
        for variant in variants:
            length = len(variant)
            taken: List[int] = []
            last_end = -1
            for start in index.occurrences(variant):
                end = start + length
                if start < last_end or claims.overlaps(start, end):
                    continue
                taken.append(start)
                last_end = end
            if taken:
                for start in taken:
                    claims.claim(start, start + length)
                return variant, taken
        return None

    @staticmethod
    def _expand_placeholders(
        body: str,
        replacements: List[Tuple[int, int, int]],
        fragments: Dict[int, str],
    ) -> str:
        """
        Write placeholders into the body, then expand them to fragments.

        The placeholder prefix is lengthened until it does not occur in the
        body, so expansion can only hit inserted tokens.
        """
        if not replacements:
            return body

        prefix = PLACEHOLDER_OPEN
        while prefix in body:
            prefix += PLACEHOLDER_OPEN

        parts: List[str] = []
        cursor = 0
        for start, end, placeholder_id in sorted(replacements):
            parts.append(body[cursor:start])
            parts.append(f"{prefix}{placeholder_id}{PLACEHOLDER_CLOSE}")
            cursor = end
        parts.append(body[cursor:])
        staged = "".join(parts)

        token = re.compile(re.escape(prefix) + r"(\d+)" + re.escape(PLACEHOLDER_CLOSE))
        return token.sub(lambda m: fragments[int(m.group(1))], staged)


def annotate(
    document_markup: Optional[str],
    citations: Sequence[Citation],
    references: Optional[Sequence[ReferenceEntry]] = None,
    change_records: Optional[Sequence[ChangeRecord]] = None,
    *,
    full_text: Optional[str] = None,
    tracer: Optional[AnnotationTracer] = None,
) -> str:
    """
    Annotate citations in document markup.

    Args:
        document_markup: Rendered document body
        citations: Detected citations
        references: Current reference list
        change_records: Pending change records
        full_text: Plain-text rendering used for offset fallback
        tracer: Optional diagnostic tracer

    Returns:
        Annotated markup (pass through a sanitizer before display)
    """
    annotator = CitationAnnotator(tracer=tracer)
    result = annotator.annotate_document(
        document_markup, citations, references, change_records, full_text=full_text
    )
    return result.markup


def summarize(
    citations: Sequence[Citation],
    references: Optional[Sequence[ReferenceEntry]] = None,
    change_records: Optional[Sequence[ChangeRecord]] = None,
) -> CitationSummary:
    """
    Count unmatched and orphaned citations for UI badges.

    Args:
        citations: Detected citations
        references: Current reference list
        change_records: Pending change records

    Returns:
        CitationSummary
    """
    return CitationAnnotator().summarize(citations, references, change_records)
