"""
API Pydantic models for citation annotation.

Upstream services send camelCase JSON (rawText, referenceNumber, ...).
These models validate it and convert to the frozen domain models.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from citemark.core.models.citation import ChangeRecord, ChangeType, Citation, ReferenceEntry


class CamelModel(BaseModel):
    """Base model accepting camelCase or snake_case field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CitationPayload(CamelModel):
    """In-text citation from the detection service"""

    id: str
    raw_text: str = Field("", description="Exact citation text as it appears in the document")
    paragraph_index: Optional[int] = None
    paragraph_number: Optional[int] = None
    start_offset: Optional[int] = Field(None, ge=0)
    end_offset: Optional[int] = Field(None, ge=0)
    citation_number: Optional[int] = None
    reference_number: Optional[int] = None
    is_orphaned: bool = False

    def to_domain(self) -> Citation:
        return Citation(
            id=self.id,
            raw_text=self.raw_text,
            paragraph_index=(
                self.paragraph_index if self.paragraph_index is not None else self.paragraph_number
            ),
            start_offset=self.start_offset,
            end_offset=self.end_offset,
            citation_number=self.citation_number,
            reference_number=self.reference_number,
            is_orphaned=self.is_orphaned,
        )


class ReferencePayload(CamelModel):
    """Bibliography entry from the reference list service"""

    id: str
    number: int = Field(..., ge=1, description="1-indexed display number")
    authors: List[str] = Field(default_factory=list)
    year: Optional[str] = None

    @field_validator("year", mode="before")
    @classmethod
    def coerce_year(cls, v):
        # Some upstream payloads send the year as a number
        if isinstance(v, int):
            return str(v)
        return v

    def to_domain(self) -> ReferenceEntry:
        return ReferenceEntry(
            id=self.id,
            number=self.number,
            authors=tuple(self.authors),
            year=self.year,
        )


class ChangeRecordPayload(CamelModel):
    """Recent change to a citation"""

    citation_id: str = ""
    old_number: Optional[int] = None
    new_number: Optional[int] = None
    old_text: Optional[str] = None
    new_text: Optional[str] = None
    change_type: ChangeType = ChangeType.UNCHANGED

    @model_validator(mode="after")
    def check_deleted_has_no_new_number(self):
        if self.change_type == ChangeType.DELETED and self.new_number is not None:
            raise ValueError("deleted change records must not carry a newNumber")
        return self

    def to_domain(self) -> ChangeRecord:
        return ChangeRecord(
            citation_id=self.citation_id,
            old_number=self.old_number,
            new_number=self.new_number,
            old_text=self.old_text,
            new_text=self.new_text,
            change_type=self.change_type,
        )


class AnnotationRequest(CamelModel):
    """Request model for document annotation"""

    full_html: Optional[str] = Field(None, description="Rendered document body")
    full_text: Optional[str] = Field(None, description="Plain-text rendering")
    citations: List[CitationPayload] = Field(default_factory=list)
    references: List[ReferencePayload] = Field(default_factory=list)
    recent_changes: List[ChangeRecordPayload] = Field(default_factory=list)
    sanitize: bool = Field(True, description="Run the result through the HTML sanitizer")

    def domain_citations(self) -> List[Citation]:
        return [c.to_domain() for c in self.citations]

    def domain_references(self) -> List[ReferenceEntry]:
        return [r.to_domain() for r in self.references]

    def domain_changes(self) -> List[ChangeRecord]:
        return [c.to_domain() for c in self.recent_changes]


class CitationSummaryResponse(CamelModel):
    """Unmatched and orphaned counts for UI badges"""

    unmatched_count: int = 0
    orphaned_count: int = 0
    unmatched_texts: List[str] = Field(default_factory=list)
    orphaned_texts: List[str] = Field(default_factory=list)


class AnnotationResponse(CamelModel):
    """Response model for document annotation"""

    markup: str
    highlighted_count: int = 0
    not_found: List[str] = Field(default_factory=list)
    summary: CitationSummaryResponse = Field(default_factory=CitationSummaryResponse)
