"""Tests for annotation payload schemas."""
import pytest
from pydantic import ValidationError

from citemark.api.schemas import (
    AnnotationRequest,
    AnnotationResponse,
    ChangeRecordPayload,
    CitationPayload,
    ReferencePayload,
)
from citemark.core.models.citation import ChangeType, Citation, ReferenceEntry


class TestCitationPayload:
    """Test CitationPayload"""

    def test_camel_case_payload(self):
        payload = CitationPayload.model_validate({
            "id": "c1",
            "rawText": "[1]",
            "startOffset": 4,
            "endOffset": 7,
            "referenceNumber": 1,
            "isOrphaned": True,
        })

        assert payload.raw_text == "[1]"
        assert payload.reference_number == 1
        assert payload.is_orphaned is True

    def test_snake_case_names_accepted(self):
        payload = CitationPayload(id="c1", raw_text="[1]")
        assert payload.raw_text == "[1]"

    def test_to_domain(self):
        citation = CitationPayload(id="c1", raw_text="[2]", paragraph_number=3, citation_number=2).to_domain()

        assert isinstance(citation, Citation)
        assert citation.raw_text == "[2]"
        assert citation.paragraph_index == 3
        assert citation.citation_number == 2

    def test_negative_offset_rejected(self):
        with pytest.raises(ValidationError):
            CitationPayload(id="c1", raw_text="[1]", start_offset=-1)


class TestReferencePayload:
    """Test ReferencePayload"""

    def test_numeric_year_coerced(self):
        payload = ReferencePayload.model_validate({"id": "r1", "number": 1, "authors": ["Marcus, G."], "year": 2019})
        assert payload.year == "2019"

    def test_to_domain(self):
        ref = ReferencePayload(id="r1", number=1, authors=["Marcus, G."], year="2019").to_domain()

        assert isinstance(ref, ReferenceEntry)
        assert ref.authors == ("Marcus, G.",)

    def test_number_must_be_positive(self):
        with pytest.raises(ValidationError):
            ReferencePayload(id="r1", number=0)


class TestChangeRecordPayload:
    """Test ChangeRecordPayload"""

    def test_camel_case_payload(self):
        payload = ChangeRecordPayload.model_validate({
            "citationId": "c1",
            "oldNumber": 3,
            "newNumber": 4,
            "oldText": "[3]",
            "newText": "[4]",
            "changeType": "renumber",
        })
        change = payload.to_domain()

        assert change.change_type is ChangeType.RENUMBER
        assert change.new_number == 4

    def test_deleted_with_new_number_rejected(self):
        with pytest.raises(ValidationError, match="newNumber"):
            ChangeRecordPayload.model_validate({"citationId": "c1", "newNumber": 2, "changeType": "deleted"})

    def test_deleted_without_new_number(self):
        payload = ChangeRecordPayload.model_validate({"citationId": "c1", "oldNumber": 2, "changeType": "deleted"})
        assert payload.to_domain().is_deletion

    def test_unknown_change_type_rejected(self):
        with pytest.raises(ValidationError):
            ChangeRecordPayload.model_validate({"changeType": "moved"})


class TestAnnotationRequest:
    """Test AnnotationRequest"""

    def test_full_payload(self):
        request = AnnotationRequest.model_validate({
            "fullHtml": "<p>[1]</p>",
            "citations": [{"id": "c1", "rawText": "[1]"}],
            "references": [{"id": "r1", "number": 1}],
            "recentChanges": [{"citationId": "c1", "oldNumber": 2, "newNumber": 1}],
        })

        assert request.full_html == "<p>[1]</p>"
        assert request.sanitize is True
        assert [c.raw_text for c in request.domain_citations()] == ["[1]"]
        assert [r.number for r in request.domain_references()] == [1]
        assert [c.old_number for c in request.domain_changes()] == [2]

    def test_defaults(self):
        request = AnnotationRequest()

        assert request.citations == []
        assert request.domain_changes() == []


class TestAnnotationResponse:
    def test_dumps_camel_case(self):
        data = AnnotationResponse(markup="<p></p>", highlighted_count=2).model_dump(by_alias=True)

        assert data["highlightedCount"] == 2
        assert data["notFound"] == []
        assert data["summary"]["unmatchedCount"] == 0
