"""Tests for ChangeResolver."""
import pytest

from citemark.core.annotation.change_resolver import ChangeResolver
from citemark.core.models.citation import ChangeRecord, ChangeType, Citation


@pytest.fixture
def renumber():
    return ChangeRecord(
        citation_id="c1",
        old_number=3,
        new_number=2,
        old_text="[3]",
        new_text="[2]",
        change_type=ChangeType.RENUMBER,
    )


class TestResolve:
    """Test ChangeResolver.resolve()"""

    def test_match_by_citation_id(self, renumber):
        resolver = ChangeResolver([renumber])
        assert resolver.resolve(Citation("c1", "[9]")) is renumber

    def test_match_by_new_text(self, renumber):
        resolver = ChangeResolver([renumber])
        assert resolver.resolve(Citation("other", "[2]")) is renumber

    def test_match_by_old_text(self, renumber):
        resolver = ChangeResolver([renumber])
        assert resolver.resolve(Citation("other", "[3]")) is renumber

    def test_id_beats_text(self, renumber):
        by_id = ChangeRecord(citation_id="c7", old_text="[7]", new_text="[6]")
        resolver = ChangeResolver([renumber, by_id])

        assert resolver.resolve(Citation("c7", "[2]")) is by_id

    def test_new_text_beats_old_text(self):
        old = ChangeRecord(citation_id="a", old_text="[4]", new_text="[5]")
        new = ChangeRecord(citation_id="b", old_text="[3]", new_text="[4]")
        resolver = ChangeResolver([old, new])

        assert resolver.resolve(Citation("x", "[4]")) is new

    def test_first_record_wins_within_tier(self):
        first = ChangeRecord(citation_id="a", old_text="[1]", new_text="[2]")
        second = ChangeRecord(citation_id="b", old_text="[9]", new_text="[2]")
        resolver = ChangeResolver([first, second])

        assert resolver.resolve(Citation("x", "[2]")) is first

    def test_no_match(self, renumber):
        resolver = ChangeResolver([renumber])
        assert resolver.resolve(Citation("x", "[8]")) is None

    def test_no_changes(self):
        assert ChangeResolver(None).resolve(Citation("c1", "[1]")) is None


class TestDeletions:
    """Test ChangeResolver.deletions()"""

    def test_deleted_type_and_unchanged_text(self, renumber):
        typed = ChangeRecord(citation_id="d1", old_number=5, old_text="[5]", change_type=ChangeType.DELETED)
        implicit = ChangeRecord(citation_id="d2", old_number=4, new_number=None, old_text="[4]", new_text="[4]")
        resolver = ChangeResolver([renumber, typed, implicit])

        assert resolver.deletions() == [typed, implicit]

    def test_changes_keeps_supplied_order(self, renumber):
        other = ChangeRecord(citation_id="c2")
        resolver = ChangeResolver([renumber, other])
        assert resolver.changes == [renumber, other]
