"""Tests for author-year citation parsing."""
import pytest

from citemark.core.annotation.author_year import parse_author_year
from citemark.core.models.citation import ReferenceEntry


@pytest.fixture
def references():
    return [
        ReferenceEntry("r1", 1, ("Marcus, Gary", "Davis, Ernest"), "2019"),
        ReferenceEntry("r2", 2, ("Tom Brown",), "2020"),
        ReferenceEntry("r3", 3, ("Smith, Jane",), "2020"),
    ]


class TestParseAuthorYear:
    """Test parse_author_year()"""

    def test_two_authors_with_ampersand(self, references):
        matches = parse_author_year("(Marcus & Davis, 2019)", references)

        assert len(matches) == 1
        assert matches[0].author == "Marcus"
        assert matches[0].year == "2019"
        assert matches[0].ref_number == 1
        assert matches[0].matched_span == "Marcus & Davis, 2019"

    def test_two_authors_with_and(self, references):
        matches = parse_author_year("Marcus and Davis, 2019", references)
        assert matches[0].ref_number == 1

    def test_second_author_matches(self, references):
        matches = parse_author_year("(Davis, 2019)", references)
        assert matches[0].ref_number == 1

    def test_et_al(self, references):
        matches = parse_author_year("(Brown et al., 2020)", references)

        assert matches[0].ref_number == 2
        assert matches[0].matched_span == "Brown et al., 2020"

    def test_multiple_segments(self, references):
        matches = parse_author_year("(Brown et al., 2020; Smith, 2020)", references)
        assert [m.ref_number for m in matches] == [2, 3]

    def test_narrative_year_in_parentheses(self, references):
        matches = parse_author_year("Smith (2020)", references)

        assert matches[0].year == "2020"
        assert matches[0].ref_number == 3
        assert matches[0].matched_span == "Smith (2020)"

    def test_year_mismatch_is_unresolved(self, references):
        matches = parse_author_year("(Smith, 2021)", references)

        assert len(matches) == 1
        assert matches[0].ref_number is None

    def test_name_match_is_case_insensitive(self, references):
        matches = parse_author_year("(marcus, 2019)", references)
        assert matches[0].ref_number == 1

    def test_first_reference_in_list_order_wins(self):
        refs = [
            ReferenceEntry("a", 4, ("Lee, A.",), "2018"),
            ReferenceEntry("b", 5, ("Lee, B.",), "2018"),
        ]
        assert parse_author_year("(Lee, 2018)", refs)[0].ref_number == 4

    def test_surnames_containing_and_are_not_split(self):
        refs = [
            ReferenceEntry("r1", 1, ("Alexander, John",), "2020"),
            ReferenceEntry("r2", 2, ("Brandon, Kate",), "2021"),
        ]

        first = parse_author_year("(Alexander, 2020)", refs)
        second = parse_author_year("(Brandon, 2021)", refs)

        assert first[0].author == "Alexander"
        assert first[0].ref_number == 1
        assert second[0].author == "Brandon"
        assert second[0].ref_number == 2

    def test_no_shared_author_is_unresolved(self):
        refs = [ReferenceEntry("r1", 1, ("Marcus, Gary",), "2019")]
        matches = parse_author_year("Davis & Lee, 2019", refs)

        assert len(matches) == 1
        assert matches[0].ref_number is None

    def test_numeric_citation_yields_nothing(self, references):
        assert parse_author_year("[1]", references) == []

    def test_empty_text(self, references):
        assert parse_author_year("", references) == []
