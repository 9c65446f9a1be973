"""Tests for VariantIndex and ClaimedSpans."""
from citemark.core.annotation.variant_index import ClaimedSpans, VariantIndex


class TestVariantIndex:
    """Test VariantIndex occurrence lookup"""

    def test_finds_every_occurrence(self):
        index = VariantIndex(["[1]", "[1,2]"], "a [1] b [1,2] c [1]")

        assert index.occurrences("[1]") == [2, 16]
        assert index.occurrences("[1,2]") == [8]

    def test_overlapping_occurrences(self):
        index = VariantIndex(["aa"], "aaaa")
        assert index.occurrences("aa") == [0, 1, 2]

    def test_patterns_sharing_suffixes(self):
        index = VariantIndex(["he", "she", "hers", "his"], "ushers")

        assert index.occurrences("she") == [1]
        assert index.occurrences("he") == [2]
        assert index.occurrences("hers") == [2]
        assert index.occurrences("his") == []

    def test_matches_str_find(self):
        text = "[3&#8211;5] and [3–5] then [3&ndash;5] and [3–5]"
        patterns = ["[3–5]", "[3&#8211;5]", "[3&ndash;5]", "5]"]
        index = VariantIndex(patterns, text)

        for pattern in patterns:
            expected = [i for i in range(len(text)) if text.startswith(pattern, i)]
            assert index.occurrences(pattern) == expected

    def test_unknown_pattern(self):
        assert VariantIndex(["[1]"], "[1]").occurrences("[2]") == []

    def test_empty_inputs(self):
        assert VariantIndex(["", "[1]"], "").occurrences("[1]") == []
        assert VariantIndex([], "[1]").occurrences("[1]") == []


class TestClaimedSpans:
    """Test ClaimedSpans overlap checks"""

    def test_overlaps(self):
        spans = ClaimedSpans(30)
        spans.claim(5, 10)

        assert not spans.overlaps(0, 5)
        assert not spans.overlaps(10, 12)
        assert spans.overlaps(9, 12)
        assert spans.overlaps(6, 7)
        assert spans.overlaps(0, 6)
        assert spans.overlaps(0, 20)

    def test_claims_in_any_order(self):
        spans = ClaimedSpans(30)
        spans.claim(20, 25)
        spans.claim(0, 3)
        spans.claim(10, 12)

        assert len(spans) == 3
        assert spans.overlaps(11, 13)
        assert not spans.overlaps(3, 10)
        assert not spans.overlaps(12, 20)

    def test_span_past_end_is_clipped(self):
        spans = ClaimedSpans(5)
        spans.claim(3, 10)

        assert spans.overlaps(4, 5)
        assert not spans.overlaps(0, 3)
        assert len(spans) == 1

    def test_many_claims(self):
        spans = ClaimedSpans(30000)
        for start in range(0, 30000, 3):
            spans.claim(start, start + 2)

        assert len(spans) == 10000
        assert not spans.overlaps(29999, 30000)
        assert spans.overlaps(29997, 29998)
