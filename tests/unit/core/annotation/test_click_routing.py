"""Tests for the click-routing contract."""
from citemark.core.annotation.click_routing import reference_anchor_ids, resolve_click_target


class TestResolveClickTarget:
    """Test resolve_click_target()"""

    def test_link_span(self):
        assert resolve_click_target("span", {"class": "citation-link", "data-ref": "3"}) == 3

    def test_link_span_with_extra_classes(self):
        attrs = {"class": "citation-link track-change-addition", "data-ref": "4"}
        assert resolve_click_target("span", attrs) == 4

    def test_legacy_mark(self):
        assert resolve_click_target("MARK", {"data-ref": "2"}) == 2

    def test_span_without_link_class(self):
        assert resolve_click_target("span", {"class": "other", "data-ref": "3"}) is None

    def test_missing_attribute(self):
        assert resolve_click_target("span", {"class": "citation-link"}) is None

    def test_invalid_values(self):
        assert resolve_click_target("span", {"class": "citation-link", "data-ref": "abc"}) is None
        assert resolve_click_target("span", {"class": "citation-link", "data-ref": "0"}) is None


class TestReferenceAnchorIds:
    def test_anchor_ids(self):
        assert reference_anchor_ids(4) == ["ref-4", "reference-4"]
