"""Tests for sanitizer port interface."""
import pytest
from citemark.core.ports.sanitizer import SanitizerPort


class TestSanitizerPortInterface:
    def test_cannot_instantiate_abstract_port(self):
        with pytest.raises(TypeError):
            SanitizerPort()

    def test_concrete_implementation_works(self):
        class MockSanitizer(SanitizerPort):
            def sanitize(self, markup: str) -> str:
                return markup.replace("<script>", "")

        sanitizer = MockSanitizer()
        assert sanitizer.sanitize("<script>x") == "x"

    def test_missing_method_is_abstract(self):
        class Incomplete(SanitizerPort):
            pass

        with pytest.raises(TypeError):
            Incomplete()
