"""Tests for the translation gateway contract."""

import pytest

from app.services.translation_service import StubTranslator, safe_translate


class TestStubTranslator:

    @pytest.mark.parametrize("text", ["hello", "", "xin chào"])
    def test_same_language_is_no_op(self, text):
        assert StubTranslator().translate(text, "en", "en") is None

    @pytest.mark.parametrize("text", ["", "   ", "\n\t"])
    def test_empty_text_is_no_op(self, text):
        assert StubTranslator().translate(text, "auto", "en") is None

    def test_auto_source_is_accepted(self):
        assert StubTranslator().translate("bonjour", "auto", "en") == "[TRANSLATED auto → en] bonjour"


class TestSafeTranslate:

    def test_provider_failure_means_no_translation(self):
        class Broken:
            def translate(self, text, source_language, target_language):
                raise ConnectionError("provider down")

        assert safe_translate(Broken(), "hello", "auto", "en") is None

    def test_passes_result_through(self):
        assert safe_translate(StubTranslator(), "hi", "vi", "en") == "[TRANSLATED vi → en] hi"
