# =============================================================================
# app/services/translation_service.py
# =============================================================================
from typing import Optional, Protocol
from app.core.logger import get_module_logger

logger = get_module_logger(__name__, "logs/translation_service.log")

class Translator(Protocol):
    """Anything that can translate text between two language codes"""

    def translate(self, text: str, source_language: str, target_language: str) -> Optional[str]:
        ...

class StubTranslator:
    """
    Placeholder translation provider

    Echoes the input tagged with the language pair. A real provider only has
    to honour the same contract: None for empty input or identical
    languages, and ``source_language="auto"`` must be accepted.
    """

    def translate(self, text: str, source_language: str, target_language: str) -> Optional[str]:
        if not text or not text.strip():
            return None
        if source_language == target_language:
            return None
        return f"[TRANSLATED {source_language} → {target_language}] {text}"

def safe_translate(
    translator: Translator,
    text: str,
    source_language: str,
    target_language: str
) -> Optional[str]:
    """Translate, treating any provider failure as no translation available"""
    try:
        return translator.translate(text, source_language, target_language)
    except Exception as e:
        logger.error(f"Error translating text ({source_language} → {target_language}): {str(e)}")
        return None
