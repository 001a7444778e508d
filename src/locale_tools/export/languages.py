"""Resolution of language codes to translatable languages."""

from typing import Optional

from ..errors import LanguageNotTranslatableError, UnknownLanguageError
from ..models import SOURCE_LANGCODE, Language
from ..store.ports import ConfigStore, LanguageRegistry


class LanguageResolver:
    """Resolves language codes against the site's language registry."""

    def __init__(self, registry: LanguageRegistry, config: ConfigStore):
        self.registry = registry
        self.config = config

    def is_translatable(self, language: Language) -> bool:
        """Check if interface strings may be translated into a language.

        Locked languages never are; English only when translate_english
        is enabled.
        """
        if language.locked:
            return False
        if language.id != SOURCE_LANGCODE:
            return True
        return bool(self.config.get("translate_english", False))

    def translatable_languages(self) -> list[Language]:
        return [lang for lang in self.registry.get_languages() if self.is_translatable(lang)]

    def resolve(self, langcode: Optional[str]) -> Optional[Language]:
        """Resolve a language code.

        Args:
            langcode: Language code, empty or None for template mode

        Returns:
            The language, or None in template mode

        Raises:
            UnknownLanguageError: If the code is not configured
            LanguageNotTranslatableError: If the language may not be translated
        """
        if not langcode:
            return None

        language = self.registry.get_language(langcode)
        if language is None:
            raise UnknownLanguageError(f"Language code {langcode} is not configured.")

        if not self.is_translatable(language):
            raise LanguageNotTranslatableError(f"Language code {langcode} is not translatable.")

        return language
