"""Post-processor base classes."""

from __future__ import annotations

from notranslate.models import ProcessedResult, TranslationRecord


class BasePostProcessor:
    def process(self, record: TranslationRecord, language_id: str) -> ProcessedResult:
        raise NotImplementedError
