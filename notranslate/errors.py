"""Error types raised by the no-translate post-processor."""

from __future__ import annotations


class PostProcessorError(RuntimeError):
    pass


class ConfigurationError(PostProcessorError, ValueError):
    """Pattern configuration is missing, empty or does not compile."""


class InvalidArgumentError(PostProcessorError, ValueError):
    """A record, or one of its required text fields, is missing."""


class UnknownLanguageError(PostProcessorError, KeyError):
    """No patterns were configured for the requested language."""

    def __init__(self, language_id: str):
        super().__init__(f"No no-translate patterns configured for language: {language_id}")
        self.language_id = language_id

    def __str__(self) -> str:
        return str(self.args[0])
