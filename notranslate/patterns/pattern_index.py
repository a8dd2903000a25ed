"""Pattern Index - per-language no-translate regex templates.

Each stored pattern carries a capturing group around the span that has to
survive translation. Patterns written without one are wrapped whole:

    "hello world"        -> "(hello world)"
    "mon nom est (.+)"   -> unchanged

The resulting set is read-only once built. Phrases protected for a single
record are merged into a fresh per-call mapping by ``effective_patterns``.
"""

from __future__ import annotations

import logging
import re
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional

from notranslate.errors import ConfigurationError, UnknownLanguageError
from notranslate.patterns.validation import risky_regex_reason, validate_patterns

logger = logging.getLogger(__name__)

MATCH_FLAGS = re.IGNORECASE | re.DOTALL

_HAS_GROUP = re.compile(r"\(.+\)")

# Global inline flags such as "(?i)" must stay at the very start.
_LEADING_FLAGS = re.compile(r"^(?:\(\?[aiLmsux]+\))+")


def _wrap(pattern: str) -> str:
    flags = _LEADING_FLAGS.match(pattern)
    prefix = flags.group(0) if flags else ""
    return f"{prefix}({pattern[len(prefix):]})"


def normalize_pattern(raw: str) -> str:
    """Trim a raw pattern and make sure group 1 exists.

    Leading global flags are kept outside the new group:

        "(?i)hello"          -> "(?i)(hello)"

    Raises ``re.error`` when the pattern, or its wrapped form, does not compile.
    """
    processed = raw.strip()
    if not _HAS_GROUP.search(processed):
        processed = _wrap(processed)
    # "(?:a|b) c" has parentheses but no capturing group
    if re.compile(processed, MATCH_FLAGS).groups == 0:
        processed = _wrap(processed)
        re.compile(processed, MATCH_FLAGS)
    return processed


class NoTranslatePatternSet:
    def __init__(
        self,
        patterns: Mapping[str, FrozenSet[str]],
        compiled: Mapping[str, re.Pattern],
    ):
        self._patterns = MappingProxyType(dict(patterns))
        self._compiled = MappingProxyType(dict(compiled))

    def languages(self) -> List[str]:
        return sorted(self._patterns)

    def patterns_for(self, language_id: str) -> FrozenSet[str]:
        try:
            return self._patterns[language_id]
        except KeyError:
            raise UnknownLanguageError(language_id) from None

    def compiled(self, pattern: str) -> Optional[re.Pattern]:
        return self._compiled.get(pattern)

    def effective_patterns(
        self,
        language_id: str,
        extra_phrases: Optional[Iterable[str]] = None,
    ) -> Dict[str, re.Pattern]:
        """Stored patterns for ``language_id`` plus ``extra_phrases``, compiled.

        The returned dict is new on every call. Extra phrases that fail to
        compile are logged and left out.
        """
        effective: Dict[str, re.Pattern] = {
            pattern: self._compiled[pattern] for pattern in self.patterns_for(language_id)
        }
        for phrase in extra_phrases or ():
            if not isinstance(phrase, str) or not phrase.strip():
                continue
            try:
                normalized = normalize_pattern(phrase)
                if normalized not in effective:
                    effective[normalized] = self._compiled.get(normalized) or re.compile(
                        normalized, MATCH_FLAGS
                    )
            except re.error as e:
                logger.warning(f"[PatternIndex] Skipping literal phrase {phrase!r}: {e}")
        return effective

    def __contains__(self, language_id: object) -> bool:
        return language_id in self._patterns

    def __len__(self) -> int:
        return len(self._patterns)

    def __repr__(self) -> str:
        return f"NoTranslatePatternSet(languages={self.languages()!r})"


def build_pattern_set(patterns: Optional[Mapping[str, List[str]]]) -> NoTranslatePatternSet:
    if not patterns:
        raise ConfigurationError("No-translate patterns must not be empty")

    result = validate_patterns(patterns)
    for warning in result.warnings:
        logger.warning(f"[PatternIndex] {warning}")
    if not result.ok:
        raise ConfigurationError(
            f"Invalid no-translate patterns: {', '.join(result.errors)}"
        )

    processed: Dict[str, FrozenSet[str]] = {}
    compiled: Dict[str, re.Pattern] = {}
    for language_id, raw_patterns in patterns.items():
        normalized_set = set()
        for raw in raw_patterns:
            if not raw.strip():
                continue
            try:
                normalized = normalize_pattern(raw)
                if normalized not in compiled:
                    compiled[normalized] = re.compile(normalized, MATCH_FLAGS)
            except re.error as e:
                raise ConfigurationError(
                    f"Invalid no-translate pattern for {language_id!r}: {raw!r}: {e}"
                ) from e
            reason = risky_regex_reason(normalized)
            if reason:
                logger.warning(f"[PatternIndex] {reason} in pattern: {normalized}")
            normalized_set.add(normalized)
        processed[language_id] = frozenset(normalized_set)
        logger.debug(
            f"[PatternIndex] Indexed {len(normalized_set)} pattern(s) for {language_id!r}"
        )

    return NoTranslatePatternSet(processed, compiled)
