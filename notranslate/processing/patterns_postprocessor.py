"""Patterns Post-Processor - keeps numbers and no-translate spans verbatim.

Example:
    pattern "mon nom est (.+)", source "mon nom est l'etat"
    translator output "my name is the state"
    post-processed    "my name is l' etat"
"""

from __future__ import annotations

import logging
import re
from typing import List, Mapping, Optional, Union

from notranslate.alignment.alignment_map import AlignmentMap
from notranslate.errors import InvalidArgumentError
from notranslate.indices import CharOffset
from notranslate.models import ProcessedResult, TranslationRecord
from notranslate.patterns.pattern_index import NoTranslatePatternSet, build_pattern_set
from notranslate.processing.base import BasePostProcessor
from notranslate.processing.span_resolver import resolve_span
from notranslate.processing.substitution import apply_numeric, apply_span

logger = logging.getLogger(__name__)


def _validate_record(record: Optional[TranslationRecord]) -> None:
    if record is None:
        raise InvalidArgumentError("record must not be None")
    if record.source_text is None:
        raise InvalidArgumentError("record.source_text must not be None")
    if record.target_text is None:
        raise InvalidArgumentError("record.target_text must not be None")


class PatternsPostProcessor(BasePostProcessor):
    """
    Restores source words the translator should have left alone.

    Two kinds of spans are restored through the record's alignment:
    - matches of the configured no-translate patterns (group 1 of each match),
      plus the record's literal-protected phrases;
    - digit runs that form a whole source token.

    Example usage:
        processor = PatternsPostProcessor({"fr": ["mon nom est (.+)"]})
        result = processor.process(record, "fr")
        result.final_text
    """

    def __init__(
        self,
        patterns: Union[Mapping[str, List[str]], NoTranslatePatternSet, None],
    ):
        if isinstance(patterns, NoTranslatePatternSet):
            self.pattern_set = patterns
        else:
            self.pattern_set = build_pattern_set(patterns)

    @classmethod
    def from_pattern_set(cls, pattern_set: NoTranslatePatternSet) -> "PatternsPostProcessor":
        return cls(pattern_set)

    def process(self, record: TranslationRecord, language_id: str) -> ProcessedResult:
        _validate_record(record)

        effective = self.pattern_set.effective_patterns(
            language_id, record.literal_protected_phrases
        )

        if not record.has_alignment:
            logger.debug("[PatternsPostProcessor] No alignment, keeping target text as is")
            return ProcessedResult(record=record, final_text=record.target_text)

        alignment = record.alignment
        for pattern in sorted(effective):
            match = effective[pattern].search(record.source_text)
            if not match:
                continue
            self._substitute_match(record, alignment, match, pattern)

        apply_numeric(record, alignment)

        final_text = " ".join(record.target_tokens)
        return ProcessedResult(record=record, final_text=final_text)

    def _substitute_match(
        self,
        record: TranslationRecord,
        alignment: AlignmentMap,
        match: re.Match,
        pattern: str,
    ) -> None:
        group_start = match.start(1)
        group_value = match.group(1)
        if group_start < 0 or not group_value:
            logger.debug(f"[PatternsPostProcessor] Empty capture for pattern: {pattern}")
            return

        span = resolve_span(
            record.source_text,
            record.source_tokens,
            CharOffset(group_start),
            len(group_value.replace(" ", "")),
        )
        if span is None:
            logger.debug(
                f"[PatternsPostProcessor] Match at {group_start} does not start on a token: {pattern}"
            )
            return

        logger.debug(
            f"[PatternsPostProcessor] Keeping source tokens "
            f"{span.start}..{span.start + span.token_count - 1} for pattern: {pattern}"
        )
        apply_span(record, alignment, span)
