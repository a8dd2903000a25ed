"""Substitution Engine - copies source words over their aligned translation.

Both no-translate spans and digit runs go through ``keep_source_word``: every
target token aligned to a source index is replaced by the source token itself.
Alignment gaps and out-of-range target indices leave the target untouched.
"""

from __future__ import annotations

import logging
import re

from notranslate.alignment.alignment_map import AlignmentMap
from notranslate.indices import SourceIndex
from notranslate.models import ResolvedSpan, TranslationRecord

logger = logging.getLogger(__name__)

NUMERIC_PATTERN = re.compile(r"\d+", re.DOTALL)


def keep_source_word(
    record: TranslationRecord,
    alignment: AlignmentMap,
    source_index: SourceIndex,
) -> None:
    if source_index < 0 or source_index >= len(record.source_tokens):
        return
    source_word = record.source_tokens[source_index]
    for target_index in alignment.targets_for(source_index):
        if target_index >= len(record.target_tokens):
            logger.debug(
                f"[Substitution] Target index {target_index} out of range "
                f"({len(record.target_tokens)} tokens)"
            )
            continue
        record.target_tokens[target_index] = source_word


def apply_span(record: TranslationRecord, alignment: AlignmentMap, span: ResolvedSpan) -> None:
    for source_index in span.indices():
        keep_source_word(record, alignment, source_index)


def _find_token(record: TranslationRecord, value: str) -> int:
    for idx, token in enumerate(record.source_tokens):
        if token == value:
            return idx
    return -1


def apply_numeric(record: TranslationRecord, alignment: AlignmentMap) -> None:
    for match in NUMERIC_PATTERN.finditer(record.source_text or ""):
        digits = match.group(0)
        source_index = _find_token(record, digits)
        if source_index < 0:
            # "20%" or "1,000" tokenized as one unit: nothing to restore
            logger.debug(f"[Substitution] No source token equals digit run {digits!r}")
            continue
        keep_source_word(record, alignment, SourceIndex(source_index))
