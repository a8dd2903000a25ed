# Character-offset match -> source token span.

from __future__ import annotations

from typing import Optional, Sequence

from notranslate.indices import CharOffset, SourceIndex, next_token_offset
from notranslate.models import ResolvedSpan


def resolve_span(
    source_text: str,
    source_tokens: Sequence[str],
    match_start: CharOffset,
    match_length: int,
) -> Optional[ResolvedSpan]:
    """
    Find the run of source tokens covering a match.

    Args:
        source_text: The raw source sentence
        source_tokens: Its tokens, in order
        match_start: Character offset where the match starts
        match_length: Length of the matched text with spaces removed

    Returns:
        The covered span, or None when no token starts at ``match_start``

    Example:
        "mon nom est l'etat", tokens ["mon", "nom", "est", "l'", "etat"],
        match "l'etat" at 12 (length 6) -> ResolvedSpan(start=3, token_count=2)
    """
    if match_length <= 0:
        return None

    start: Optional[SourceIndex] = None
    token_count = 1
    covered = 0
    cursor = CharOffset(0)

    for idx, token in enumerate(source_tokens):
        if start is None and cursor == match_start:
            start = SourceIndex(idx)

        if start is not None:
            if covered + len(token) >= match_length:
                break
            token_count += 1
            covered += len(token)

        cursor = next_token_offset(source_text, cursor, token)

    if start is None:
        return None
    return ResolvedSpan(start=start, token_count=min(token_count, len(source_tokens) - start))
