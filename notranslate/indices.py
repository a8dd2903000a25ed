# Index kinds used across matching, span resolution and alignment.

from __future__ import annotations

from typing import List, NewType, Optional, Sequence, Tuple

# Character offset into a raw sentence.
CharOffset = NewType("CharOffset", int)
# Position in the source token list.
SourceIndex = NewType("SourceIndex", int)
# Position in the target token list.
TargetIndex = NewType("TargetIndex", int)


def next_token_offset(text: str, cursor: CharOffset, token: str) -> CharOffset:
    """Offset where the token after ``token`` starts.

    Tokens are separated by one space or by nothing at all ("l'" + "etat").
    Assumes the text holds no consecutive whitespace.
    """
    end = cursor + len(token)
    if end < len(text) and text[end] == " ":
        return CharOffset(end + 1)
    return CharOffset(end)


def token_extents(tokens: Sequence[str], text: Optional[str] = None) -> List[Tuple[int, int]]:
    """Inclusive character extent of every token within ``text``.

    Without ``text`` the tokens are taken as joined by single spaces.
    """
    if text is None:
        text = " ".join(tokens)
    extents: List[Tuple[int, int]] = []
    cursor = CharOffset(0)
    for token in tokens:
        extents.append((cursor, cursor + len(token) - 1))
        cursor = next_token_offset(text, cursor, token)
    return extents
