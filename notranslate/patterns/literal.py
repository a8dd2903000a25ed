# <literal>...</literal> markers in source text.

from __future__ import annotations

import re
from typing import Set

LITERAL_TAG_PATTERN = re.compile(r"<literal>(.*?)</literal>", re.IGNORECASE | re.DOTALL)


def extract_literal_phrases(text: str) -> Set[str]:
    """Return the escaped inner text of every literal marker.

    "I like my friend <literal>happy</literal>" -> {"happy"}
    """
    if not text:
        return set()
    phrases = set()
    for match in LITERAL_TAG_PATTERN.finditer(text):
        inner = match.group(1).strip()
        if inner:
            phrases.add(re.escape(inner))
    return phrases


def strip_literal_tags(text: str) -> str:
    if not text:
        return text
    return LITERAL_TAG_PATTERN.sub(lambda m: m.group(1), text)
