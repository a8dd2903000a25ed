"""Records passed through the no-translate post-processor."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Set

from notranslate.alignment.alignment_map import AlignmentMap
from notranslate.indices import SourceIndex


@dataclass
class TranslationRecord:
    """One translation request: source/target text, their tokens and the alignment.

    ``target_tokens`` is rewritten in place by substitution. ``alignment`` is
    derived from ``raw_alignment`` when it is not given explicitly.
    """

    source_text: Optional[str]
    target_text: Optional[str]
    source_tokens: List[str] = field(default_factory=list)
    target_tokens: List[str] = field(default_factory=list)
    raw_alignment: str = ""
    alignment: Optional[AlignmentMap] = None
    literal_protected_phrases: Set[str] = field(default_factory=set)

    def __post_init__(self):
        if self.source_tokens is None:
            self.source_tokens = []
        if self.target_tokens is None:
            self.target_tokens = []
        if self.raw_alignment is None:
            self.raw_alignment = ""
        if self.literal_protected_phrases is None:
            self.literal_protected_phrases = set()
        if self.alignment is None:
            self.alignment = AlignmentMap.parse(
                self.raw_alignment,
                self.source_tokens,
                self.target_tokens,
                source_text=self.source_text,
                target_text=self.target_text,
            )

    @property
    def has_alignment(self) -> bool:
        return bool(self.raw_alignment and self.raw_alignment.strip())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TranslationRecord":
        return cls(
            source_text=data.get("source_text"),
            target_text=data.get("target_text"),
            source_tokens=list(data.get("source_tokens") or []),
            target_tokens=list(data.get("target_tokens") or []),
            raw_alignment=str(data.get("raw_alignment") or ""),
            literal_protected_phrases=set(data.get("literal_protected_phrases") or []),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source_text": self.source_text,
            "target_text": self.target_text,
            "source_tokens": list(self.source_tokens),
            "target_tokens": list(self.target_tokens),
            "raw_alignment": self.raw_alignment,
            "literal_protected_phrases": sorted(self.literal_protected_phrases),
        }


@dataclass(frozen=True)
class ResolvedSpan:
    """Contiguous run of source tokens covered by one pattern match."""

    start: SourceIndex
    token_count: int

    def indices(self) -> Iterator[SourceIndex]:
        for offset in range(self.token_count):
            yield SourceIndex(self.start + offset)


@dataclass
class ProcessedResult:
    record: TranslationRecord
    final_text: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "final_text": self.final_text,
            "record": self.record.to_dict(),
        }
