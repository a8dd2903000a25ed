"""Source-to-target token alignment decoded from a raw alignment string.

Entries are separated by whitespace and come in two encodings:

- character ranges ``srcStart:srcEnd-tgtStart:tgtEnd`` with inclusive ends, as
  returned by the Microsoft Translator alignment projection
  (e.g. ``"0:2-0:2 4:8-4:7"``);
- token index pairs ``srcIndex-tgtIndex`` (Pharaoh / GIZA++ style).

Character ranges are resolved against the sentence text when it is given (the
token lists joined by single spaces otherwise), so a range maps to every token
whose extent it overlaps.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

from notranslate.indices import SourceIndex, TargetIndex, token_extents

logger = logging.getLogger(__name__)

CharRange = Tuple[int, int]


def _overlapping(extents: Sequence[CharRange], start: int, end: int) -> List[int]:
    return [
        idx
        for idx, (token_start, token_end) in enumerate(extents)
        if token_end >= token_start and token_start <= end and token_end >= start
    ]


def _parse_char_range(value: str) -> Optional[CharRange]:
    start_raw, end_raw = value.split(":")
    start, end = int(start_raw), int(end_raw)
    if start < 0 or end < start:
        return None
    return start, end


def parse_char_ranges(raw: str) -> List[Tuple[CharRange, CharRange]]:
    """Parse ``"0:2-0:2 4:8-4:7"`` into ``[((0, 2), (0, 2)), ((4, 8), (4, 7))]``.

    Index-pair entries and malformed entries are skipped.
    """
    mappings: List[Tuple[CharRange, CharRange]] = []
    for entry in (raw or "").split():
        if ":" not in entry:
            continue
        try:
            src_part, tgt_part = entry.split("-")
            src_range = _parse_char_range(src_part)
            tgt_range = _parse_char_range(tgt_part)
        except ValueError:
            logger.debug(f"[AlignmentMap] Skipping malformed alignment entry: {entry!r}")
            continue
        if src_range is None or tgt_range is None:
            logger.debug(f"[AlignmentMap] Skipping inverted alignment entry: {entry!r}")
            continue
        mappings.append((src_range, tgt_range))
    return mappings


def parse_index_pairs(raw: str) -> List[Tuple[int, int]]:
    """Parse ``"0-0 1-2"`` into ``[(0, 0), (1, 2)]``, skipping anything else."""
    pairs: List[Tuple[int, int]] = []
    for entry in (raw or "").split():
        if ":" in entry:
            continue
        try:
            src_raw, tgt_raw = entry.split("-")
            pairs.append((int(src_raw), int(tgt_raw)))
        except ValueError:
            logger.debug(f"[AlignmentMap] Skipping malformed alignment entry: {entry!r}")
    return pairs


@dataclass(frozen=True)
class AlignmentMap:
    """Immutable lookup from a source token index to its aligned target indices."""

    links: Mapping[SourceIndex, Tuple[TargetIndex, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def empty(cls) -> "AlignmentMap":
        return cls()

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[int, int]]) -> "AlignmentMap":
        collected: Dict[SourceIndex, List[TargetIndex]] = {}
        for src, tgt in pairs:
            if src < 0 or tgt < 0:
                continue
            bucket = collected.setdefault(SourceIndex(src), [])
            if tgt not in bucket:
                bucket.append(TargetIndex(tgt))
        frozen = {src: tuple(sorted(tgts)) for src, tgts in collected.items()}
        return cls(MappingProxyType(frozen))

    @classmethod
    def parse(
        cls,
        raw: Optional[str],
        source_tokens: Sequence[str],
        target_tokens: Sequence[str],
        source_text: Optional[str] = None,
        target_text: Optional[str] = None,
    ) -> "AlignmentMap":
        if not raw or not raw.strip():
            return cls.empty()

        pairs: List[Tuple[int, int]] = list(parse_index_pairs(raw))

        char_ranges = parse_char_ranges(raw)
        if char_ranges:
            src_extents = token_extents(source_tokens, source_text)
            tgt_extents = token_extents(target_tokens, target_text)
            for (src_start, src_end), (tgt_start, tgt_end) in char_ranges:
                src_hits = _overlapping(src_extents, src_start, src_end)
                tgt_hits = _overlapping(tgt_extents, tgt_start, tgt_end)
                if not src_hits or not tgt_hits:
                    logger.debug(
                        f"[AlignmentMap] Range {src_start}:{src_end}-{tgt_start}:{tgt_end} "
                        "falls outside the token text"
                    )
                    continue
                pairs.extend((s, t) for s in src_hits for t in tgt_hits)

        return cls.from_pairs(pairs)

    def targets_for(self, source_index: SourceIndex) -> Tuple[TargetIndex, ...]:
        return self.links.get(source_index, ())

    def pairs(self) -> Iterator[Tuple[SourceIndex, TargetIndex]]:
        for src in sorted(self.links):
            for tgt in self.links[src]:
                yield src, tgt

    @property
    def is_empty(self) -> bool:
        return not self.links

    def __contains__(self, source_index: object) -> bool:
        return source_index in self.links

    def __len__(self) -> int:
        return len(self.links)
