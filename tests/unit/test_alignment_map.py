import dataclasses

import pytest

from notranslate.alignment.alignment_map import (
    AlignmentMap,
    parse_char_ranges,
    parse_index_pairs,
)
from notranslate.indices import token_extents


@pytest.mark.unit
def test_alignment_map_index_pairs():
    amap = AlignmentMap.parse("0-0 1-2 1-1", ["a", "b"], ["x", "y", "z"])
    assert amap.targets_for(0) == (0,)
    assert amap.targets_for(1) == (1, 2)
    assert amap.targets_for(5) == ()
    assert 1 in amap
    assert 5 not in amap
    assert len(amap) == 2


@pytest.mark.unit
def test_alignment_map_char_ranges():
    source = ["har", "altså", "været"]
    target = ["has", "thus", "been"]
    amap = AlignmentMap.parse("0:2-0:2 4:8-4:7 10:14-9:12", source, target)
    assert list(amap.pairs()) == [(0, 0), (1, 1), (2, 2)]


@pytest.mark.unit
def test_alignment_map_char_range_spanning_two_targets():
    amap = AlignmentMap.parse("0:1-0:7", ["20"], ["vingt", "et"])
    assert amap.targets_for(0) == (0, 1)


@pytest.mark.unit
def test_alignment_map_char_ranges_follow_adjacent_tokens_in_text():
    source_text = "l'etat est"
    source = ["l'", "etat", "est"]
    target = ["the", "state", "is"]
    amap = AlignmentMap.parse(
        "0:1-0:2 2:5-4:8 7:9-10:11",
        source,
        target,
        source_text=source_text,
        target_text="the state is",
    )
    assert list(amap.pairs()) == [(0, 0), (1, 1), (2, 2)]


@pytest.mark.unit
def test_alignment_map_skips_malformed_entries():
    amap = AlignmentMap.parse("abc 0-x 1:2 0-0", ["a"], ["x"])
    assert list(amap.pairs()) == [(0, 0)]


@pytest.mark.unit
def test_alignment_map_skips_ranges_outside_text():
    amap = AlignmentMap.parse("50:60-0:0 0:0-0:0", ["a", "b"], ["x", "y"])
    assert list(amap.pairs()) == [(0, 0)]


@pytest.mark.unit
def test_alignment_map_blank_is_empty():
    assert AlignmentMap.parse("   ", ["a"], ["x"]).is_empty
    assert AlignmentMap.parse(None, ["a"], ["x"]).is_empty
    assert AlignmentMap.empty().targets_for(0) == ()


@pytest.mark.unit
def test_alignment_map_is_read_only():
    amap = AlignmentMap.from_pairs([(0, 0)])
    with pytest.raises(TypeError):
        amap.links[1] = (1,)
    with pytest.raises(dataclasses.FrozenInstanceError):
        amap.links = {}


@pytest.mark.unit
def test_alignment_map_from_pairs_dedupes_and_drops_negative():
    amap = AlignmentMap.from_pairs([(0, 2), (0, 1), (0, 2), (-1, 0)])
    assert amap.targets_for(0) == (1, 2)
    assert len(amap) == 1


@pytest.mark.unit
def test_parse_helpers_split_encodings():
    raw = "0-0 0:2-0:2 3-4"
    assert parse_index_pairs(raw) == [(0, 0), (3, 4)]
    assert parse_char_ranges(raw) == [((0, 2), (0, 2))]


@pytest.mark.unit
def test_token_extents_with_and_without_text():
    assert token_extents(["a", "bb"]) == [(0, 0), (2, 3)]
    assert token_extents(["l'", "etat"], "l'etat") == [(0, 1), (2, 5)]
