import pytest

from notranslate.indices import next_token_offset
from notranslate.models import ResolvedSpan
from notranslate.processing.span_resolver import resolve_span


@pytest.mark.unit
def test_resolve_span_joins_adjacent_tokens():
    text = "mon nom est l'etat"
    tokens = ["mon", "nom", "est", "l'", "etat"]
    span = resolve_span(text, tokens, 12, len("l'etat"))
    assert span == ResolvedSpan(start=3, token_count=2)
    assert list(span.indices()) == [3, 4]


@pytest.mark.unit
def test_resolve_span_single_token():
    text = "I have 20 apples"
    tokens = ["I", "have", "20", "apples"]
    assert resolve_span(text, tokens, 7, 2) == ResolvedSpan(start=2, token_count=1)


@pytest.mark.unit
def test_resolve_span_across_spaces():
    text = "hello big world today"
    tokens = ["hello", "big", "world", "today"]
    # "big world" without spaces is 8 characters long
    assert resolve_span(text, tokens, 6, 8) == ResolvedSpan(start=1, token_count=2)


@pytest.mark.unit
def test_resolve_span_after_punctuation_token():
    text = "Hello, Paris"
    tokens = ["Hello", ",", "Paris"]
    assert resolve_span(text, tokens, 7, 5) == ResolvedSpan(start=2, token_count=1)


@pytest.mark.unit
def test_resolve_span_mid_token_start_is_none():
    assert resolve_span("hello world", ["hello", "world"], 2, 3) is None


@pytest.mark.unit
def test_resolve_span_empty_match_is_none():
    assert resolve_span("hello world", ["hello", "world"], 0, 0) is None


@pytest.mark.unit
def test_resolve_span_caps_at_last_token():
    assert resolve_span("a b", ["a", "b"], 2, 10) == ResolvedSpan(start=1, token_count=1)


@pytest.mark.unit
def test_next_token_offset():
    assert next_token_offset("l'etat", 0, "l'") == 2
    assert next_token_offset("a b", 0, "a") == 2
    assert next_token_offset("a", 0, "a") == 1
