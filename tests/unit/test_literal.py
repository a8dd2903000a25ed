import pytest

from notranslate.patterns.literal import extract_literal_phrases, strip_literal_tags


@pytest.mark.unit
def test_extract_literal_phrase():
    assert extract_literal_phrases("I like my friend <literal>happy</literal>") == {"happy"}


@pytest.mark.unit
def test_extract_literal_phrases_escapes_regex_characters():
    text = "<literal>C++</literal> and <literal>a.b</literal>"
    assert extract_literal_phrases(text) == {r"C\+\+", r"a\.b"}


@pytest.mark.unit
def test_extract_literal_phrases_ignores_empty_tags_and_case():
    assert extract_literal_phrases("<literal> </literal>") == set()
    assert extract_literal_phrases("<LITERAL>x</LITERAL>") == {"x"}
    assert extract_literal_phrases("") == set()


@pytest.mark.unit
def test_strip_literal_tags_keeps_inner_text():
    assert strip_literal_tags("I like <literal>happy</literal> days") == "I like happy days"
    assert strip_literal_tags("") == ""
