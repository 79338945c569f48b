"""Test grapheme segmentation and display widths."""

from cellpad.unicode import (cluster_index_at, cluster_width, display_width, grapheme_boundaries,
                             graphemes, visible_span)


def test_boundaries_of_empty_and_ascii():
    assert grapheme_boundaries("") == [0]
    assert grapheme_boundaries("abc") == [0, 1, 2, 3]


def test_combining_mark_joins_base():
    assert grapheme_boundaries("e\u0301x") == [0, 2, 3]
    assert graphemes("e\u0301x") == ["e\u0301", "x"]


def test_regional_indicators_pair_into_flags():
    flags = "\U0001F1EF\U0001F1F5\U0001F1FA\U0001F1F8"
    assert grapheme_boundaries(flags) == [0, 2, 4]


def test_zwj_sequence_is_one_cluster():
    family = "\U0001F468\u200d\U0001F469\u200d\U0001F467"
    assert grapheme_boundaries(family) == [0, 5]


def test_skin_tone_modifier_joins_emoji():
    assert graphemes("\U0001F44D\U0001F3FDa") == ["\U0001F44D\U0001F3FD", "a"]


def test_hangul_jamo_sequence_is_one_cluster():
    # Leading consonant, vowel, trailing consonant
    assert graphemes("\u1100\u1161\u11a8a") == ["\u1100\u1161\u11a8", "a"]
    assert display_width("\u1100\u1161\u11a8") == 2


def test_indic_conjunct_is_one_cluster():
    # KA + VIRAMA + SSA
    assert graphemes("\u0915\u094d\u0937a") == ["\u0915\u094d\u0937", "a"]


def test_zwj_between_letters_does_not_join_them():
    assert graphemes("a\u200db") == ["a\u200d", "b"]
    assert display_width("a\u200db") == 2


def test_crlf_is_one_cluster():
    assert grapheme_boundaries("a\r\nb") == [0, 1, 3, 4]


def test_display_widths():
    assert display_width("abc") == 3
    assert display_width("漢字") == 4
    assert display_width("e\u0301") == 1
    assert display_width("\t") == 1
    assert cluster_width("\x01") == 0
    assert cluster_width("") == 0


def test_emoji_presentation_selector_widens():
    assert cluster_width("\u2764\ufe0f") == 2


def test_cluster_index_at():
    bounds = grapheme_boundaries("e\u0301xy")
    assert cluster_index_at(bounds, 0) == 0
    assert cluster_index_at(bounds, 1) == 0
    assert cluster_index_at(bounds, 2) == 1
    assert cluster_index_at(bounds, 4) == 3


def test_visible_span_ascii():
    assert visible_span("abcdef", 2, 3) == (2, 5)


def test_visible_span_wide_characters():
    text = "漢字ab"
    start, end = visible_span(text, 2, 3)
    assert text[start:end] == "字a"


def test_visible_span_keeps_clusters_whole():
    assert visible_span("e\u0301x", 0, 1) == (0, 2)


def test_visible_span_past_end_of_line():
    assert visible_span("ab", 5, 10) == (2, 2)
