from __future__ import annotations

from core.text_locator import FoldedText, locate, locate_all


def test_empty_query_is_no_match() -> None:
    assert locate("anything at all", "") is None
    assert locate("", "") is None


def test_first_match_preserves_original_casing() -> None:
    highlight = locate("Fix the Parser, then the parser tests", "PARSER")
    assert highlight is not None
    assert highlight.prefix == "Fix the "
    assert highlight.match == "Parser"
    assert highlight.suffix == ", then the parser tests"
    assert highlight.start == 8
    assert highlight.end == 14


def test_no_occurrence_returns_none() -> None:
    assert locate("hello world", "bye") is None


def test_partition_survives_length_changing_lowercase() -> None:
    # "İ".lower() is two code points, which shifts every later offset.
    text = "İstanbul Kebap"
    highlight = locate(text, "kebap")
    assert highlight is not None
    assert highlight.prefix == "İstanbul "
    assert highlight.match == "Kebap"
    assert highlight.prefix + highlight.match + highlight.suffix == text


def test_match_inside_expanded_character_covers_whole_character() -> None:
    highlight = locate("xİy", "i")
    assert highlight is not None
    assert highlight.prefix == "x"
    assert highlight.match == "İ"
    assert highlight.suffix == "y"


def test_multibyte_and_wide_characters() -> None:
    text = "日本語のテキスト with Émoji 🎉 ÉMOJI"
    highlight = locate(text, "émoji")
    assert highlight is not None
    assert highlight.match == "Émoji"
    assert highlight.prefix == "日本語のテキスト with "
    assert highlight.prefix + highlight.match + highlight.suffix == text


def test_greek_final_sigma_in_query_folds_like_the_text() -> None:
    # A whole-string lower() would turn the trailing sigma into a final sigma.
    highlight = locate("ΟΔΟΣ ΟΔΟΣ", "ΟΔΟΣ")
    assert highlight is not None
    assert highlight.match == "ΟΔΟΣ"
    assert highlight.prefix == ""


def test_folded_text_maps_back_to_original_positions() -> None:
    folded = FoldedText("AİB")
    assert folded.folded == "a" + "İ".lower() + "b"
    assert folded.to_original(0, 1) == (0, 1)
    assert folded.to_original(1, 3) == (1, 2)
    assert folded.to_original(3, 4) == (2, 3)


def test_locate_all_returns_non_overlapping_ranges() -> None:
    assert locate_all("aaaa", "aa") == [(0, 2), (2, 4)]
    assert locate_all("Bug bug BUG", "bug") == [(0, 3), (4, 7), (8, 11)]
    assert locate_all("nothing", "x") == []
    assert locate_all("text", "") == []
