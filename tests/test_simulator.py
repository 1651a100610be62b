"""Tests for the typing simulator.

Tests cover:
- mode detection and text preprocessing per mode
- direct, flick, transform and unresolved characters
- greedy multi-character matching and its tie-break
- romanized fallback to kana input
- character counting and determinism
"""

import logging

import pytest

from keyboard_sim.character_maps import build_character_maps
from keyboard_sim.simulator import (
    TypingSimulator, detect_evaluation_mode, preprocess_text, simulate,
    KANA, ROMANIZED, LATIN,
)
from keyboard_sim.corpus import DEFAULT_CORPORA
from keyboard_sim.text_utils import LINE_BREAKS
from conftest import custom_key_dict, system_key_dict


class TestModeDetection:
    def test_roman2kana(self, roman_keyboard):
        assert detect_evaluation_mode(roman_keyboard) == ROMANIZED

    def test_japanese(self, flick_keyboard):
        assert detect_evaluation_mode(flick_keyboard) == KANA

    def test_other(self, ab_keyboard):
        assert detect_evaluation_mode(ab_keyboard) == LATIN


class TestPreprocess:
    def test_kana_folds_katakana(self, flick_keyboard):
        maps = build_character_maps(flick_keyboard)
        assert preprocess_text(maps, KANA, "タチ") == "たち"

    def test_latin_lowercases(self, ab_keyboard):
        assert preprocess_text(build_character_maps(ab_keyboard), LATIN, "AbC") == "abc"

    def test_romanized_transliterates(self, roman_keyboard):
        maps = build_character_maps(roman_keyboard)
        assert preprocess_text(maps, ROMANIZED, "カタ") == "kata"

    def test_default_corpus(self, ab_keyboard):
        maps = build_character_maps(ab_keyboard)
        assert preprocess_text(maps, LATIN, None) == DEFAULT_CORPORA[LATIN].lower()
        assert preprocess_text(maps, LATIN, "") == DEFAULT_CORPORA[LATIN].lower()

    def test_unknown_mode(self, ab_keyboard):
        with pytest.raises(ValueError):
            preprocess_text(build_character_maps(ab_keyboard), "morse", "ab")


class TestScenarios:
    def test_direct_keys(self, ab_keyboard):
        result = simulate(ab_keyboard, LATIN, "ab")
        assert result.total_chars == 2
        assert result.mapped_chars == 2
        assert [(hit.key_index, hit.character) for hit in result.key_hits] == [(0, "a"), (1, "b")]
        assert result.frequency == {(0, None): 1, (1, None): 1}
        assert result.coverage == 1.0

    def test_flick_zone_recorded(self, flick_keyboard):
        result = simulate(flick_keyboard, KANA, "たち")
        assert [(hit.key_index, hit.zone) for hit in result.key_hits] == [(0, None), (0, "right")]
        assert result.frequency == {(0, None): 1, (0, "right"): 1}

    def test_transform_path(self, flick_keyboard):
        result = simulate(flick_keyboard, KANA, "が")
        assert [(hit.key_index, hit.character) for hit in result.key_hits] == [(1, "か"), (2, "が")]
        assert result.total_chars == 1
        assert result.mapped_chars == 1

    def test_transform_from_flick_base(self, flick_keyboard):
        result = simulate(flick_keyboard, KANA, "っ")
        assert [(hit.key_index, hit.zone) for hit in result.key_hits] == [(0, "top"), (2, None)]

    def test_unresolved_character(self, ab_keyboard):
        result = simulate(ab_keyboard, LATIN, "xaxy")
        assert result.total_chars == 4
        assert result.mapped_chars == 1
        assert result.unresolved == {"x": 2, "y": 1}
        assert result.unresolved_chars == {"x", "y"}
        assert len(result.key_hits) == 1

    def test_decorated_without_transform_key_unresolved(self, make_keyboard):
        definition = make_keyboard([custom_key_dict(0, 0, "か")], language="ja_JP")
        result = simulate(definition, KANA, "が")
        assert result.unresolved_chars == {"が"}
        assert result.key_hits == []

    def test_romanized_fallback_to_kana(self, make_keyboard, caplog):
        definition = make_keyboard([custom_key_dict(0, 0, "あ")], input_style="roman2kana")
        with caplog.at_level(logging.INFO, logger="keyboard_sim.simulator"):
            result = simulate(definition, ROMANIZED, "あ")
        assert result.mapped_chars == 1
        assert result.mode == ROMANIZED
        assert "kana input instead" in caplog.text

    def test_romanized_input(self, roman_keyboard):
        result = simulate(roman_keyboard, ROMANIZED, "か")
        assert [hit.character for hit in result.key_hits] == ["k", "a"]
        assert result.total_chars == 2
        assert result.text_length == 2


class TestGreedyMatching:
    def test_multi_wins_on_tie(self, make_keyboard):
        definition = make_keyboard([
            custom_key_dict(0, 0, "a"),
            custom_key_dict(1, 0, "b", tables=[{"ab": "ab"}]),
        ])
        result = simulate(definition, LATIN, "ab")
        assert [hit.character for hit in result.key_hits] == ["ab", "ab"]
        assert result.total_chars == 2
        assert result.mapped_chars == 2

    def test_costlier_multi_rejected(self, make_keyboard):
        definition = make_keyboard([
            custom_key_dict(0, 0, "a"),
            custom_key_dict(1, 0, "b"),
            custom_key_dict(2, 0, "c", tables=[{"abc": "ab"}]),
        ])
        result = simulate(definition, LATIN, "ab")
        assert [hit.character for hit in result.key_hits] == ["a", "b"]

    def test_direct_multi_character_output(self, make_keyboard):
        definition = make_keyboard([
            custom_key_dict(0, 0, "a"),
            custom_key_dict(1, 0, "b"),
            custom_key_dict(2, 0, "ab"),
        ])
        result = simulate(definition, LATIN, "abb")
        assert [(hit.key_index, hit.character) for hit in result.key_hits] == [(2, "ab"), (1, "b")]
        assert result.total_chars == 3

    def test_chained_output(self, roman_keyboard):
        result = simulate(roman_keyboard, KANA, "んた")
        assert [hit.key_index for hit in result.key_hits] == [1, 2, 3]
        assert all(hit.character == "んた" for hit in result.key_hits)
        assert result.mapped_chars == 2

    def test_multi_beats_transform_on_tie(self, make_keyboard):
        definition = make_keyboard([
            custom_key_dict(0, 0, "か"),
            system_key_dict(1, 0, "flick_kogaki"),
            custom_key_dict(2, 0, "゛", tables=[{"か゛": "が"}]),
        ], language="ja_JP")
        result = simulate(definition, KANA, "が")
        assert [hit.key_index for hit in result.key_hits] == [0, 2]

    def test_transform_beats_longer_multi(self, make_keyboard):
        definition = make_keyboard([
            custom_key_dict(0, 0, "か"),
            custom_key_dict(1, 0, "x"),
            system_key_dict(2, 0, "flick_kogaki"),
            custom_key_dict(3, 0, "゛", tables=[{"かx゛": "が"}]),
        ], language="ja_JP")
        result = simulate(definition, KANA, "が")
        assert [hit.key_index for hit in result.key_hits] == [0, 2]


class TestCounting:
    def test_line_breaks_skipped(self, ab_keyboard):
        result = simulate(ab_keyboard, LATIN, "a\nb\r\na")
        assert result.total_chars == 3
        assert result.text_length == 6
        assert result.mapped_chars == 3

    @pytest.mark.parametrize("text", ["ab", "abc\nxyz", "", "zzz\r\n", "Hello World"])
    def test_counts(self, ab_keyboard, text):
        result = simulate(ab_keyboard, LATIN, text)
        prepared = (text or DEFAULT_CORPORA[LATIN]).lower()
        assert result.total_chars == sum(1 for char in prepared if char not in LINE_BREAKS)
        assert result.mapped_chars <= result.total_chars
        assert result.total_chars - result.mapped_chars == sum(result.unresolved.values())
        assert 0.0 <= result.coverage <= 1.0

    def test_deterministic(self, roman_keyboard):
        maps = build_character_maps(roman_keyboard)
        simulator = TypingSimulator(maps)
        assert simulator.run(KANA, "んたかあ") == simulator.run(KANA, "んたかあ")

    def test_default_corpus_runs(self, flick_keyboard):
        result = simulate(flick_keyboard)
        assert result.mode == KANA
        assert result.total_chars > 0
        assert result.mapped_chars > 0
