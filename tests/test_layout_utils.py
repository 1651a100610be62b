"""Tests for key geometry and frequency aggregation."""

from keyboard_sim.definition import KeyboardDefinition
from keyboard_sim.layout_utils import (
    KeyAction, get_key_geometry, make_key_action,
    format_frequency_key, key_frequency, flick_frequency, frequency_key_label,
)
from keyboard_sim.simulator import simulate
from conftest import custom_key_dict, keyboard_dict, system_key_dict


class TestGeometry:
    def test_grid_fit(self, make_keyboard):
        definition = make_keyboard([custom_key_dict(2, 1, "a", width=2, height=1)])
        assert get_key_geometry(definition.keys[0], definition.row_count) == (2, 1, 2, 1)

    def test_scroll_index_wraps_on_row_count(self):
        entry = custom_key_dict(0, 0, "a")
        entry["specifier_type"] = "grid_scroll"
        entry["specifier"] = {"index": 7}
        definition = KeyboardDefinition.from_dict(keyboard_dict([entry], row_count=3))
        assert get_key_geometry(definition.keys[0], definition.row_count) == (1, 2, 1, 1)

    def test_center(self, make_keyboard):
        definition = make_keyboard([custom_key_dict(1, 2, "a", width=2, height=1)])
        assert make_key_action(definition, 0).center == (2.0, 2.5)

    def test_with_zone_and_same_target(self):
        action = KeyAction(0, 0, 0, 1, 1)
        flicked = action.with_zone("left")
        assert flicked.zone == "left"
        assert action.zone is None
        assert not action.same_target(flicked)
        assert flicked.same_target(KeyAction(0, 5, 5, 1, 1, "left"))


class TestFrequency:
    def test_format_frequency_key(self):
        assert format_frequency_key((3, None)) == "3"
        assert format_frequency_key((3, "top")) == "3:top"
        assert format_frequency_key(None) == ""

    def test_key_frequency_merges_zones(self, flick_keyboard):
        result = simulate(flick_keyboard, "kana", "たちつか")
        assert key_frequency(result) == {0: 3, 1: 1}

    def test_flick_frequency(self, flick_keyboard):
        result = simulate(flick_keyboard, "kana", "たちちつ")
        breakdown = flick_frequency(result)
        assert breakdown[0] == {"center": 1, "left": 0, "top": 1, "right": 2, "bottom": 0, "total": 4}

    def test_frequency_key_label(self, flick_keyboard):
        assert frequency_key_label(flick_keyboard, (0, None)) == "た"
        assert frequency_key_label(flick_keyboard, (0, "right")) == "ち"
        assert frequency_key_label(flick_keyboard, (2, None)) == "小ﾞﾟ"
        assert frequency_key_label(flick_keyboard, (9, None)) == "9"

    def test_unknown_system_key_label(self, make_keyboard):
        definition = make_keyboard([system_key_dict(0, 0, "custom_thing")])
        assert frequency_key_label(definition, (0, None)) == "custom_thing"
