"""
Shared pytest fixtures for building small keyboard definitions from plain dicts.
"""
import json

import pytest

from keyboard_sim.definition import KeyboardDefinition


def _variation(kind, direction, text, tables=None):
    press_actions = [{"type": "input", "text": text}] if text else []
    for table in tables or []:
        press_actions.append({"type": "replace_last_characters", "table": table})
    variation = {
        "type": kind,
        "key": {
            "design": {"label": {"text": text or ""}},
            "press_actions": press_actions,
            "longpress_actions": {"start": [], "repeat": []},
        },
    }
    if direction:
        variation["direction"] = direction
    return variation


def custom_key_dict(x, y, text=None, flicks=None, longpress=None, tables=None,
                    flick_tables=None, extra_actions=None, width=1, height=1):
    """One grid_fit custom key entry."""
    press_actions = [{"type": "input", "text": text}] if text else []
    for table in tables or []:
        press_actions.append({"type": "replace_last_characters", "table": table})
    press_actions.extend(extra_actions or [])

    variations = []
    flick_tables = flick_tables or {}
    for direction, flick_text in (flicks or {}).items():
        variations.append(_variation("flick_variation", direction, flick_text,
                                     flick_tables.get(direction)))

    longpress_start = [{"type": "input", "text": longpress}] if longpress else []

    return {
        "specifier_type": "grid_fit",
        "specifier": {"x": x, "y": y, "width": width, "height": height},
        "key_type": "custom",
        "key": {
            "design": {"label": {"main": text or "?"}, "color": "normal"},
            "press_actions": press_actions,
            "longpress_actions": {"start": longpress_start, "repeat": []},
            "variations": variations,
        },
    }


def system_key_dict(x, y, key_type):
    return {
        "specifier_type": "grid_fit",
        "specifier": {"x": x, "y": y, "width": 1, "height": 1},
        "key_type": "system",
        "key": {"type": key_type},
    }


def keyboard_dict(keys, identifier="test", language="none", input_style="direct",
                  row_count=4, column_count=4, display_name=None):
    return {
        "identifier": identifier,
        "language": language,
        "input_style": input_style,
        "metadata": {"custard_version": "1.2", "display_name": display_name or identifier},
        "interface": {
            "key_style": "tenkey_style",
            "key_layout": {"type": "grid_fit", "row_count": row_count, "column_count": column_count},
            "keys": keys,
        },
    }


@pytest.fixture
def custom_key():
    return custom_key_dict


@pytest.fixture
def system_key():
    return system_key_dict


@pytest.fixture
def make_keyboard():
    """Build a KeyboardDefinition from a list of key entry dicts."""
    def _make(keys, **kwargs):
        return KeyboardDefinition.from_dict(keyboard_dict(keys, **kwargs))
    return _make


@pytest.fixture
def ab_keyboard(make_keyboard):
    """Two keys side by side typing 'a' and 'b'."""
    return make_keyboard([custom_key_dict(0, 0, "a"), custom_key_dict(1, 0, "b")], identifier="ab")


@pytest.fixture
def flick_keyboard(make_keyboard):
    """Kana flick key た with ち on its right flick, plus か and a modifier key."""
    return make_keyboard([
        custom_key_dict(0, 0, "た", flicks={"right": "ち", "top": "つ"}),
        custom_key_dict(1, 0, "か"),
        system_key_dict(0, 1, "flick_kogaki"),
    ], identifier="flick", language="ja_JP")


@pytest.fixture
def roman_keyboard(make_keyboard):
    """
    Roman-to-kana keyboard built on suffix-replacement tables.

    n + t leaves 'んt' pending; t + a completes 'た'; chaining joins them
    into a three-stroke 'んた'.
    """
    return make_keyboard([
        custom_key_dict(0, 0, "k"),
        custom_key_dict(1, 0, "n"),
        custom_key_dict(2, 0, "t", tables=[{"nt": "んt"}]),
        custom_key_dict(0, 1, "a", tables=[{"ka": "か", "ta": "た", "a": "あ"}]),
        custom_key_dict(1, 1, "i"),
        custom_key_dict(2, 1, "u"),
        custom_key_dict(3, 1, "e"),
        custom_key_dict(3, 0, "o"),
    ], identifier="roman", language="ja_JP", input_style="roman2kana")


@pytest.fixture
def write_keyboard_file(tmp_path):
    """Write definition dicts to a JSON file and return its path."""
    def _write(data, name="keyboard.json"):
        path = tmp_path / name
        path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        return str(path)
    return _write
