#!/usr/bin/env python3
"""
Decorated-character transforms.

Voiced, semi-voiced and small-form kana can be typed as their base
character followed by a modifier key that cycles through the decorated
forms. This module inverts the three fixed decoration tables and finds the
modifier key of a keyboard, if it has one.
"""

from typing import Dict, NamedTuple, Optional

from keyboard_sim.definition import KeyboardDefinition, CustomKey, SystemKey
from keyboard_sim.layout_utils import KeyAction, make_key_action


VOICING = 'voicing'
SEMI_VOICING = 'semi_voicing'
SMALL_FORM = 'small_form'

VOICING_MAP = {
    'か': 'が', 'き': 'ぎ', 'く': 'ぐ', 'け': 'げ', 'こ': 'ご',
    'さ': 'ざ', 'し': 'じ', 'す': 'ず', 'せ': 'ぜ', 'そ': 'ぞ',
    'た': 'だ', 'ち': 'ぢ', 'つ': 'づ', 'て': 'で', 'と': 'ど',
    'は': 'ば', 'ひ': 'び', 'ふ': 'ぶ', 'へ': 'べ', 'ほ': 'ぼ',
    'う': 'ゔ',
}

SEMI_VOICING_MAP = {
    'は': 'ぱ', 'ひ': 'ぴ', 'ふ': 'ぷ', 'へ': 'ぺ', 'ほ': 'ぽ',
}

SMALL_FORM_MAP = {
    'あ': 'ぁ', 'い': 'ぃ', 'う': 'ぅ', 'え': 'ぇ', 'お': 'ぉ',
    'や': 'ゃ', 'ゆ': 'ゅ', 'よ': 'ょ', 'つ': 'っ', 'わ': 'ゎ',
}

DECORATION_TABLES = (
    (VOICING, VOICING_MAP),
    (SEMI_VOICING, SEMI_VOICING_MAP),
    (SMALL_FORM, SMALL_FORM_MAP),
)

TRANSFORM_SYSTEM_KEY = 'flick_kogaki'
TRANSFORM_ACTION = 'replace_default'


class TransformEntry(NamedTuple):
    base: str
    kind: str


def build_transform_index() -> Dict[str, TransformEntry]:
    """
    Invert the decoration tables.

    Returns:
        Dict mapping each decorated character to its base character and transform kind
    """
    index = {}
    for kind, table in DECORATION_TABLES:
        for base, decorated in table.items():
            index[decorated] = TransformEntry(base, kind)
    return index


def find_transform_key(definition: KeyboardDefinition) -> Optional[KeyAction]:
    """
    Locate the key that cycles a character through its decorated forms.

    The first key in declaration order wins: either the ``flick_kogaki``
    system key or a custom key with a ``replace_default`` press action.

    Returns:
        KeyAction for the modifier key, or None if the keyboard has none
    """
    for index, entry in enumerate(definition.keys):
        if isinstance(entry.key, SystemKey) and entry.key.type == TRANSFORM_SYSTEM_KEY:
            return make_key_action(definition, index)
        if isinstance(entry.key, CustomKey):
            if any(a.type == TRANSFORM_ACTION for a in entry.key.press_actions):
                return make_key_action(definition, index)
    return None
