#!/usr/bin/env python3
"""
Text utilities for keyboard evaluation.

Common functions for normalizing input text before simulation: folding
katakana to hiragana and spelling hiragana out in romanized form for
roman-to-kana keyboards.
"""

import re
from typing import Dict, List, Optional


HIRAGANA_TO_ROMAJI = {
    'あ': 'a', 'い': 'i', 'う': 'u', 'え': 'e', 'お': 'o',
    'か': 'ka', 'き': 'ki', 'く': 'ku', 'け': 'ke', 'こ': 'ko',
    'さ': 'sa', 'し': 'si', 'す': 'su', 'せ': 'se', 'そ': 'so',
    'た': 'ta', 'ち': 'ti', 'つ': 'tu', 'て': 'te', 'と': 'to',
    'な': 'na', 'に': 'ni', 'ぬ': 'nu', 'ね': 'ne', 'の': 'no',
    'は': 'ha', 'ひ': 'hi', 'ふ': 'hu', 'へ': 'he', 'ほ': 'ho',
    'ま': 'ma', 'み': 'mi', 'む': 'mu', 'め': 'me', 'も': 'mo',
    'や': 'ya', 'ゆ': 'yu', 'よ': 'yo',
    'ら': 'ra', 'り': 'ri', 'る': 'ru', 'れ': 're', 'ろ': 'ro',
    'わ': 'wa', 'ゐ': 'wi', 'ゑ': 'we', 'を': 'wo',
    'ん': 'nn',

    'が': 'ga', 'ぎ': 'gi', 'ぐ': 'gu', 'げ': 'ge', 'ご': 'go',
    'ざ': 'za', 'じ': 'zi', 'ず': 'zu', 'ぜ': 'ze', 'ぞ': 'zo',
    'だ': 'da', 'ぢ': 'di', 'づ': 'du', 'で': 'de', 'ど': 'do',
    'ば': 'ba', 'び': 'bi', 'ぶ': 'bu', 'べ': 'be', 'ぼ': 'bo',
    'ぱ': 'pa', 'ぴ': 'pi', 'ぷ': 'pu', 'ぺ': 'pe', 'ぽ': 'po',

    'ぁ': 'xa', 'ぃ': 'xi', 'ぅ': 'xu', 'ぇ': 'xe', 'ぉ': 'xo',
    'ゃ': 'xya', 'ゅ': 'xyu', 'ょ': 'xyo',
    'っ': 'xtu',
    'ゎ': 'xwa',

    # Contracted sounds
    'きゃ': 'kya', 'きゅ': 'kyu', 'きょ': 'kyo',
    'しゃ': 'sya', 'しゅ': 'syu', 'しょ': 'syo',
    'ちゃ': 'tya', 'ちゅ': 'tyu', 'ちょ': 'tyo',
    'にゃ': 'nya', 'にゅ': 'nyu', 'にょ': 'nyo',
    'ひゃ': 'hya', 'ひゅ': 'hyu', 'ひょ': 'hyo',
    'みゃ': 'mya', 'みゅ': 'myu', 'みょ': 'myo',
    'りゃ': 'rya', 'りゅ': 'ryu', 'りょ': 'ryo',
    'ぎゃ': 'gya', 'ぎゅ': 'gyu', 'ぎょ': 'gyo',
    'じゃ': 'zya', 'じゅ': 'zyu', 'じょ': 'zyo',
    'びゃ': 'bya', 'びゅ': 'byu', 'びょ': 'byo',
    'ぴゃ': 'pya', 'ぴゅ': 'pyu', 'ぴょ': 'pyo',
    'でゃ': 'dha', 'でゅ': 'dhu', 'でょ': 'dho',
    'てゃ': 'tha', 'てゅ': 'thu', 'てょ': 'tho',
}

SOKUON = 'っ'
CONSONANT_RE = re.compile(r'^[bcdfghjklmnpqrstvwxyz]')

KATAKANA_START = 0x30A1
KATAKANA_END = 0x30F6
KATAKANA_TO_HIRAGANA_OFFSET = 0x30A1 - 0x3041

LINE_BREAKS = ('\n', '\r')


def katakana_to_hiragana(text: str) -> str:
    """
    Fold katakana to hiragana.

    The prolonged-sound mark (ー) and everything outside the katakana block
    are left unchanged.
    """
    chars = []
    for char in text:
        code = ord(char)
        if KATAKANA_START <= code <= KATAKANA_END:
            chars.append(chr(code - KATAKANA_TO_HIRAGANA_OFFSET))
        else:
            chars.append(char)
    return ''.join(chars)


def normalize_to_hiragana(text: str) -> str:
    """Canonical kana reading form used by kana-mode simulation."""
    return katakana_to_hiragana(text)


def hiragana_to_romaji(text: str) -> str:
    """
    Spell hiragana text in romanized form.

    Args:
        text: Hiragana text (other characters pass through unchanged)

    Returns:
        Romanized text, e.g. 'きょうはいっかい' -> 'kyouhaikkai'
    """
    result: List[str] = []
    i = 0

    while i < len(text):
        # Sokuon doubles the next consonant
        if text[i] == SOKUON and i + 1 < len(text):
            next_romaji = HIRAGANA_TO_ROMAJI.get(text[i + 1])
            if next_romaji and CONSONANT_RE.match(next_romaji):
                result.append(next_romaji[0])
                i += 1
                continue

        if i + 1 < len(text):
            pair = HIRAGANA_TO_ROMAJI.get(text[i:i + 2])
            if pair:
                result.append(pair)
                i += 2
                continue

        result.append(HIRAGANA_TO_ROMAJI.get(text[i], text[i]))
        i += 1

    return ''.join(result)


def read_text_input(text: Optional[str] = None, text_file: Optional[str] = None) -> Optional[str]:
    """
    Resolve text from an inline string or a UTF-8 file.

    Returns:
        The text, or None when neither source is given (use the default corpus)

    Raises:
        FileNotFoundError: If text_file doesn't exist
    """
    if text_file:
        with open(text_file, 'r', encoding='utf-8') as f:
            return f.read()
    return text or None


def summarize_unresolved(unresolved: Dict[str, int], limit: int = 30) -> str:
    """Format unresolved characters for display, most frequent first."""
    if not unresolved:
        return ""

    ordered = sorted(unresolved.items(), key=lambda item: -item[1])
    parts = []
    for char, count in ordered[:limit]:
        shown = '(space)' if char == ' ' else char
        parts.append(f"{shown}×{count}")
    if len(ordered) > limit:
        parts.append(f"... and {len(ordered) - limit} more")
    return ' '.join(parts)
