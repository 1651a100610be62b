#!/usr/bin/env python3
"""
Typing simulator for custom keyboards.

Replays a text on a keyboard definition and records, in order, every
keystroke needed to produce it. At each position the simulator first tries
the longest multi-character output the keyboard can produce in one
declared sequence, accepting it when it costs no more keystrokes than
typing its characters one by one. Otherwise it falls back to the cheapest
single-character path:

  - **direct**: one tap or flick
  - **multi**: a suffix-replacement sequence
  - **transform**: the base character followed by the modifier key
    (e.g. か + modifier for が)

Characters no path can produce are recorded as unresolved and simulation
continues, so a run always completes with a result.

Usage:
    maps = build_character_maps(definition)
    result = simulate(definition, 'kana', 'おつかれさまです', maps=maps)
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from keyboard_sim.character_maps import CharacterMaps, build_character_maps
from keyboard_sim.corpus import DEFAULT_CORPORA
from keyboard_sim.definition import KeyboardDefinition
from keyboard_sim.layout_utils import FrequencyKey, KeyAction, get_key_center
from keyboard_sim.text_utils import LINE_BREAKS, normalize_to_hiragana, hiragana_to_romaji

logger = logging.getLogger(__name__)

KANA = 'kana'
ROMANIZED = 'romanized'
LATIN = 'latin'
EVALUATION_MODES = (KANA, ROMANIZED, LATIN)

ROMAN_VOWELS = 'aiueo'


@dataclass(frozen=True)
class KeyHit:
    """One simulated keystroke and the output it is attributed to."""

    key_index: int
    x: float
    y: float
    width: float
    height: float
    zone: Optional[str]
    character: str

    @property
    def center(self) -> Tuple[float, float]:
        return get_key_center(self.x, self.y, self.width, self.height)

    @property
    def frequency_key(self) -> FrequencyKey:
        return (self.key_index, self.zone)


@dataclass
class SimulationResult:
    """
    Outcome of one simulated typing session.

    ``unresolved`` keeps each unresolvable character once (first-seen
    order) with the number of times it occurred.
    """

    key_hits: List[KeyHit] = field(default_factory=list)
    frequency: Dict[FrequencyKey, int] = field(default_factory=dict)
    unresolved: Dict[str, int] = field(default_factory=dict)
    total_chars: int = 0
    mapped_chars: int = 0
    mode: str = KANA
    text_length: int = 0

    @property
    def unresolved_chars(self) -> Set[str]:
        return set(self.unresolved)

    @property
    def coverage(self) -> float:
        return self.mapped_chars / self.total_chars if self.total_chars > 0 else 0.0

    def add_hit(self, action: KeyAction, character: str) -> None:
        self.key_hits.append(KeyHit(action.key_index, action.x, action.y,
                                    action.width, action.height, action.zone, character))
        freq_key = (action.key_index, action.zone)
        self.frequency[freq_key] = self.frequency.get(freq_key, 0) + 1

    def add_unresolved(self, char: str) -> None:
        self.unresolved[char] = self.unresolved.get(char, 0) + 1


def detect_evaluation_mode(definition: KeyboardDefinition) -> str:
    """Pick the evaluation mode a keyboard was designed for."""
    if definition.input_style == 'roman2kana':
        return ROMANIZED
    if definition.language == 'ja_JP':
        return KANA
    return LATIN


def has_romanized_input(maps: CharacterMaps) -> bool:
    """True when every base vowel letter can be typed on the keyboard."""
    return all(v in maps.direct or v in maps.multi for v in ROMAN_VOWELS)


def preprocess_text(maps: CharacterMaps, mode: str, text: Optional[str] = None) -> str:
    """
    Normalize text for a mode, substituting the mode's default corpus when empty.

    Args:
        maps: Character maps of the keyboard (romanized mode checks its vowels)
        mode: 'kana', 'romanized' or 'latin'
        text: Raw text, or None for the default corpus

    Returns:
        Text ready for simulation

    Raises:
        ValueError: If mode is not recognized
    """
    if mode == KANA:
        return normalize_to_hiragana(text or DEFAULT_CORPORA[KANA])

    if mode == ROMANIZED:
        if not has_romanized_input(maps):
            logger.info("Keyboard has no romanized vowel input; simulating kana input instead")
            return normalize_to_hiragana(text or DEFAULT_CORPORA[KANA])
        if text:
            return hiragana_to_romaji(normalize_to_hiragana(text)).lower()
        return DEFAULT_CORPORA[ROMANIZED].lower()

    if mode == LATIN:
        return (text or DEFAULT_CORPORA[LATIN]).lower()

    raise ValueError(f"Unknown evaluation mode '{mode}'. Available: {list(EVALUATION_MODES)}")


class TypingSimulator:
    """
    Greedy keystroke resolver over prebuilt character maps.

    The simulator holds no per-run state; ``run`` is a pure function of the
    maps, mode and text.
    """

    def __init__(self, maps: CharacterMaps):
        self.maps = maps

    def _match_multi(self, text: str, i: int, result: SimulationResult) -> int:
        """
        Try the longest declared multi-character output starting at ``i``.

        Returns:
            Number of characters consumed (0 if no output was accepted)
        """
        maps = self.maps
        longest = min(maps.max_sequence_length, len(text) - i)

        for length in range(longest, 1, -1):
            substring = text[i:i + length]

            sequence = maps.multi.get(substring)
            if sequence is not None and len(sequence) <= maps.individual_cost(substring):
                for action in sequence:
                    result.add_hit(action, substring)
                return length

            action = maps.direct.get(substring)
            if action is not None and 1 <= maps.individual_cost(substring):
                result.add_hit(action, substring)
                return length

        return 0

    def _resolve_single(self, char: str, result: SimulationResult) -> bool:
        """Emit the cheapest keystrokes for one character; False if unresolvable."""
        maps = self.maps

        action = maps.direct.get(char)
        if action is not None:
            result.add_hit(action, char)
            return True

        sequence = maps.multi.get(char)
        multi_cost = len(sequence) if sequence is not None else math.inf
        transform_cost = maps.transform_cost(char)

        if sequence is not None and multi_cost <= transform_cost:
            for action in sequence:
                result.add_hit(action, char)
            return True

        if transform_cost < math.inf:
            base = maps.transform_index[char].base
            base_action = maps.direct.get(base)
            if base_action is not None:
                result.add_hit(base_action, base)
            else:
                for action in maps.multi[base]:
                    result.add_hit(action, base)
            result.add_hit(maps.transform_key, char)
            return True

        return False

    def run(self, mode: str, text: Optional[str] = None) -> SimulationResult:
        """
        Simulate typing ``text`` in ``mode``.

        Args:
            mode: 'kana', 'romanized' or 'latin'
            text: Text to type (default corpus of the mode when empty)

        Returns:
            SimulationResult with keystrokes, frequencies and unresolved characters
        """
        prepared = preprocess_text(self.maps, mode, text)
        result = SimulationResult(mode=mode, text_length=len(prepared))

        i = 0
        while i < len(prepared):
            if prepared[i] in LINE_BREAKS:
                i += 1
                continue

            if self.maps.max_sequence_length > 1:
                consumed = self._match_multi(prepared, i, result)
                if consumed:
                    result.total_chars += consumed
                    result.mapped_chars += consumed
                    i += consumed
                    continue

            char = prepared[i]
            result.total_chars += 1
            if self._resolve_single(char, result):
                result.mapped_chars += 1
            else:
                result.add_unresolved(char)
            i += 1

        logger.debug("Simulated %d characters (%d mapped) in %s mode with %d keystrokes",
                     result.total_chars, result.mapped_chars, mode, len(result.key_hits))
        return result


def simulate(definition: KeyboardDefinition,
             mode: Optional[str] = None,
             text: Optional[str] = None,
             maps: Optional[CharacterMaps] = None) -> SimulationResult:
    """
    Simulate typing a text on a keyboard definition.

    Args:
        definition: Keyboard definition
        mode: Evaluation mode (detected from the definition if None)
        text: Text to type (default corpus of the mode when empty)
        maps: Prebuilt maps for the definition (built here if None)

    Returns:
        SimulationResult
    """
    if maps is None:
        maps = build_character_maps(definition)
    if mode is None:
        mode = detect_evaluation_mode(definition)
    return TypingSimulator(maps).run(mode, text)
