#!/usr/bin/env python3
"""
Character-to-keystroke maps for a keyboard definition.

Builds, once per definition, the maps the typing simulator resolves text
against:

  - **direct**: output string -> the single key action producing it
    (tap, flick zone, first long-press output, or a suffix-replacement
    entry needing no prior input)
  - **multi**: output string -> the shortest known key sequence producing it
    through suffix-replacement tables (``replace_last_characters``)

Construction runs in three passes, each folding the previous pass's maps
into new dicts:

  1. Direct pass: tap, flick and long-press outputs
  2. Table pass: suffix-replacement tables whose prior input resolves
     through the direct map
  3. Chain pass: intermediate outputs (confirmed kana followed by pending
     latin letters, e.g. ``んt``) joined with the kana entries that start
     on the same key action

Tie-breaks depend on key declaration order and are kept stable: a plain tap
replaces a flick mapping for the same output, otherwise the first declared
key wins.
"""

import logging
import math
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from keyboard_sim.definition import KeyboardDefinition, CustomKey, Action, first_input_text
from keyboard_sim.layout_utils import KeyAction, make_key_action
from keyboard_sim.transforms import TransformEntry, build_transform_index, find_transform_key

logger = logging.getLogger(__name__)

KeySequence = Tuple[KeyAction, ...]

REPLACE_ACTION = 'replace_last_characters'
INTERMEDIATE_RE = re.compile(r'^(.+?)([a-z]+)$')
LATIN_RE = re.compile(r'[a-z]')


@dataclass(frozen=True)
class CharacterMaps:
    """
    Immutable resolution maps for one keyboard definition.

    Safe to cache and share between simulations of the same definition.
    """

    direct: Mapping[str, KeyAction]
    multi: Mapping[str, KeySequence]
    max_sequence_length: int
    transform_index: Mapping[str, TransformEntry]
    transform_key: Optional[KeyAction]
    char_costs: Mapping[str, int]

    def single_char_cost(self, char: str) -> float:
        """Cheapest keystroke count for one character (``math.inf`` if unresolvable)."""
        return self.char_costs.get(char, math.inf)

    def individual_cost(self, text: str) -> float:
        """Keystrokes needed to type ``text`` one character at a time."""
        return sum(self.single_char_cost(char) for char in text)

    def base_cost(self, base: str) -> float:
        """Keystrokes for the base of a decorated character, without the modifier."""
        if base in self.direct:
            return 1
        if base in self.multi:
            return len(self.multi[base])
        return math.inf

    def transform_cost(self, char: str) -> float:
        """Keystrokes for ``char`` as base + modifier key."""
        entry = self.transform_index.get(char)
        if entry is None or self.transform_key is None:
            return math.inf
        return self.base_cost(entry.base) + 1


def register_direct(direct: Dict[str, KeyAction], text: str, action: KeyAction) -> None:
    """Add ``text`` to the direct map under the tap-over-flick, first-wins rule."""
    existing = direct.get(text)
    if existing is None:
        direct[text] = action
    elif action.zone is None and existing.zone is not None:
        direct[text] = action


def _custom_keys(definition: KeyboardDefinition) -> List[Tuple[int, CustomKey]]:
    return [(index, entry.key) for index, entry in enumerate(definition.keys)
            if isinstance(entry.key, CustomKey)]


def build_direct_map(definition: KeyboardDefinition) -> Dict[str, KeyAction]:
    """Pass 1: tap, flick-zone and first long-press outputs."""
    direct: Dict[str, KeyAction] = {}

    for index, key in _custom_keys(definition):
        action = make_key_action(definition, index)

        tap_text = key.input_text()
        if tap_text:
            register_direct(direct, tap_text, action)

        for direction, text in key.flick_inputs().items():
            register_direct(direct, text, action.with_zone(direction))

        longpress_text = key.longpress_input()
        if longpress_text:
            register_direct(direct, longpress_text, action)

    return direct


def _replacement_tables(key: CustomKey) -> List[Tuple[Dict[str, str], Optional[str], Optional[str]]]:
    """List (table, own output, zone) for every suffix-replacement table of a key."""
    tables = []
    for action in key.press_actions:
        if action.type == REPLACE_ACTION and action.table:
            tables.append((action.table, key.input_text(), None))

    for variation in key.variations:
        actions: List[Action] = list(variation.key.press_actions)
        own_text = first_input_text(actions)
        zone = variation.direction if variation.is_flick else None
        for action in actions:
            if action.type == REPLACE_ACTION and action.table:
                tables.append((action.table, own_text, zone))
    return tables


def build_table_maps(definition: KeyboardDefinition,
                     direct: Mapping[str, KeyAction]) -> Tuple[Dict[str, KeyAction], Dict[str, KeySequence]]:
    """
    Pass 2: resolve suffix-replacement tables.

    Args:
        definition: Keyboard definition
        direct: Direct map from pass 1

    Returns:
        Tuple of (extended direct map, multi map)
    """
    direct = dict(direct)
    multi: Dict[str, KeySequence] = {}

    for index, key in _custom_keys(definition):
        owner = make_key_action(definition, index)

        for table, own_text, zone in _replacement_tables(key):
            action = owner.with_zone(zone)

            for input_suffix, output in table.items():
                if output in direct:
                    continue

                prior_input = input_suffix
                if own_text and input_suffix.endswith(own_text):
                    prior_input = input_suffix[:-len(own_text)]

                if not prior_input:
                    register_direct(direct, output, action)
                    continue

                prior_actions = [direct.get(char) for char in prior_input]
                if any(a is None for a in prior_actions):
                    continue

                sequence = tuple(prior_actions) + (action,)
                existing = multi.get(output)
                if existing is None or len(sequence) < len(existing):
                    multi[output] = sequence

    return direct, multi


def chain_intermediates(direct: Mapping[str, KeyAction],
                        multi: Mapping[str, KeySequence]) -> Dict[str, KeySequence]:
    """
    Pass 3: chain intermediate outputs into full kana outputs.

    A consonant key may leave ``んt`` or ``っk`` pending; a vowel key whose
    own table starts from that consonant completes it. Joining the two gives
    a direct path to e.g. ``んた``.

    Returns:
        New multi map including the chained entries
    """
    chained = dict(multi)

    intermediates = []
    for output, sequence in multi.items():
        match = INTERMEDIATE_RE.match(output)
        if not match:
            continue
        confirmed = match.group(1)
        if LATIN_RE.search(confirmed):
            continue
        intermediates.append((confirmed, sequence))

    kana_entries = [(output, sequence) for output, sequence in multi.items()
                    if not LATIN_RE.search(output) and sequence]

    for confirmed, sequence in intermediates:
        last_action = sequence[-1]
        for kana_output, kana_sequence in kana_entries:
            if not kana_sequence[0].same_target(last_action):
                continue

            chain_output = confirmed + kana_output
            if chain_output in direct:
                continue

            chain_sequence = sequence + kana_sequence[1:]
            existing = chained.get(chain_output)
            if existing is None or len(chain_sequence) < len(existing):
                chained[chain_output] = chain_sequence

    return chained


def _char_costs(direct: Mapping[str, KeyAction],
                multi: Mapping[str, KeySequence],
                transform_index: Mapping[str, TransformEntry],
                transform_key: Optional[KeyAction]) -> Dict[str, int]:
    """Memoize the cheapest single-character cost of every resolvable character."""
    costs: Dict[str, int] = {}

    for char, sequence in multi.items():
        if len(char) == 1:
            costs[char] = len(sequence)

    if transform_key is not None:
        for char, entry in transform_index.items():
            if char in costs or char in direct:
                continue
            if entry.base in direct:
                costs[char] = 2
            elif entry.base in multi:
                costs[char] = len(multi[entry.base]) + 1

    for char in direct:
        if len(char) == 1:
            costs[char] = 1

    return costs


def build_character_maps(definition: KeyboardDefinition) -> CharacterMaps:
    """
    Build all resolution maps for a keyboard definition.

    Args:
        definition: Validated keyboard definition

    Returns:
        CharacterMaps with direct, multi, transform index, transform key
        and the lookahead bound for greedy matching
    """
    direct = build_direct_map(definition)
    direct, multi = build_table_maps(definition, direct)
    multi = chain_intermediates(direct, multi)

    transform_index = build_transform_index()
    transform_key = find_transform_key(definition)

    max_sequence_length = max([1] + [len(text) for text in direct] + [len(text) for text in multi])

    logger.debug("Built maps for %s: %d direct, %d multi, lookahead %d, transform key %s",
                 definition.identifier, len(direct), len(multi), max_sequence_length,
                 transform_key.key_index if transform_key else None)

    return CharacterMaps(
        direct=MappingProxyType(direct),
        multi=MappingProxyType(multi),
        max_sequence_length=max_sequence_length,
        transform_index=MappingProxyType(transform_index),
        transform_key=transform_key,
        char_costs=MappingProxyType(_char_costs(direct, multi, transform_index, transform_key)),
    )
