#!/usr/bin/env python3
"""
Layout utilities for custom keyboard evaluation.

Common functions for key geometry on the layout grid, distances between
keys, and aggregating keystroke frequencies for display.
"""

from dataclasses import dataclass, replace
from typing import Dict, Tuple, Optional

from keyboard_sim.definition import KeyboardDefinition, KeyEntry, CustomKey, SystemKey, FLICK_DIRECTIONS


FrequencyKey = Tuple[int, Optional[str]]


@dataclass(frozen=True)
class KeyAction:
    """One physical key (by declaration index), where it sits, and the zone used."""

    key_index: int
    x: float
    y: float
    width: float
    height: float
    zone: Optional[str] = None

    def with_zone(self, zone: Optional[str]) -> 'KeyAction':
        return replace(self, zone=zone)

    def same_target(self, other: 'KeyAction') -> bool:
        """Same key and same zone."""
        return self.key_index == other.key_index and self.zone == other.zone

    @property
    def center(self) -> Tuple[float, float]:
        return get_key_center(self.x, self.y, self.width, self.height)

SYSTEM_KEY_LABELS = {
    'change_keyboard': '🌐',
    'enter': 'enter',
    'upper_lower': 'a/A',
    'next_candidate': 'space',
    'flick_kogaki': '小ﾞﾟ',
    'flick_kutoten': '。',
    'flick_hira_tab': 'あいう',
    'flick_abc_tab': 'abc',
    'flick_star123_tab': '☆123',
}


def get_key_geometry(entry: KeyEntry, row_count: int) -> Tuple[float, float, float, float]:
    """
    Get the grid position and size of a key entry.

    Args:
        entry: Key entry from the keyboard definition
        row_count: Declared row count of the layout (used to wrap scroll indices)

    Returns:
        Tuple of (x, y, width, height) in layout-grid units
    """
    specifier = entry.specifier
    if entry.specifier_type == 'grid_fit':
        return (specifier.get('x', 0), specifier.get('y', 0),
                specifier.get('width', 1) or 1, specifier.get('height', 1) or 1)

    index = int(specifier.get('index', 0))
    wrap = max(1, int(row_count))
    return (index % wrap, index // wrap, 1, 1)


def make_key_action(definition: KeyboardDefinition, key_index: int,
                    zone: Optional[str] = None) -> KeyAction:
    """Build the KeyAction for the key at ``key_index`` of a definition."""
    x, y, width, height = get_key_geometry(definition.keys[key_index], definition.row_count)
    return KeyAction(key_index, x, y, width, height, zone)


def get_key_center(x: float, y: float, width: float, height: float) -> Tuple[float, float]:
    """Center of a key rectangle."""
    return (x + width / 2, y + height / 2)


def format_frequency_key(freq_key: Optional[FrequencyKey]) -> str:
    """Render a frequency-table key as ``index`` or ``index:zone``."""
    if freq_key is None:
        return ''
    key_index, zone = freq_key
    return f"{key_index}:{zone}" if zone else str(key_index)


def key_frequency(simulation) -> Dict[int, int]:
    """
    Count keystrokes per key, ignoring flick zones.

    Args:
        simulation: SimulationResult to aggregate

    Returns:
        Dict mapping key index to keystroke count, in first-hit order
    """
    counts: Dict[int, int] = {}
    for hit in simulation.key_hits:
        counts[hit.key_index] = counts.get(hit.key_index, 0) + 1
    return counts


def flick_frequency(simulation) -> Dict[int, Dict[str, int]]:
    """
    Break keystroke counts down by zone for every key.

    Returns:
        Dict mapping key index to counts for 'center', each flick direction and 'total'
    """
    breakdown: Dict[int, Dict[str, int]] = {}
    for (key_index, zone), count in simulation.frequency.items():
        entry = breakdown.get(key_index)
        if entry is None:
            entry = {'center': 0, **{d: 0 for d in FLICK_DIRECTIONS}, 'total': 0}
            breakdown[key_index] = entry
        entry[zone or 'center'] += count
        entry['total'] += count
    return breakdown


def get_system_key_label(key: SystemKey) -> str:
    return SYSTEM_KEY_LABELS.get(key.type, key.type)


def frequency_key_label(definition: KeyboardDefinition, freq_key: FrequencyKey) -> str:
    """
    Human-readable label for a frequency-table key.

    Uses the output of the flicked zone when there is one, then the key's
    tap output, then its design label.
    """
    key_index, zone = freq_key
    if key_index < 0 or key_index >= len(definition.keys):
        return format_frequency_key(freq_key)

    entry = definition.keys[key_index]
    if isinstance(entry.key, SystemKey):
        return get_system_key_label(entry.key)

    key: CustomKey = entry.key
    if zone:
        flick_text = key.flick_inputs().get(zone)
        if flick_text:
            return flick_text

    return key.input_text() or key.label
