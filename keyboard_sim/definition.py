#!/usr/bin/env python3
"""
Keyboard definition model for custom software keyboards.

Typed, read-only view of a custard keyboard-definition document: a grid of
keys, each either a fixed system key or a custom key with tap, flick,
long-press and suffix-replacement actions. Loading is deliberately thin:
only the fields the simulator depends on are checked, full validation of
the document belongs to whatever produced it.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any, List, Optional, Tuple, Union


FLICK_DIRECTIONS = ('left', 'top', 'right', 'bottom')


class KeyboardDefinitionError(ValueError):
    """Raised when a keyboard-definition document is structurally unusable."""


@dataclass(frozen=True)
class Action:
    """One press action (``input``, ``replace_last_characters``, ...)."""

    type: str
    text: Optional[str] = None
    table: Optional[Dict[str, str]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Action':
        table = data.get('table')
        return cls(
            type=data.get('type', ''),
            text=data.get('text'),
            table=dict(table) if table else None,
        )


def first_input_text(actions: List[Action]) -> Optional[str]:
    """Return the text of the first non-empty ``input`` action, if any."""
    for action in actions:
        if action.type == 'input' and action.text:
            return action.text
    return None


def _parse_actions(items: Optional[List[Dict[str, Any]]]) -> Tuple[Action, ...]:
    return tuple(Action.from_dict(item) for item in (items or []))


@dataclass(frozen=True)
class VariationKey:
    label: str
    press_actions: Tuple[Action, ...]
    longpress_start: Tuple[Action, ...] = ()


@dataclass(frozen=True)
class Variation:
    """Flick or long-press variation attached to a custom key."""

    type: str
    direction: Optional[str]
    key: VariationKey

    @property
    def is_flick(self) -> bool:
        return self.type == 'flick_variation'

    @property
    def is_longpress(self) -> bool:
        return self.type == 'longpress_variation'


@dataclass(frozen=True)
class SystemKey:
    type: str


@dataclass(frozen=True)
class CustomKey:
    label: str
    press_actions: Tuple[Action, ...]
    longpress_start: Tuple[Action, ...] = ()
    variations: Tuple[Variation, ...] = ()

    def input_text(self) -> Optional[str]:
        """Primary tap output."""
        return first_input_text(list(self.press_actions))

    def flick_inputs(self) -> Dict[str, str]:
        """Map each flick direction to the first ``input`` text it produces."""
        inputs = {}
        for variation in self.variations:
            if not variation.is_flick or not variation.direction:
                continue
            text = first_input_text(list(variation.key.press_actions))
            if text:
                inputs[variation.direction] = text
        return inputs

    def longpress_input(self) -> Optional[str]:
        """
        First long-press output.

        Long-press start actions take precedence; otherwise the first
        long-press variation that produces input is used.
        """
        text = first_input_text(list(self.longpress_start))
        if text:
            return text
        for variation in self.variations:
            if variation.is_longpress:
                text = first_input_text(list(variation.key.press_actions))
                if text:
                    return text
        return None


@dataclass(frozen=True)
class KeyEntry:
    """A key placed on the layout grid."""

    specifier_type: str
    specifier: Dict[str, float]
    key: Union[SystemKey, CustomKey]


def _label_text(label: Any) -> str:
    """Reduce the various label styles to display text."""
    if not isinstance(label, dict):
        return '?'
    for name in ('text', 'main', 'system_image'):
        value = label.get(name)
        if isinstance(value, str):
            return value
    return '?'


def _parse_variation(data: Dict[str, Any]) -> Variation:
    key_data = data.get('key', {})
    longpress = key_data.get('longpress_actions') or {}
    return Variation(
        type=data.get('type', ''),
        direction=data.get('direction'),
        key=VariationKey(
            label=_label_text(key_data.get('design', {}).get('label')),
            press_actions=_parse_actions(key_data.get('press_actions')),
            longpress_start=_parse_actions(longpress.get('start')),
        ),
    )


def _parse_key(key_type: str, data: Dict[str, Any]) -> Union[SystemKey, CustomKey]:
    if key_type == 'system':
        return SystemKey(type=data.get('type', ''))

    design = data.get('design') or {}
    longpress = data.get('longpress_actions') or {}
    return CustomKey(
        label=_label_text(design.get('label')),
        press_actions=_parse_actions(data.get('press_actions')),
        longpress_start=_parse_actions(longpress.get('start')),
        variations=tuple(_parse_variation(v) for v in data.get('variations') or []),
    )


def _parse_entry(data: Dict[str, Any]) -> KeyEntry:
    specifier_type = data.get('specifier_type', 'grid_fit')
    specifier = dict(data.get('specifier') or {})
    if specifier_type == 'grid_fit':
        specifier.setdefault('x', 0)
        specifier.setdefault('y', 0)
        specifier.setdefault('width', 1)
        specifier.setdefault('height', 1)
    else:
        specifier.setdefault('index', 0)

    key_type = data.get('key_type', 'custom')
    return KeyEntry(
        specifier_type=specifier_type,
        specifier=specifier,
        key=_parse_key(key_type, data.get('key') or {}),
    )


@dataclass(frozen=True)
class KeyboardDefinition:
    """
    Validated keyboard definition.

    Key order is significant: the index of a key in ``keys`` is its identity
    throughout simulation and scoring, and first-declared keys win ties.
    """

    identifier: str
    display_name: str
    language: str
    input_style: str
    row_count: int
    keys: Tuple[KeyEntry, ...]

    @property
    def name(self) -> str:
        return self.display_name or self.identifier

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'KeyboardDefinition':
        """
        Build a definition from a decoded custard document.

        Args:
            data: Decoded JSON object

        Returns:
            KeyboardDefinition instance

        Raises:
            KeyboardDefinitionError: If identifier, interface, key_layout or keys is missing
        """
        if not isinstance(data, dict) or not data.get('identifier') or not data.get('interface'):
            raise KeyboardDefinitionError(
                "Invalid keyboard definition: 'identifier' or 'interface' not found")

        interface = data['interface']
        if not interface.get('key_layout') or 'keys' not in interface:
            raise KeyboardDefinitionError(
                "Invalid keyboard definition: 'key_layout' or 'keys' not found")

        layout = interface['key_layout']
        metadata = data.get('metadata') or {}

        return cls(
            identifier=str(data['identifier']),
            display_name=metadata.get('display_name', ''),
            language=data.get('language', 'none'),
            input_style=data.get('input_style', 'direct'),
            row_count=int(layout.get('row_count', 0) or 0),
            keys=tuple(_parse_entry(entry) for entry in interface['keys']),
        )


def parse_keyboard_definitions(text: str) -> List[KeyboardDefinition]:
    """
    Parse a JSON document holding one definition or a list of definitions.

    Raises:
        KeyboardDefinitionError: If the JSON cannot be decoded or a definition is invalid
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise KeyboardDefinitionError(f"Error parsing keyboard definition JSON: {e}")

    if isinstance(data, list):
        return [KeyboardDefinition.from_dict(item) for item in data]
    return [KeyboardDefinition.from_dict(data)]


def load_keyboard_definitions(filepath: Union[str, Path]) -> List[KeyboardDefinition]:
    """
    Load keyboard definitions from a JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        KeyboardDefinitionError: If the document is invalid
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Keyboard definition not found: {filepath}")

    with open(path, 'r', encoding='utf-8') as f:
        return parse_keyboard_definitions(f.read())
