# keyboard_sim/__init__.py
"""
Custom Keyboard Typing Ergonomics Scoring

Builds character-to-keystroke maps from custom keyboard definitions,
simulates typing a text on them and scores the result.
"""

__version__ = "1.0.0"

from .definition import KeyboardDefinition, KeyboardDefinitionError, load_keyboard_definitions
from .character_maps import CharacterMaps, build_character_maps
from .simulator import SimulationResult, detect_evaluation_mode, simulate
from .base_scorer import ScoreResult
from .scoring import calculate_score
from .evaluator import KeyboardEvaluator
from .config_loader import ConfigLoader, load_scorer_config

__all__ = [
    'KeyboardDefinition',
    'KeyboardDefinitionError',
    'load_keyboard_definitions',
    'CharacterMaps',
    'build_character_maps',
    'SimulationResult',
    'detect_evaluation_mode',
    'simulate',
    'ScoreResult',
    'calculate_score',
    'KeyboardEvaluator',
    'ConfigLoader',
    'load_scorer_config',
]
