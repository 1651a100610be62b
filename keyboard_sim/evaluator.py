#!/usr/bin/env python3
"""
Unified manager for simulating, scoring and comparing keyboards.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Any, List, Optional, Sequence, Tuple

from keyboard_sim.base_scorer import ScoreResult
from keyboard_sim.character_maps import CharacterMaps, build_character_maps
from keyboard_sim.definition import KeyboardDefinition
from keyboard_sim.scoring import ErgonomicsScorer
from keyboard_sim.simulator import SimulationResult, TypingSimulator, detect_evaluation_mode

logger = logging.getLogger(__name__)


@dataclass
class Evaluation:
    """Simulation and score of one keyboard for one text."""

    name: str
    definition: KeyboardDefinition
    simulation: SimulationResult
    score: ScoreResult


class KeyboardEvaluator:
    """
    Runs typing simulations and scoring, caching character maps per definition.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the evaluator.

        Args:
            config: ergonomics_scorer configuration (weights, reference_distance, default_mode)
        """
        self.config = dict(config or {})
        self.scorer = ErgonomicsScorer(self.config)
        self._maps_cache: Dict[int, Tuple[KeyboardDefinition, CharacterMaps]] = {}

    def get_maps(self, definition: KeyboardDefinition) -> CharacterMaps:
        """Character maps for a definition, built once and reused."""
        cached = self._maps_cache.get(id(definition))
        if cached is not None and cached[0] is definition:
            return cached[1]

        maps = build_character_maps(definition)
        self._maps_cache[id(definition)] = (definition, maps)
        return maps

    def resolve_mode(self, definition: KeyboardDefinition, mode: Optional[str] = None) -> str:
        return mode or self.config.get('default_mode') or detect_evaluation_mode(definition)

    def evaluate(self, definition: KeyboardDefinition,
                 mode: Optional[str] = None,
                 text: Optional[str] = None) -> Evaluation:
        """
        Simulate and score one keyboard.

        Args:
            definition: Keyboard definition
            mode: Evaluation mode (config default, then detected from the definition, if None)
            text: Text to type (default corpus of the mode when empty)

        Returns:
            Evaluation with simulation and score
        """
        mode = self.resolve_mode(definition, mode)
        simulation = TypingSimulator(self.get_maps(definition)).run(mode, text)
        score = self.scorer.score_simulation(simulation)

        logger.info("Scored %s (%s): %d", definition.name, mode, score.total)
        logger.debug("%s score breakdown:\n%s", definition.name, score.summary())
        return Evaluation(definition.name, definition, simulation, score)

    def compare(self, definitions: Sequence[KeyboardDefinition],
                mode: Optional[str] = None,
                text: Optional[str] = None) -> List[Evaluation]:
        """
        Evaluate several keyboards against the same text.

        Returns:
            Evaluations sorted by total score, best first (ties keep input order)
        """
        evaluations = [self.evaluate(definition, mode, text) for definition in definitions]
        return sorted(evaluations, key=lambda e: -e.score.total)
