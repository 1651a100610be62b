#!/usr/bin/env python3
"""
Base classes for keyboard scorers.

Provides the common interface and result structures for scoring simulated
typing sessions.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Any, Optional, Tuple
import time

from keyboard_sim.layout_utils import format_frequency_key


@dataclass
class ScoreDetails:
    """Diagnostic figures reported alongside the scores."""

    total_keystrokes: int = 0
    unique_keys_used: int = 0
    average_distance: float = 0.0
    max_frequency_key: Optional[Tuple[int, Optional[str]]] = None
    max_frequency: int = 0


@dataclass
class ScoreResult:
    """
    Standardized result container for keyboard scoring.

    ``total`` and every component are integers on a 0-100 scale.
    """

    # Core scores
    total: int
    """Composite score (higher = better)"""

    components: Dict[str, int] = field(default_factory=dict)
    """Sub-scores: coverage, distance, evenness, repeat"""

    details: ScoreDetails = field(default_factory=ScoreDetails)
    """Keystroke statistics behind the scores"""

    # Metadata
    scorer_name: str = ""
    """Name of the scoring method used"""

    metadata: Dict[str, Any] = field(default_factory=dict)
    """Additional scorer-specific metadata"""

    # Execution info
    execution_time: float = 0.0
    """Time taken to calculate scores (seconds)"""

    config_used: Dict[str, Any] = field(default_factory=dict)
    """Configuration settings used for this scoring"""

    @property
    def coverage(self) -> int:
        return self.components.get('coverage', 0)

    @property
    def distance(self) -> int:
        return self.components.get('distance', 0)

    @property
    def evenness(self) -> int:
        return self.components.get('evenness', 0)

    @property
    def repeat(self) -> int:
        return self.components.get('repeat', 0)

    def get_score(self, component_name: Optional[str] = None) -> int:
        """
        Get a specific score component or the total score.

        Args:
            component_name: Name of component score to retrieve, or None for total

        Returns:
            Requested score value

        Raises:
            KeyError: If component_name not found in components
        """
        if component_name is None:
            return self.total

        if component_name not in self.components:
            available = list(self.components.keys())
            raise KeyError(f"Component '{component_name}' not found. Available: {available}")

        return self.components[component_name]

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert result to dictionary format.

        Returns:
            Flat dictionary suitable for JSON/CSV export
        """
        result = {
            'total': self.total,
            'scorer_name': self.scorer_name,
            'execution_time': self.execution_time,
        }

        for component, score in self.components.items():
            result[f'component_{component}'] = score

        result['total_keystrokes'] = self.details.total_keystrokes
        result['unique_keys_used'] = self.details.unique_keys_used
        result['average_distance'] = self.details.average_distance
        result['max_frequency_key'] = format_frequency_key(self.details.max_frequency_key)
        result['max_frequency'] = self.details.max_frequency

        # Skip complex objects that can't be easily serialized
        for key, value in self.metadata.items():
            if isinstance(value, (str, int, float, bool)):
                result[f'meta_{key}'] = value

        return result

    def summary(self) -> str:
        """
        Get a brief summary string of the results.

        Returns:
            Human-readable summary
        """
        summary_lines = [
            f"Scorer: {self.scorer_name}",
            f"Total score: {self.total}",
        ]

        if self.components:
            summary_lines.append("Components:")
            for name, score in self.components.items():
                summary_lines.append(f"  {name}: {score}")

        if self.execution_time > 0:
            summary_lines.append(f"Execution time: {self.execution_time:.3f}s")

        return "\n".join(summary_lines)


class BaseKeyboardScorer(ABC):
    """
    Abstract base class for scoring simulated typing sessions.

    Handles configuration and result bookkeeping; subclasses implement the
    scoring methodology.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the base scorer.

        Args:
            config: Optional configuration dictionary (scorer section of config.yaml)
        """
        self.config = dict(config or {})
        self.scorer_name = self.__class__.__name__.lower().replace('scorer', '_scorer')

    @abstractmethod
    def calculate_scores(self, simulation) -> ScoreResult:
        """
        Calculate scores for a simulation result.

        Args:
            simulation: SimulationResult to score

        Returns:
            ScoreResult containing total, components and details
        """
        pass

    def score_simulation(self, simulation) -> ScoreResult:
        """
        Main entry point for scoring a simulation.

        Returns:
            ScoreResult with timing information
        """
        start_time = time.time()

        result = self.calculate_scores(simulation)

        result.execution_time = time.time() - start_time
        result.scorer_name = self.scorer_name
        result.config_used = self.config.copy()

        return result

