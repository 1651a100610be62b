#!/usr/bin/env python3
"""
Ergonomics scorer for simulated typing sessions.

Combines four sub-scores into a 0-100 total:

  - **coverage**: share of input characters the keyboard could produce
  - **distance**: average travel between consecutive keystrokes, scored
    against a reference distance (3 grid units scores zero)
  - **evenness**: normalized Shannon entropy of per-key(+zone) usage
  - **repeat**: penalty for consecutive keystrokes on the same key and zone

Weights default to 0.25 / 0.30 / 0.25 / 0.20 and can be overridden in the
``ergonomics_scorer`` section of config.yaml.
"""

import math
from typing import Dict, Any, List, Optional

import numpy as np

from keyboard_sim.base_scorer import BaseKeyboardScorer, ScoreResult, ScoreDetails


DEFAULT_WEIGHTS = {
    'coverage': 0.25,
    'distance': 0.30,
    'evenness': 0.25,
    'repeat': 0.20,
}

DEFAULT_REFERENCE_DISTANCE = 3.0

RANKS = (
    (90, 'S'),
    (80, 'A'),
    (70, 'B'),
    (60, 'C'),
    (50, 'D'),
)


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with halves going up (2.5 -> 3), unlike the built-in banker's rounding."""
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def score_rank(total: int) -> str:
    """Letter rank for a total score."""
    for threshold, rank in RANKS:
        if total >= threshold:
            return rank
    return 'F'


def calculate_total_distance(key_hits: List) -> float:
    """Sum of Euclidean distances between the centers of consecutive keystrokes."""
    if len(key_hits) < 2:
        return 0.0
    centers = np.array([hit.center for hit in key_hits], dtype=float)
    steps = np.diff(centers, axis=0)
    return float(np.hypot(steps[:, 0], steps[:, 1]).sum())


def calculate_evenness(frequency: Dict) -> float:
    """
    Normalized Shannon entropy of a frequency table.

    Returns:
        Value in [0, 1]; 0 when fewer than two keys were used
    """
    counts = np.array([count for count in frequency.values() if count > 0], dtype=float)
    if len(counts) < 2:
        return 0.0

    p = counts / counts.sum()
    entropy = float(-(p * np.log2(p)).sum())
    return entropy / math.log2(len(counts))


def calculate_repeat_rate(key_hits: List) -> float:
    """Fraction of consecutive keystroke pairs on the same position and zone."""
    if len(key_hits) < 2:
        return 0.0

    repeats = 0
    for prev, curr in zip(key_hits, key_hits[1:]):
        if prev.x == curr.x and prev.y == curr.y and prev.zone == curr.zone:
            repeats += 1
    return repeats / (len(key_hits) - 1)


class ErgonomicsScorer(BaseKeyboardScorer):
    """Weighted coverage / distance / evenness / repeat scorer."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        super().__init__(config)
        self.weights = {**DEFAULT_WEIGHTS, **(self.config.get('weights') or {})}
        self.reference_distance = float(self.config.get('reference_distance', DEFAULT_REFERENCE_DISTANCE))
        if self.reference_distance <= 0:
            raise ValueError(f"reference_distance must be positive, got {self.reference_distance:g}")

    def calculate_scores(self, simulation) -> ScoreResult:
        key_hits = simulation.key_hits
        hit_count = len(key_hits)

        coverage = simulation.mapped_chars / simulation.total_chars if simulation.total_chars > 0 else 0.0

        total_distance = calculate_total_distance(key_hits)
        average_distance = total_distance / (hit_count - 1) if hit_count > 1 else 0.0
        distance_score = clamp(100 - (average_distance / self.reference_distance) * 100)

        evenness = calculate_evenness(simulation.frequency) if hit_count > 0 else 0.0

        repeat_rate = calculate_repeat_rate(key_hits)
        repeat_score = (1 - repeat_rate) * 100

        weighted = (coverage * 100 * self.weights['coverage'] +
                    distance_score * self.weights['distance'] +
                    evenness * 100 * self.weights['evenness'] +
                    repeat_score * self.weights['repeat'])
        total = int(round_half_up(clamp(weighted)))

        max_key = None
        max_count = 0
        for freq_key, count in simulation.frequency.items():
            if count > max_count:
                max_key, max_count = freq_key, count

        return ScoreResult(
            total=total,
            components={
                'coverage': int(round_half_up(coverage * 100)),
                'distance': int(round_half_up(distance_score)),
                'evenness': int(round_half_up(evenness * 100)),
                'repeat': int(round_half_up(repeat_score)),
            },
            details=ScoreDetails(
                total_keystrokes=hit_count,
                unique_keys_used=len(simulation.frequency),
                average_distance=round_half_up(average_distance, 2),
                max_frequency_key=max_key,
                max_frequency=max_count,
            ),
            metadata={
                'rank': score_rank(total),
                'mode': simulation.mode,
                'total_chars': simulation.total_chars,
                'mapped_chars': simulation.mapped_chars,
                'unresolved_unique_chars': len(simulation.unresolved),
                'keystrokes_per_char': hit_count / simulation.mapped_chars if simulation.mapped_chars > 0 else 0.0,
                'repeat_rate': repeat_rate,
                'total_distance': total_distance,
            },
        )


def calculate_score(simulation, config: Optional[Dict[str, Any]] = None) -> ScoreResult:
    """
    Score a simulated typing session.

    Args:
        simulation: SimulationResult from the typing simulator
        config: Optional ergonomics_scorer configuration (weights, reference_distance)

    Returns:
        ScoreResult
    """
    return ErgonomicsScorer(config).score_simulation(simulation)
