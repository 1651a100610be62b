#!/usr/bin/env python3
"""
Output utilities for keyboard scoring.

Common functions for formatting and displaying scoring results in various formats.
"""

from typing import Dict, Any, List, Optional
import sys

import pandas as pd

from keyboard_sim.base_scorer import ScoreResult
from keyboard_sim.layout_utils import (format_frequency_key, frequency_key_label,
                                       key_frequency, flick_frequency)
from keyboard_sim.text_utils import summarize_unresolved


COMPONENT_LABELS = {
    'coverage': 'Coverage (%)',
    'distance': 'Distance',
    'evenness': 'Evenness (%)',
    'repeat': 'Repeat avoidance',
}


def format_csv_output(result: ScoreResult,
                      config: Optional[Dict[str, Any]] = None,
                      include_metadata: bool = True) -> str:
    """
    Format scoring results as CSV output.

    Args:
        result: ScoreResult object to format
        config: Output format configuration
        include_metadata: Whether to include metadata fields

    Returns:
        CSV formatted string
    """
    if config is None:
        config = {}

    delimiter = config.get('delimiter', ',')
    precision = config.get('precision', 2)
    include_headers = config.get('include_headers', True)

    row = result.to_dict()
    if not include_metadata:
        row = {k: v for k, v in row.items() if not k.startswith('meta_')}
        row.pop('execution_time', None)

    values = []
    for value in row.values():
        if isinstance(value, float):
            values.append(f"{value:.{precision}f}")
        else:
            values.append(str(value))

    lines = []
    if include_headers:
        lines.append(delimiter.join(row.keys()))
    lines.append(delimiter.join(values))

    return '\n'.join(lines)


def format_score_only_output(result: ScoreResult,
                             config: Optional[Dict[str, Any]] = None,
                             include_components: bool = False) -> str:
    """
    Format scoring results as score-only output (compact format).

    Returns:
        Space-separated scores string
    """
    if config is None:
        config = {}

    separator = config.get('separator', ' ')

    scores = [str(result.total)]
    if include_components:
        for component in COMPONENT_LABELS:
            if component in result.components:
                scores.append(str(result.components[component]))

    return separator.join(scores)


def format_top_keys(simulation, definition=None, limit: int = 10) -> List[str]:
    """
    Format the most used keys (with zone) as bar-chart lines.

    Args:
        simulation: SimulationResult holding the frequency table
        definition: Keyboard definition used for key labels (raw keys if None)
        limit: Number of keys to show

    Returns:
        List of formatted lines
    """
    entries = sorted(simulation.frequency.items(), key=lambda item: -item[1])[:limit]
    if not entries:
        return []

    total_hits = sum(simulation.frequency.values())
    max_count = entries[0][1]
    lines = []
    for freq_key, count in entries:
        label = frequency_key_label(definition, freq_key) if definition else format_frequency_key(freq_key)
        bar = '█' * max(1, round(20 * count / max_count))
        lines.append(f"  {label:<8} {bar:<20} {count:6d} {100 * count / total_hits:5.1f}%")
    return lines


def format_detailed_output(result: ScoreResult,
                           config: Optional[Dict[str, Any]] = None,
                           simulation=None,
                           definition=None) -> str:
    """
    Format scoring results as detailed human-readable output.

    Args:
        result: ScoreResult object to format
        config: Output format configuration
        simulation: SimulationResult behind the score (adds key usage and unresolved characters)
        definition: Keyboard definition (adds key labels)

    Returns:
        Formatted detailed output string
    """
    if config is None:
        config = {}

    show_breakdown = config.get('show_breakdown', True)
    top_keys = config.get('top_keys', 10)
    max_unresolved = config.get('max_unresolved_shown', 30)

    lines = []

    rank = result.metadata.get('rank')
    lines.append(f"Total score: {result.total}/100" + (f" [{rank}]" if rank else ""))

    if result.components:
        lines.append("")
        lines.append("Scores:")
        for component, score in result.components.items():
            component_name = COMPONENT_LABELS.get(component, component.replace('_', ' ').capitalize())
            lines.append(f"  {component_name:<28}: {score:8d}")

    details = result.details
    lines.append("")
    lines.append("Keystrokes:")
    lines.append(f"  {'Total keystrokes':<28}: {details.total_keystrokes:8d}")
    lines.append(f"  {'Keys used':<28}: {details.unique_keys_used:8d}")
    lines.append(f"  {'Average distance':<28}: {details.average_distance:8.2f}")
    if details.max_frequency_key is not None:
        if definition is not None:
            key_name = frequency_key_label(definition, details.max_frequency_key)
        else:
            key_name = format_frequency_key(details.max_frequency_key)
        lines.append(f"  {'Most used key':<28}: {key_name} ({details.max_frequency})")
    if simulation is not None:
        lines.append(f"  {'Characters typed':<28}: {simulation.mapped_chars:8d} / {simulation.total_chars}")
        lines.append(f"  {'Prepared text length':<28}: {simulation.text_length:8d}")
        if simulation.key_hits:
            per_key = key_frequency(simulation)
            busiest = max(per_key, key=per_key.get)
            busiest_name = frequency_key_label(definition, (busiest, None)) if definition else str(busiest)
            flicks = sum(counts['total'] - counts['center'] for counts in flick_frequency(simulation).values())
            lines.append(f"  {'Busiest key (all zones)':<28}: {busiest_name} ({per_key[busiest]})")
            lines.append(f"  {'Flick keystrokes':<28}: {flicks:8d}")

    if result.metadata:
        lines.append("")
        lines.append("Additional information:")
        for key, value in result.metadata.items():
            if key == 'rank' or not isinstance(value, (str, int, float, bool)):
                continue
            key_name = key.replace('_', ' ').capitalize()
            if isinstance(value, float):
                lines.append(f"  {key_name:<28}: {value:8.2f}")
            else:
                lines.append(f"  {key_name:<28}: {value}")

    if show_breakdown and simulation is not None:
        top_lines = format_top_keys(simulation, definition, top_keys)
        if top_lines:
            lines.append("")
            lines.append(f"Most used keys (top {len(top_lines)}):")
            lines.extend(top_lines)

        if simulation.unresolved:
            lines.append("")
            lines.append(f"Unresolved characters ({len(simulation.unresolved)}):")
            lines.append(f"  {summarize_unresolved(simulation.unresolved, max_unresolved)}")

    return '\n'.join(lines)


def print_results(result: ScoreResult,
                  output_format: str = "detailed",
                  config: Optional[Dict[str, Any]] = None,
                  simulation=None,
                  definition=None,
                  file=None) -> None:
    """
    Print scoring results in the specified format.

    Args:
        result: ScoreResult object to print
        output_format: Format type ('detailed', 'csv', 'score_only')
        config: Output format configuration
        simulation: SimulationResult for the detailed breakdown
        definition: Keyboard definition for key labels
        file: File object to write to (defaults to stdout)
    """
    if file is None:
        file = sys.stdout

    if output_format == "csv":
        output = format_csv_output(result, config)
    elif output_format == "score_only":
        output = format_score_only_output(result, config)
    elif output_format == "detailed":
        output = format_detailed_output(result, config, simulation, definition)
    else:
        raise ValueError(f"Unknown output format: {output_format}")

    print(output, file=file)


def create_comparison_table(evaluations: List) -> pd.DataFrame:
    """
    Build a comparison table from evaluations.

    Args:
        evaluations: List of Evaluation objects (already ordered)

    Returns:
        DataFrame with one row per keyboard, ranked by total score
    """
    rows = []
    for evaluation in evaluations:
        score = evaluation.score
        rows.append({
            'keyboard': evaluation.name,
            'mode': evaluation.simulation.mode,
            'total': score.total,
            'rank': score.metadata.get('rank', ''),
            **{name: score.components.get(name, 0) for name in COMPONENT_LABELS},
            'keystrokes': score.details.total_keystrokes,
            'keys_used': score.details.unique_keys_used,
            'average_distance': score.details.average_distance,
            'unresolved': len(evaluation.simulation.unresolved),
        })

    table = pd.DataFrame(rows)
    if not table.empty:
        table.insert(0, 'position', table['total'].rank(method='min', ascending=False).astype(int))
    return table
