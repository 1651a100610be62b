#!/usr/bin/env python3
"""
Custom keyboard comparison

Scores several keyboard definitions against the same text and prints a
ranked table of total and sub-scores. Optionally saves the table as CSV and
a grouped bar chart of the sub-scores.

Examples:
    # Rank every definition found in two files on the built-in corpus
    python compare_keyboards.py --keyboards flick.json qwerty.json

    # Same Japanese text for every keyboard
    python compare_keyboards.py --keyboards flick.json godan.json --mode kana --text-file sample.txt

    # Save table and chart
    python compare_keyboards.py --keyboards keyboards.json --csv-output output/ranking.csv --plot output/ranking.png

Rankings output:
  CSV with columns: position, keyboard, mode, total, rank, coverage, distance,
  evenness, repeat, keystrokes, keys_used, average_distance, unresolved
  Keyboards ordered by total score (higher = better).
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from keyboard_sim.cli_utils import (create_standard_parser, handle_common_errors,
                                    load_run_config, resolve_text_source, setup_logging)
from keyboard_sim.definition import KeyboardDefinition, load_keyboard_definitions
from keyboard_sim.evaluator import KeyboardEvaluator
from keyboard_sim.output_utils import COMPONENT_LABELS, create_comparison_table
from keyboard_sim.text_utils import read_text_input

logger = logging.getLogger(__name__)


def load_all_definitions(filepaths: List[str]) -> List[KeyboardDefinition]:
    """Load every definition from every file, in command-line order."""
    definitions = []
    for filepath in filepaths:
        loaded = load_keyboard_definitions(filepath)
        logger.debug("%s: %d definition(s)", filepath, len(loaded))
        definitions.extend(loaded)
    if not definitions:
        raise ValueError("No keyboard definitions found")
    return definitions


def create_score_plot(table: pd.DataFrame, output_path: str) -> None:
    """
    Save a grouped bar chart of total and sub-scores per keyboard.

    Args:
        table: Comparison table from create_comparison_table
        output_path: Image file to write
    """
    metrics = ['total'] + list(COMPONENT_LABELS)
    labels = ['Total'] + list(COMPONENT_LABELS.values())
    keyboards = table['keyboard'].tolist()

    x = np.arange(len(metrics))
    bar_width = 0.8 / max(1, len(keyboards))
    colors = plt.cm.Set2(np.linspace(0, 1, max(3, len(keyboards))))

    fig, ax = plt.subplots(figsize=(max(10, len(metrics) * 1.5), 6))

    for i, (_, row) in enumerate(table.iterrows()):
        values = [row[metric] for metric in metrics]
        offset = (i - (len(keyboards) - 1) / 2) * bar_width
        ax.bar(x + offset, values, bar_width, label=row['keyboard'], color=colors[i % len(colors)])

    ax.set_xticks(x)
    ax.set_xticklabels(labels)
    ax.set_ylim(0, 100)
    ax.set_ylabel('Score')
    ax.set_title('Custom Keyboard Comparison', fontsize=14, fontweight='bold')
    ax.grid(True, axis='y', alpha=0.3)
    ax.legend(bbox_to_anchor=(1.02, 1), loc='upper left', fontsize=9)

    plt.tight_layout()

    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=150, bbox_inches='tight', facecolor='white', edgecolor='none')
    plt.close(fig)
    print(f"Plot saved to {output_path}")


@handle_common_errors
def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = create_standard_parser('compare_keyboards').parse_args(argv)

    run_config = load_run_config(args.config)
    setup_logging(args, run_config['logging'])

    definitions = load_all_definitions(args.keyboards)
    text = read_text_input(args.text, resolve_text_source(args, run_config['scorer']))

    evaluator = KeyboardEvaluator(run_config['scorer'])
    evaluations = evaluator.compare(definitions, args.mode, text)

    table = create_comparison_table(evaluations)

    print(f"Keyboard comparison ({len(table)} keyboards)")
    print("=" * 50)
    with pd.option_context('display.max_columns', None, 'display.width', 200):
        print(table.to_string(index=False))

    if args.csv_output:
        Path(args.csv_output).parent.mkdir(parents=True, exist_ok=True)
        table.to_csv(args.csv_output, index=False)
        print(f"Table saved to {args.csv_output}")

    if args.plot:
        create_score_plot(table, args.plot)

    return 0


if __name__ == "__main__":
    sys.exit(main())
