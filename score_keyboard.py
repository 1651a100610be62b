#!/usr/bin/env python3
"""
Typing ergonomics score for a custom software keyboard.

Builds the character map of a keyboard definition, simulates typing a text
on it and scores the keystrokes on coverage, travel distance, key-load
evenness and repeats.

Examples:
    # Built-in corpus for the detected mode (kana, romanized or latin)
    python score_keyboard.py --keyboard flick.json

    # Own text, one CSV row
    python score_keyboard.py --keyboard flick.json --text-file sample.txt --csv

    # Second definition of a list file, forced romanized input
    python score_keyboard.py --keyboard keyboards.json --index 1 --mode romanized

Input format:
  JSON keyboard definition (one object or a list of objects) with
  identifier, language, input_style, metadata.display_name and
  interface.{key_style, key_layout, keys}.
"""

import logging
import sys
from typing import List, Optional

from keyboard_sim.cli_utils import (create_standard_parser, determine_output_mode,
                                    handle_common_errors, load_run_config,
                                    resolve_text_source, select_definition, setup_logging)
from keyboard_sim.definition import load_keyboard_definitions
from keyboard_sim.evaluator import KeyboardEvaluator
from keyboard_sim.output_utils import print_results
from keyboard_sim.text_utils import read_text_input

logger = logging.getLogger(__name__)


@handle_common_errors
def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = create_standard_parser('score_keyboard').parse_args(argv)

    run_config = load_run_config(args.config)
    setup_logging(args, run_config['logging'])

    definition = select_definition(load_keyboard_definitions(args.keyboard), args.index)
    logger.debug("Loaded %s (%d keys)", definition.name, len(definition.keys))

    text = read_text_input(args.text, resolve_text_source(args, run_config['scorer']))
    if text is None:
        logger.info("No text given, using the built-in corpus")

    evaluator = KeyboardEvaluator(run_config['scorer'])
    evaluation = evaluator.evaluate(definition, args.mode, text)

    output_format = determine_output_mode(args)
    output_config = dict(run_config['output_formats'].get(output_format) or {})
    if output_format == 'detailed':
        output_config.setdefault('max_unresolved_shown', run_config['cli'].get('max_unresolved_shown', 30))
        if args.top_keys is not None:
            output_config['top_keys'] = args.top_keys
        print(f"{definition.name} ({evaluation.simulation.mode})")
        print("=" * 50)

    print_results(evaluation.score, output_format, output_config,
                  simulation=evaluation.simulation, definition=definition)

    return 0


if __name__ == "__main__":
    sys.exit(main())
