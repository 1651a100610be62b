#!/usr/bin/env python3
"""
CLI utilities for keyboard scoring.

Common functions for command-line argument parsing, configuration and
logging setup, and error handling shared by the command-line tools.
"""

import argparse
import functools
import logging
import sys
from typing import Dict, Any, List, Optional

from keyboard_sim.config_loader import get_config_loader
from keyboard_sim.definition import KeyboardDefinition
from keyboard_sim.simulator import EVALUATION_MODES

logger = logging.getLogger(__name__)

SCORER_NAME = 'ergonomics_scorer'
DEFAULT_LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
OUTPUT_FORMATS = ['detailed', 'csv', 'score_only']


class StandardCLIParser:
    """
    Standardized command-line argument parser for the keyboard tools.

    'score_keyboard' scores one definition; 'compare_keyboards' ranks several.
    """

    def __init__(self, program: str, config_path: str = "config.yaml"):
        """
        Initialize the CLI parser for a program.

        Args:
            program: Name of the program ('score_keyboard' or 'compare_keyboards')
            config_path: Path to configuration file used for help text
        """
        self.program = program
        self.compare = program == 'compare_keyboards'

        try:
            self.scorer_config = get_config_loader(config_path).get_scorer_config(SCORER_NAME)
        except (FileNotFoundError, ValueError) as e:
            logger.debug("Help text without configuration: %s", e)
            self.scorer_config = {}

        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        description = self.scorer_config.get('description', 'Typing ergonomics scorer for custom keyboards')
        method = self.scorer_config.get('method', 'Keystroke simulation scoring')

        parser = argparse.ArgumentParser(
            prog=f"{self.program}.py",
            description=f"{description}\n\nMethod: {method}",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=self._generate_epilog()
        )

        self._add_keyboard_arguments(parser)
        self._add_input_arguments(parser)
        if self.compare:
            self._add_comparison_output_arguments(parser)
        else:
            self._add_output_arguments(parser)
        self._add_logging_arguments(parser)

        return parser

    def _add_keyboard_arguments(self, parser: argparse.ArgumentParser) -> None:
        keyboard_group = parser.add_argument_group('Keyboard Definition')

        if self.compare:
            keyboard_group.add_argument(
                '--keyboards',
                dest='keyboards',
                nargs='+',
                required=True,
                help="Keyboard definition JSON files (every definition in each file is scored)"
            )
        else:
            keyboard_group.add_argument(
                '--keyboard',
                dest='keyboard',
                required=True,
                help="Keyboard definition JSON file"
            )
            keyboard_group.add_argument(
                '--index',
                dest='index',
                type=int,
                default=0,
                help="Which definition to score when the file holds a list (default: 0)"
            )

    def _add_input_arguments(self, parser: argparse.ArgumentParser) -> None:
        input_group = parser.add_argument_group('Input Options')

        input_group.add_argument(
            '--mode',
            dest='mode',
            choices=EVALUATION_MODES,
            help="Evaluation mode (default: detected from the keyboard definition)"
        )

        text_source = input_group.add_mutually_exclusive_group()
        text_source.add_argument(
            '--text',
            dest='text',
            help="Text to type (default: built-in corpus for the mode)"
        )
        text_source.add_argument(
            '--text-file',
            dest='text_file',
            help="UTF-8 text file to type (alternative to --text)"
        )

        input_group.add_argument(
            '--config',
            dest='config',
            default="config.yaml",
            help="Path to configuration file (default: config.yaml)"
        )

    def _add_output_arguments(self, parser: argparse.ArgumentParser) -> None:
        output_group = parser.add_argument_group('Output Options')

        output_group.add_argument(
            '--output-format',
            dest='output_format',
            choices=OUTPUT_FORMATS,
            default='detailed',
            help="Output format (default: detailed)"
        )
        output_group.add_argument(
            '--csv',
            dest='csv',
            action='store_true',
            help="Output in CSV format (same as --output-format csv)"
        )
        output_group.add_argument(
            '--detailed',
            dest='detailed',
            action='store_true',
            help="Show detailed breakdown (same as --output-format detailed)"
        )
        output_group.add_argument(
            '--score-only',
            dest='score_only',
            action='store_true',
            help="Output only the total score (same as --output-format score_only)"
        )
        output_group.add_argument(
            '--top-keys',
            dest='top_keys',
            type=int,
            help="Number of most used keys shown in detailed output (overrides config)"
        )

    def _add_comparison_output_arguments(self, parser: argparse.ArgumentParser) -> None:
        output_group = parser.add_argument_group('Output Options')

        output_group.add_argument(
            '--csv-output',
            dest='csv_output',
            help="Write the comparison table to this CSV file"
        )
        output_group.add_argument(
            '--plot',
            dest='plot',
            help="Write a grouped bar chart of the sub-scores to this image file"
        )

    def _add_logging_arguments(self, parser: argparse.ArgumentParser) -> None:
        verbosity = parser.add_mutually_exclusive_group()
        verbosity.add_argument(
            '--quiet',
            dest='quiet',
            action='store_true',
            help="Only log warnings and errors"
        )
        verbosity.add_argument(
            '--verbose',
            dest='verbose',
            action='store_true',
            help="Log debug details (map sizes, mode detection)"
        )

    def _generate_epilog(self) -> str:
        lines = ["Examples:"]

        if self.compare:
            basic_cmd = f"python {self.program}.py --keyboards flick.json qwerty.json"
            lines.append("  # Rank keyboards on the built-in corpus")
            lines.append(f"  {basic_cmd}")
            lines.append("")
            lines.append("  # Same text for every keyboard, table and chart saved")
            lines.append(f"  {basic_cmd} --text-file sample.txt --csv-output ranking.csv --plot ranking.png")
        else:
            basic_cmd = f"python {self.program}.py --keyboard flick.json"
            lines.append("  # Score with the built-in corpus")
            lines.append(f"  {basic_cmd}")
            lines.append("")
            lines.append("  # Own text, CSV output")
            lines.append(f"  {basic_cmd} --text 'こんにちは' --csv")
            lines.append("")
            lines.append("  # Second definition in a list file, romanized input")
            lines.append(f"  {basic_cmd} --index 1 --mode romanized")
        lines.append("")

        return "\n".join(lines)

    def parse_args(self, args: Optional[List[str]] = None) -> argparse.Namespace:
        """
        Parse command-line arguments with validation.

        Args:
            args: List of arguments (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        parsed_args = self.parser.parse_args(args)

        if not self.compare:
            if parsed_args.csv:
                parsed_args.output_format = 'csv'
            elif parsed_args.detailed:
                parsed_args.output_format = 'detailed'
            elif parsed_args.score_only:
                parsed_args.output_format = 'score_only'

            if parsed_args.index < 0:
                self.parser.error("--index must be zero or positive")
            if parsed_args.top_keys is not None and parsed_args.top_keys < 0:
                self.parser.error("--top-keys must be zero or positive")

        return parsed_args


def create_standard_parser(program: str, config_path: str = "config.yaml") -> StandardCLIParser:
    return StandardCLIParser(program, config_path)


def handle_common_errors(func):
    """
    Decorator to handle common CLI errors gracefully.

    Args:
        func: Function to wrap (typically main())

    Returns:
        Wrapped function returning an exit code on failure
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            print("\nOperation cancelled by user.", file=sys.stderr)
            return 130
        except FileNotFoundError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        except PermissionError as e:
            print(f"Permission error: {e}", file=sys.stderr)
            return 1
        except Exception as e:
            print(f"Unexpected error: {e}", file=sys.stderr)
            import traceback
            traceback.print_exc()
            return 1

    return wrapper


def load_run_config(config_path: str = "config.yaml") -> Dict[str, Any]:
    """
    Load the sections the command-line tools need.

    A missing configuration file is not an error: built-in defaults are used
    and a warning is logged.

    Args:
        config_path: Path to configuration file

    Returns:
        Dictionary with 'scorer', 'output_formats', 'cli' and 'logging' sections
    """
    loader = get_config_loader(config_path)
    try:
        scorer_config = loader.get_scorer_config(SCORER_NAME)
    except FileNotFoundError:
        logger.warning("Configuration file %s not found, using defaults", config_path)
        return {'scorer': {}, 'output_formats': {}, 'cli': {}, 'logging': {}}

    for issue in loader.validate_scorer_config(SCORER_NAME):
        logger.warning("Configuration: %s", issue)

    return {
        'scorer': scorer_config,
        'output_formats': loader.get_section('output_formats'),
        'cli': loader.get_section('cli'),
        'logging': loader.get_section('logging'),
    }


def setup_logging(args: Optional[argparse.Namespace] = None,
                  logging_config: Optional[Dict[str, Any]] = None) -> None:
    """
    Configure root logging for a command-line run.

    --verbose selects DEBUG, --quiet selects WARNING, otherwise the
    configured level (INFO by default) applies.
    """
    logging_config = logging_config or {}

    if args is not None and getattr(args, 'verbose', False):
        level = logging.DEBUG
    elif args is not None and getattr(args, 'quiet', False):
        level = logging.WARNING
    else:
        level = getattr(logging, str(logging_config.get('level', 'INFO')).upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format=logging_config.get('format', DEFAULT_LOG_FORMAT),
        force=True
    )


def select_definition(definitions: List[KeyboardDefinition], index: int) -> KeyboardDefinition:
    """
    Pick one definition from a loaded file.

    Raises:
        ValueError: If the index is out of range
    """
    if not definitions:
        raise ValueError("Keyboard file holds no definitions")
    if index >= len(definitions):
        raise ValueError(f"Index {index} out of range: file holds {len(definitions)} definition(s)")
    return definitions[index]


def resolve_text_source(args: argparse.Namespace, scorer_config: Dict[str, Any]) -> Optional[str]:
    """Return the text file to read, falling back to common.default_text_file."""
    if args.text is not None or args.text_file:
        return args.text_file
    return scorer_config.get('default_text_file') or None


def determine_output_mode(args: argparse.Namespace) -> str:
    """
    Determine the output mode from parsed arguments.

    Args:
        args: Parsed command-line arguments

    Returns:
        Output mode string ('csv', 'detailed', 'score_only')
    """
    if getattr(args, 'csv', False):
        return 'csv'
    elif getattr(args, 'score_only', False):
        return 'score_only'
    elif getattr(args, 'detailed', False):
        return 'detailed'

    return getattr(args, 'output_format', None) or 'detailed'
