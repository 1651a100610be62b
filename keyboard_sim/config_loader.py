#!/usr/bin/env python3
"""
YAML configuration for the keyboard ergonomics tools.

The configuration file has a ``common`` section merged under each scorer
section, plus ``output_formats``, ``cli`` and ``logging`` sections read by
the command-line tools.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional, List


SHARED_SECTIONS = ('common', 'output_formats', 'cli', 'logging')


class ConfigLoader:
    """Reads one YAML configuration file and hands out its sections."""

    def __init__(self, config_path: str = "config.yaml"):
        self.config_path = Path(config_path)
        self._config_cache: Optional[Dict[str, Any]] = None

    def load_config(self) -> Dict[str, Any]:
        """
        Parse the configuration file once and cache the result.

        Raises:
            FileNotFoundError: If configuration file doesn't exist
            yaml.YAMLError: If YAML parsing fails
            ValueError: If the document is not a mapping of sections
        """
        if self._config_cache is not None:
            return self._config_cache

        if not self.config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                document = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Error parsing YAML configuration: {e}")

        document = document or {}
        if not isinstance(document, dict):
            raise ValueError(f"{self.config_path}: expected a mapping of sections, "
                             f"got {type(document).__name__}")

        self._config_cache = document
        return document

    def get_section(self, name: str) -> Dict[str, Any]:
        """Return one top-level section, empty when absent or null."""
        return dict(self.load_config().get(name) or {})

    def get_scorer_config(self, scorer_name: str) -> Dict[str, Any]:
        """
        Get a scorer section with the ``common`` section merged underneath.

        Args:
            scorer_name: Name of the scorer (e.g., 'ergonomics_scorer')

        Returns:
            Merged configuration; scorer settings win over common ones

        Raises:
            ValueError: If scorer not found in configuration
        """
        document = self.load_config()

        if scorer_name not in document:
            scorers = [name for name in document if name not in SHARED_SECTIONS]
            raise ValueError(f"Scorer '{scorer_name}' not found in configuration. "
                             f"Available scorers: {scorers}")

        return {**self.get_section('common'), **self.get_section(scorer_name)}

    def validate_scorer_config(self, scorer_name: str) -> List[str]:
        """
        Validate a scorer's configuration and return any issues found.

        Args:
            scorer_name: Name of the scorer to validate

        Returns:
            List of validation error messages (empty if valid)
        """
        try:
            config = self.get_scorer_config(scorer_name)
        except (ValueError, FileNotFoundError, yaml.YAMLError) as e:
            return [f"Configuration error: {e}"]

        issues = []

        for section in ['description', 'method', 'output']:
            if section not in config:
                issues.append(f"Missing required section: {section}")

        if 'output' in config and 'primary_score_name' not in (config['output'] or {}):
            issues.append("Missing primary_score_name in output configuration")

        weights = config.get('weights')
        if weights:
            negative = [name for name, weight in weights.items() if weight < 0]
            if negative:
                issues.append(f"Negative weights: {negative}")
            if abs(sum(weights.values()) - 1.0) > 1e-6:
                issues.append(f"Weights sum to {sum(weights.values()):.3f}, expected 1.0")

        reference = config.get('reference_distance')
        if reference is not None and reference <= 0:
            issues.append(f"reference_distance must be positive, got {reference}")

        return issues


# Global configuration loader instance
_config_loader: Optional[ConfigLoader] = None


def get_config_loader(config_path: str = "config.yaml") -> ConfigLoader:
    """Return the shared loader, replacing it when a different path is asked for."""
    global _config_loader

    if _config_loader is None or _config_loader.config_path != Path(config_path):
        _config_loader = ConfigLoader(config_path)

    return _config_loader


def load_scorer_config(scorer_name: str, config_path: str = "config.yaml") -> Dict[str, Any]:
    """Load the merged configuration of one scorer through the shared loader."""
    return get_config_loader(config_path).get_scorer_config(scorer_name)
