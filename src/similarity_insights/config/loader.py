"""Configuration loader for scoring weights."""

from pathlib import Path
from typing import Any

import yaml

from .models import ConfigError, ScoringWeights


class ConfigLoader:
    """Loads and validates configuration files."""

    def __init__(self, config_dir: Path | None = None):
        """Initialize the config loader.

        Args:
            config_dir: Directory relative config paths resolve against.
                Defaults to the current working directory.
        """
        self.config_dir = config_dir or Path.cwd()

    def load_weights(self, weights_file: str | Path) -> ScoringWeights:
        """Load triage scoring weights from YAML.

        The file may hold the weights at the top level or under a
        ``scoring_weights`` key. An empty file yields the defaults.

        Args:
            weights_file: Path to the weights YAML file

        Returns:
            Parsed ScoringWeights object
        """
        path = self._resolve_path(weights_file)
        data = self._load_yaml(path)
        if "scoring_weights" in data:
            data = data["scoring_weights"] or {}
        if not isinstance(data, dict):
            raise ConfigError(f"Scoring weights must be a mapping: {path}")
        return ScoringWeights.from_dict(data)

    def _resolve_path(self, file_path: str | Path) -> Path:
        """Resolve a config file path."""
        path = Path(file_path).expanduser()
        if not path.is_absolute():
            path = self.config_dir / path
        return path

    def _load_yaml(self, path: Path) -> dict[str, Any]:
        """Load and parse a YAML file."""
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config file must contain a mapping: {path}")
        return data
