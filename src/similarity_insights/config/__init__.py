"""
Configuration module.

Handles loading and validation of the triage scoring weights.
"""

from .loader import ConfigLoader
from .models import ConfigError, ScoringWeights

__all__ = ["ConfigError", "ConfigLoader", "ScoringWeights"]
