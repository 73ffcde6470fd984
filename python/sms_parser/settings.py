"""
Parser Settings Module

Loads thresholds and tuning constants from config/parser_settings.yaml.
"""

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

CONFIG_DIR_ENV = "SMS_PARSER_CONFIG_DIR"


def default_config_dir() -> Path:
    """Return the configuration directory, honouring SMS_PARSER_CONFIG_DIR."""
    override = os.getenv(CONFIG_DIR_ENV)
    if override:
        return Path(override)
    return Path(__file__).parent.parent.parent / "config"


@dataclass(frozen=True)
class ParserSettings:
    """Tunable thresholds for parsing and routing."""

    min_confidence: float = 0.4  # Below this an SMS parse is discarded
    quarantine_threshold: float = 0.6  # Below this a capture goes to review
    confidence_half_life_days: float = 365.0
    default_trust_score: float = 0.5
    content_weight: float = 0.7  # Share of final confidence from content

    @classmethod
    def load(cls, config_dir: Path | str | None = None) -> "ParserSettings":
        """Load settings from parser_settings.yaml, falling back to defaults.

        Args:
            config_dir: Directory holding parser_settings.yaml

        Returns:
            ParserSettings instance
        """
        config_dir = Path(config_dir) if config_dir else default_config_dir()
        settings_file = config_dir / "parser_settings.yaml"

        if not settings_file.exists():
            logger.warning(f"Parser settings file not found: {settings_file}")
            return cls()

        with open(settings_file) as f:
            data = yaml.safe_load(f) or {}

        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning(f"Ignoring unknown parser settings: {sorted(unknown)}")

        values = {}
        for key, value in data.items():
            if key not in known:
                continue
            if value is None:
                logger.warning(f"Parser setting '{key}' is empty, using default")
                continue
            values[key] = float(value)

        half_life = values.get("confidence_half_life_days")
        if half_life is not None and not half_life > 0:
            logger.warning(f"Confidence half-life must be positive, got {half_life}; using default")
            del values["confidence_half_life_days"]

        settings = cls(**values)
        logger.info(f"Loaded parser settings from {settings_file}")
        return settings


_settings: ParserSettings | None = None


def get_settings() -> ParserSettings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = ParserSettings.load()
    return _settings
