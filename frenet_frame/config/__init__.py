"""Configuration management module."""

import yaml
from pathlib import Path
from typing import List, Optional
from dataclasses import dataclass, asdict
from loguru import logger

from ..core.cartesian_frenet_conversion import (
    KAPPA_DENOMINATOR_EPSILON,
    REFERENCE_S_TOLERANCE,
)


LOG_LEVELS = ['TRACE', 'DEBUG', 'INFO', 'SUCCESS', 'WARNING', 'ERROR', 'CRITICAL']


@dataclass
class ConversionConfig:
    """Configuration for frame conversion.

    Attributes:
        reference_s_tolerance: Allowed mismatch between the reference point
            arc length and s_condition[0] [m]
        kappa_epsilon: Degenerate-denominator threshold for curvature
        projection_samples: Number of samples for the coarse nearest-point search
        projection_window: Half width of the local search window around the
            previous match [m]
        log_level: Loguru level for the stderr sink
    """
    reference_s_tolerance: float = REFERENCE_S_TOLERANCE
    kappa_epsilon: float = KAPPA_DENOMINATOR_EPSILON
    projection_samples: int = 200
    projection_window: float = 10.0
    log_level: str = 'INFO'

    # Internal: loaded from
    config_path: Optional[str] = None


class ConfigValidationError(ValueError):
    """Raised when configuration validation fails."""
    pass


def validate_config(config: ConversionConfig) -> None:
    """Validate configuration values.

    Args:
        config: Configuration to validate

    Raises:
        ConfigValidationError: If validation fails
    """
    errors: List[str] = []

    if config.reference_s_tolerance <= 0:
        errors.append(f"reference_s_tolerance must be positive, got {config.reference_s_tolerance}")
    if config.kappa_epsilon <= 0:
        errors.append(f"kappa_epsilon must be positive, got {config.kappa_epsilon}")
    if config.projection_samples < 2:
        errors.append(f"projection_samples must be at least 2, got {config.projection_samples}")
    if config.projection_window <= 0:
        errors.append(f"projection_window must be positive, got {config.projection_window}")
    if config.log_level not in LOG_LEVELS:
        errors.append(f"log_level must be one of {LOG_LEVELS}, got '{config.log_level}'")

    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ConfigValidationError(error_msg)


def load_config(config_path: str) -> ConversionConfig:
    """Load configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Loaded configuration
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path, 'r') as f:
            config_dict = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse YAML file {config_path}: {e}") from e

    if config_dict is None:
        raise ValueError(f"YAML file {config_path} is empty or contains no valid content")

    try:
        config = ConversionConfig(**config_dict)
    except TypeError as e:
        raise ValueError(f"Invalid configuration structure in {config_path}: {e}") from e

    config.config_path = str(config_path)

    try:
        validate_config(config)
    except ConfigValidationError:
        logger.error(f"Configuration validation failed for {config_path}")
        raise

    logger.info(f"Configuration loaded and validated from {config_path}")

    return config


def save_config(config: ConversionConfig, config_path: str):
    """Save configuration to YAML file.

    Args:
        config: Configuration to save
        config_path: Path to save YAML file
    """
    config_path = Path(config_path)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    config_dict = asdict(config)
    config_dict.pop('config_path')

    with open(config_path, 'w') as f:
        yaml.safe_dump(config_dict, f, default_flow_style=False, indent=2)

    logger.info(f"Configuration saved to {config_path}")


__all__ = [
    'ConversionConfig',
    'ConfigValidationError',
    'validate_config',
    'load_config',
    'save_config',
]
