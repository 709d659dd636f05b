"""
Runtime settings loaded from YAML.
"""
import os
from pathlib import Path
from typing import Any, Dict, Optional, Tuple
import logging

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigError
from ..models.schema import ExtractionOptions

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = Path(__file__).parent.parent / "config" / "default.yaml"


def default_workers() -> int:
    return max(1, min(4, os.cpu_count() or 1))


class RuntimeSettings(BaseModel):
    """Host-side settings: worker pool, rendering and OCR."""
    model_config = ConfigDict(extra="forbid")

    max_workers: int = Field(default_factory=default_workers, ge=1)
    render_zoom: float = Field(2.0, gt=0)
    ocr_language: str = "eng"
    line_tolerance: float = Field(2.0, gt=0)
    header_line_count: int = Field(10, ge=1)


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read settings file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Settings file {path} must contain a mapping")
    return data


def load_settings(path: Optional[Path] = None) -> Tuple[RuntimeSettings, ExtractionOptions]:
    """
    Load runtime settings and core options.

    Args:
        path: YAML file; the packaged defaults are used when omitted

    Returns:
        (RuntimeSettings, ExtractionOptions)
    """
    config_path = Path(path) if path else DEFAULT_CONFIG
    data = _read_yaml(config_path)
    options_data = data.pop('options', None) or {}

    try:
        settings = RuntimeSettings(**data)
        options = ExtractionOptions.model_validate(options_data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {config_path}: {e}") from e

    logger.debug(f"Loaded settings from {config_path}")
    return settings, options
