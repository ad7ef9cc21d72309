"""Mapping configuration (thresholds, tolerances and scoring weights)."""

import json
import logging
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .ports import MappingConfigError

logger = logging.getLogger(__name__)


class MappingConfig(BaseModel):
    """Immutable configuration supplied once when the engine is built.

    Weights need not sum to 1; the total score is capped at 1.0.
    """
    model_config = ConfigDict(frozen=True, extra="ignore")

    auto_map_threshold: float = Field(default=0.85, ge=0.0, le=1.0)
    confidence_delta: float = Field(default=0.12, ge=0.0, le=1.0)
    size_tolerance_mm: float = Field(default=2.0, gt=0.0)
    fuzzy_weight: float = Field(default=0.6, ge=0.0)
    size_weight: float = Field(default=0.3, ge=0.0)
    material_weight: float = Field(default=0.1, ge=0.0)
    alias_weight: float = Field(default=0.1, ge=0.0)
    min_candidate_score: float = Field(default=0.1, ge=0.0, le=1.0)


def load_mapping_config(path: Optional[Union[str, Path]]) -> MappingConfig:
    """Load the ``mapping`` section of a JSON config file.

    A missing file yields the defaults; a present but malformed file is an
    error, since silently matching with the wrong thresholds is worse than
    not starting.

    Args:
        path: Path to config.json (None for defaults)

    Returns:
        Frozen MappingConfig

    Raises:
        MappingConfigError: If the file is not valid JSON or values are out of range
    """
    if path is None:
        return MappingConfig()

    config_path = Path(path)
    if not config_path.exists():
        logger.warning(f"Mapping config {config_path} not found, using defaults")
        return MappingConfig()

    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise MappingConfigError(f"Failed to read mapping config {config_path}: {e}") from e

    section = data.get("mapping", data) if isinstance(data, dict) else None
    if not isinstance(section, dict):
        raise MappingConfigError(f"Mapping config {config_path} must contain a JSON object")

    try:
        config = MappingConfig(**section)
    except ValidationError as e:
        raise MappingConfigError(f"Invalid mapping config {config_path}: {e}") from e

    logger.info(f"Loaded mapping config from {config_path}")
    return config
