"""Startup validation and configuration checks."""

import logging
from pathlib import Path

from .config import (
    default_baseline_config,
    get_dataset_path,
    get_log_level,
    get_max_concurrency,
    get_max_file_size,
)

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Set the root log level from LOG_LEVEL."""
    logging.basicConfig(
        level=get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def validate_config() -> None:
    """Validate config at startup. Raises ValueError for malformed settings."""
    config = default_baseline_config()
    max_file_size = get_max_file_size()
    max_concurrency = get_max_concurrency()
    if max_file_size <= 0:
        raise ValueError(f"BASELINE_MAX_FILE_SIZE must be positive, got {max_file_size}")
    if max_concurrency is not None and max_concurrency <= 0:
        raise ValueError(f"BASELINE_MAX_CONCURRENCY must be positive, got {max_concurrency}")

    dataset_path = get_dataset_path()
    if dataset_path and not Path(dataset_path).is_file():
        raise ValueError(f"BASELINE_DATASET_PATH does not exist: {dataset_path}")

    if not Path(".env").exists():
        logger.info("No .env file found; using environment and defaults")
    logger.info("Baseline target '%s' (strict=%s, %d allowed ids)",
                config.target, config.strict, len(config.allow))
