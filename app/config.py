"""Configuration from environment."""

import os
from typing import FrozenSet, Optional

from dotenv import load_dotenv

from baseline_checker.discovery import DEFAULT_MAX_FILE_SIZE
from baseline_checker.models import BaselineConfig

load_dotenv()


def get_baseline_target() -> str:
    """'widely', 'newly' or a year. Default: widely."""
    return os.environ.get("BASELINE_TARGET", "widely").strip()


def get_baseline_strict() -> bool:
    return os.environ.get("BASELINE_STRICT", "").strip().lower() in ("1", "true", "yes", "on")


def get_baseline_allow() -> FrozenSet[str]:
    """Comma-separated feature ids exempt from diagnostics."""
    raw = os.environ.get("BASELINE_ALLOW", "")
    return frozenset(part.strip() for part in raw.split(",") if part.strip())


def get_max_file_size() -> int:
    """Largest analyzed file in bytes. Default: 1 MiB."""
    value = os.environ.get("BASELINE_MAX_FILE_SIZE", "").strip()
    return int(value) if value else DEFAULT_MAX_FILE_SIZE


def get_max_concurrency() -> Optional[int]:
    """Worker threads per analysis. Default: CPU count."""
    value = os.environ.get("BASELINE_MAX_CONCURRENCY", "").strip()
    return int(value) if value else None


def get_dataset_path() -> Optional[str]:
    """Alternate web-features dataset; the bundled snapshot when unset."""
    return os.environ.get("BASELINE_DATASET_PATH", "").strip() or None


def get_log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").strip().upper()


def get_host() -> str:
    return os.environ.get("HOST", "0.0.0.0").strip()


def get_port() -> int:
    try:
        return int(os.environ.get("PORT", "8000"))
    except ValueError:
        return 8000


def default_baseline_config() -> BaselineConfig:
    """Run policy from the environment. Raises ValueError for a malformed target."""
    return BaselineConfig.build(
        target=get_baseline_target(),
        strict=get_baseline_strict(),
        allow=get_baseline_allow(),
    )
