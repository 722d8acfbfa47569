"""File discovery: resolve which sources of a project get analyzed."""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

logger = logging.getLogger(__name__)

DEFAULT_PATTERNS = (
    'src/**/*.ts',
    'src/**/*.html',
    'src/**/*.css',
    'src/**/*.scss',
)

# Directories to exclude
EXCLUDE_DIRS = {
    '.git', '.svn', '.hg', '__pycache__', 'node_modules',
    '.angular', '.cache', '.nx', 'coverage', 'dist', 'build', 'out',
    '.idea', '.vscode',
}

# Test and declaration files are not application code.
EXCLUDE_SUFFIXES = (
    '.spec.ts', '.test.ts', '.spec.js', '.test.js', '.d.ts',
)

DEFAULT_MAX_FILE_SIZE = 1024 * 1024


def _is_excluded(path: Path, root: Path) -> bool:
    try:
        parts = path.relative_to(root).parts
    except ValueError:
        parts = path.parts
    if any(part in EXCLUDE_DIRS for part in parts[:-1]):
        return True
    return path.name.lower().endswith(EXCLUDE_SUFFIXES)


def discover_files(project_root: Union[str, Path],
                   patterns: Optional[Sequence[str]] = None) -> List[Path]:
    """Find source files under ``project_root`` matching glob ``patterns``.

    Args:
        project_root: Folder to search
        patterns: Glob patterns relative to the root (default: DEFAULT_PATTERNS)

    Returns:
        Sorted, de-duplicated list of absolute file paths
    """
    root = Path(project_root).resolve()
    if not root.is_dir():
        raise ValueError(f"Project root must be a folder: {root}")

    found = set()
    for pattern in patterns or DEFAULT_PATTERNS:
        for file_path in root.glob(pattern):
            if not file_path.is_file():
                continue
            if _is_excluded(file_path, root):
                continue
            found.add(file_path.resolve())

    files = sorted(found)
    logger.debug("Discovered %d files under %s", len(files), root)
    return files


def resolve_files(project_root: Union[str, Path], files: Iterable[Union[str, Path]]) -> List[Path]:
    """Make an explicit file list absolute (relative entries are under the root), keeping its order."""
    root = Path(project_root).resolve()
    resolved: List[Path] = []
    seen = set()
    for entry in files:
        path = Path(entry)
        if not path.is_absolute():
            path = root / path
        path = path.resolve()
        if path not in seen:
            seen.add(path)
            resolved.append(path)
    return resolved


def is_within_size_limit(file_path: Union[str, Path], max_file_size: Optional[int] = DEFAULT_MAX_FILE_SIZE) -> bool:
    """True if the file is no larger than ``max_file_size`` bytes (None disables the limit)."""
    if max_file_size is None:
        return True
    return Path(file_path).stat().st_size <= max_file_size
