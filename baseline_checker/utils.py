"""
Utility functions for the baseline checker.
"""

from bisect import bisect_right
from pathlib import Path
from typing import List, Optional, Union

from .models import Language, Position

SCRIPT_EXTENSIONS = ('.ts', '.tsx', '.js', '.jsx', '.mjs', '.cjs')
MARKUP_EXTENSIONS = ('.html', '.htm')
STYLESHEET_EXTENSIONS = ('.css', '.scss')

_LANG_MAP = {
    **{ext: Language.SCRIPT for ext in SCRIPT_EXTENSIONS},
    **{ext: Language.MARKUP for ext in MARKUP_EXTENSIONS},
    **{ext: Language.STYLESHEET for ext in STYLESHEET_EXTENSIONS},
}


def detect_language(file_path: Union[str, Path]) -> Optional[Language]:
    """Analyzer language for a file extension, None when the file is not analyzed."""
    return _LANG_MAP.get(Path(file_path).suffix.lower())


def line_starts(text: str) -> List[int]:
    """Character offsets at which each line of ``text`` starts."""
    starts = [0]
    index = text.find('\n')
    while index != -1:
        starts.append(index + 1)
        index = text.find('\n', index + 1)
    return starts


def offset_to_position(offset: int, starts: List[int]) -> Position:
    """Convert a 0-based character offset into a 1-based line/column."""
    offset = max(offset, 0)
    line_index = bisect_right(starts, offset) - 1
    return Position(line=line_index + 1, col=offset - starts[line_index] + 1)


def position_to_offset(line: int, col: int, starts: List[int]) -> int:
    """Inverse of offset_to_position for 1-based line/column values."""
    if line < 1 or not starts:
        return 0
    line_index = min(line, len(starts)) - 1
    return starts[line_index] + max(col, 1) - 1


def byte_to_char_offset(source: bytes, byte_offset: int) -> int:
    """Character offset of a UTF-8 byte offset (node spans from tree-sitter are in bytes)."""
    return len(source[:byte_offset].decode('utf-8', errors='ignore'))


def trailing_segment(feature_id: str) -> str:
    """Bare feature name: the last dotted segment of an identifier."""
    return feature_id.rsplit('.', 1)[-1] or feature_id
