"""Read raw itinerary text and keep only segment record lines."""

from pathlib import Path
from typing import Iterable, List, Union

from trip_builder.config import SEGMENT_MARKER


def filter_segment_lines(lines: Iterable[str]) -> List[str]:
    """Strip each line, drop blanks and anything that is not a record."""
    segment_lines = []
    for line in lines:
        line = line.strip()
        if not line:
            continue
        if line.startswith(SEGMENT_MARKER):
            segment_lines.append(line)
    return segment_lines


def read_segment_lines(path: Union[str, Path]) -> List[str]:
    text = Path(path).read_text(encoding="utf-8")
    return filter_segment_lines(text.splitlines())
