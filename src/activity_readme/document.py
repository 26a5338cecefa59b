"""
Marker-delimited regions of a text document.

A document is handled as the list obtained by splitting its text on `\\n`, so joining
the list back with `\\n` reproduces every untouched byte, line endings included.
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union

logger = logging.getLogger(__name__)

ACTIVITY_START = "<!--RECENT_ACTIVITY:start-->"
ACTIVITY_END = "<!--RECENT_ACTIVITY:end-->"
UPDATE_START = "<!--RECENT_ACTIVITY:last_update-->"
UPDATE_END = "<!--RECENT_ACTIVITY:last_update_end-->"


class DocumentError(Exception):
    """The document can not be reconciled."""


class MarkerNotFoundError(DocumentError):
    """A required marker line is missing."""


def read_lines(path: Union[str, Path]) -> List[str]:
    """Read a document as a list of lines."""
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read().split("\n")


def write_lines(path: Union[str, Path], lines: List[str]) -> None:
    """Overwrite a document with the given lines."""
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write("\n".join(lines))


def find_marker(lines: List[str], marker: str, start: int = 0) -> int:
    """Index of the first line at or after `start` equal to `marker` once trimmed, or -1."""
    for idx in range(start, len(lines)):
        if lines[idx].strip() == marker:
            return idx
    return -1


def locate_activity_region(lines: List[str]) -> Tuple[int, Optional[int]]:
    """
    Find the activity markers.

    Returns the index of the start marker and the index of the end marker, or `None`
    for the end marker when the region has not been closed yet.
    """
    start_idx = find_marker(lines, ACTIVITY_START)
    if start_idx == -1:
        raise MarkerNotFoundError(f"Couldn't find the {ACTIVITY_START} comment")

    end_idx = find_marker(lines, ACTIVITY_END, start_idx + 1)
    if end_idx == -1:
        if find_marker(lines, ACTIVITY_END) != -1:
            raise DocumentError(f"The {ACTIVITY_END} comment must come after {ACTIVITY_START}")
        return start_idx, None

    return start_idx, end_idx


def number_lines(content: List[str]) -> List[str]:
    return [f"{idx + 1}. {line}" for idx, line in enumerate(content)]


def region_unchanged(lines: List[str], start_idx: int, end_idx: int, content: List[str]) -> bool:
    """Compare the existing region with the numbered content, ignoring surrounding whitespace."""
    old_content = "\n".join(lines[start_idx + 1 : end_idx])
    new_content = "\n".join(number_lines(content))
    return old_content.strip() == new_content.strip()


def splice_activity(lines: List[str], content: List[str]) -> bool:
    """
    Merge numbered `content` into the activity region of `lines`, in place.

    - Without an end marker, the numbered lines are inserted after the start marker,
      followed by a new end marker.
    - With an empty region, the numbered lines are inserted before the end marker.
    - Otherwise every non-blank line of the region is overwritten with the next
      numbered line. Blank lines are kept and not counted. Writing stops when the
      content runs out, so the region never grows or shrinks.

    Returns False, without touching `lines`, when the region already holds the content.
    """
    start_idx, end_idx = locate_activity_region(lines)
    first = start_idx + 1

    if end_idx is None:
        numbered = number_lines(content)
        lines[first:first] = numbered + [ACTIVITY_END]
        logger.debug(f"Inserted {len(numbered)} lines and the closing marker")
        return True

    if region_unchanged(lines, start_idx, end_idx, content):
        return False

    section = lines[first:end_idx]
    if not section:
        lines[first:first] = number_lines(content)
        return True

    count = 0
    for idx, line in enumerate(section):
        if count >= len(content):
            break
        if line.strip():
            lines[first + idx] = f"{count + 1}. {content[count]}"
            count += 1

    if count < len(content):
        logger.debug(f"Region holds {count} lines, dropped {len(content) - count} formatted lines")
    return True


def update_timestamp_region(lines: List[str], stamp: str) -> bool:
    """
    Write `stamp` into the timestamp region of `lines`, in place.

    A populated region is exactly start marker, one line, end marker. Otherwise the
    region is (re)built to that shape, reusing an end marker that already follows
    the start marker. Returns False, leaving `lines` alone, when the document has no
    timestamp region or its end marker only appears before the start marker.
    """
    start_idx = find_marker(lines, UPDATE_START)
    if start_idx == -1:
        return False

    end_idx = find_marker(lines, UPDATE_END, start_idx + 1)
    if end_idx == -1 and find_marker(lines, UPDATE_END) != -1:
        logger.warning(f"The {UPDATE_END} comment must come after {UPDATE_START}, leaving the timestamp alone")
        return False

    if end_idx == start_idx + 2:
        lines[start_idx + 1] = stamp
    elif end_idx == -1:
        lines[start_idx + 1 : start_idx + 1] = [stamp, UPDATE_END]
    else:
        lines[start_idx + 1 : end_idx] = [stamp]

    return True
