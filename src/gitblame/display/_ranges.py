"""Line range coalescing."""

from collections.abc import Iterable


def lines_to_ranges(lines: Iterable[int]) -> list[tuple[int, int]]:
    """Merge line numbers into inclusive ranges of consecutive lines.

    Example:
        >>> lines_to_ranges([1, 2, 3, 7, 9, 10])
        [(1, 3), (7, 7), (9, 10)]
    """
    ranges: list[tuple[int, int]] = []
    for line in sorted(set(lines)):
        if ranges and ranges[-1][1] + 1 == line:
            ranges[-1] = (ranges[-1][0], line)
        else:
            ranges.append((line, line))
    return ranges


def format_ranges(ranges: Iterable[tuple[int, int]]) -> str:
    """Render ranges as ``1-3, 7, 9-10``."""
    return ", ".join(
        str(start) if start == end else f"{start}-{end}" for start, end in ranges
    )
