"""Scoring and level progression rules."""

from __future__ import annotations

# Base points for clearing 1, 2, 3 or 4 rows at once, multiplied by level.
LINE_CLEAR_POINTS = (40, 100, 300, 1200)

SOFT_DROP_POINTS = 1
HARD_DROP_POINTS = 2

LINES_PER_LEVEL = 10

BASE_DROP_INTERVAL_MS = 1000
DROP_INTERVAL_STEP_MS = 50
MIN_DROP_INTERVAL_MS = 100


def line_clear_score(lines: int, level: int) -> int:
    """Return the points awarded for clearing ``lines`` rows at ``level``.

    Raises:
        ValueError: If ``lines`` is not between 0 and 4.
    """

    if lines == 0:
        return 0
    if not 1 <= lines <= len(LINE_CLEAR_POINTS):
        raise ValueError(f"Cannot clear {lines} rows with a single piece")
    return LINE_CLEAR_POINTS[lines - 1] * level


def level_for_lines(lines: int) -> int:
    """Return the level reached after clearing ``lines`` rows in total."""

    return lines // LINES_PER_LEVEL + 1


def drop_interval_ms(level: int) -> int:
    """Return the gravity interval in milliseconds for ``level``.

    The interval shrinks by a fixed step per level down to a floor of
    :data:`MIN_DROP_INTERVAL_MS`.
    """

    return max(MIN_DROP_INTERVAL_MS, BASE_DROP_INTERVAL_MS - (level - 1) * DROP_INTERVAL_STEP_MS)
