"""
Table interpolation helpers.

Out-of-range inputs are clamped to the table edges, never extrapolated.
"""

from typing import Sequence, Tuple


def linear_interpolate(x: float, x1: float, x2: float, y1: float, y2: float) -> float:
    """
    Straight-line interpolation between (x1, y1) and (x2, y2).

    y = y1 + (x - x1) * (y2 - y1) / (x2 - x1)
    """
    return y1 + (x - x1) * (y2 - y1) / (x2 - x1)


def clamp(x: float, lower: float, upper: float) -> float:
    """Limit x to the closed interval [lower, upper]."""
    return max(lower, min(upper, x))


def bracket(x: float, points: Sequence[float]) -> int:
    """
    Index of the lower breakpoint of the interval containing x.

    Parameters
    ----------
    x : float
        Value already clamped to [points[0], points[-1]]
    points : sequence of float
        Ascending breakpoints, at least two

    Returns
    -------
    int
        i such that points[i] <= x <= points[i + 1]
    """
    for i in range(len(points) - 1):
        if points[i] <= x <= points[i + 1]:
            return i
    return len(points) - 2


def table_lookup_1d(x: float, table: Sequence[Tuple[float, float]]) -> float:
    """
    Piecewise-linear lookup in an ascending (x, y) table.

    At or below the first breakpoint the first y is returned; at or above
    the last breakpoint the last y is returned.

    Parameters
    ----------
    x : float
        Lookup key
    table : sequence of (float, float)
        Breakpoints in ascending x order

    Returns
    -------
    float
        Interpolated table value
    """
    first_x, first_y = table[0]
    last_x, last_y = table[-1]
    if x <= first_x:
        return first_y
    if x >= last_x:
        return last_y

    xs = [row[0] for row in table]
    i = bracket(x, xs)
    (x1, y1), (x2, y2) = table[i], table[i + 1]
    return linear_interpolate(x, x1, x2, y1, y2)


def bilinear_lookup(
    x: float,
    y: float,
    x_points: Sequence[float],
    y_points: Sequence[float],
    grid: Sequence[Sequence[float]],
) -> float:
    """
    Bilinear interpolation on a rectangular grid.

    Both inputs are clamped to their axis range. Values are first
    interpolated along the y axis at the two bracketing x rows, then the two
    results are interpolated along x.

    Parameters
    ----------
    x, y : float
        Lookup coordinates
    x_points : sequence of float
        Ascending x axis (one grid row per point)
    y_points : sequence of float
        Ascending y axis (one grid column per point)
    grid : sequence of sequence of float
        grid[i][j] is the value at (x_points[i], y_points[j])

    Returns
    -------
    float
        Interpolated value
    """
    x = clamp(x, x_points[0], x_points[-1])
    y = clamp(y, y_points[0], y_points[-1])

    i = bracket(x, x_points)
    j = bracket(y, y_points)
    x1, x2 = x_points[i], x_points[i + 1]
    y1, y2 = y_points[j], y_points[j + 1]

    at_x1 = linear_interpolate(y, y1, y2, grid[i][j], grid[i][j + 1])
    at_x2 = linear_interpolate(y, y1, y2, grid[i + 1][j], grid[i + 1][j + 1])
    return linear_interpolate(x, x1, x2, at_x1, at_x2)


def nearest_standard_value(x: float, candidates: Sequence[float]) -> float:
    """
    Candidate closest to x.

    Candidates are scanned in ascending order; on a tie the first one found
    (the smaller) wins.
    """
    ordered = sorted(candidates)
    nearest = ordered[0]
    min_diff = abs(x - nearest)
    for candidate in ordered[1:]:
        diff = abs(x - candidate)
        if diff < min_diff:
            nearest, min_diff = candidate, diff
    return nearest
