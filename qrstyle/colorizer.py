"""Square colorizer: which colour each dark module is painted."""

from qrstyle.config import DEFAULT_SQUARE_COLOR, StyleConfig, is_grid_map

FALLBACK_COLOR = "black"


class FlatColor:
    """Every dark module gets the same colour."""

    def __init__(self, color: str | None = DEFAULT_SQUARE_COLOR):
        self.color = color or FALLBACK_COLOR

    def color_for(self, row: int, col: int) -> str:
        return self.color


class ColumnColorMap:
    """1-D map indexed by column, reused for every row."""

    def __init__(self, colors):
        self.colors = tuple(colors)

    def color_for(self, row: int, col: int) -> str:
        if 0 <= col < len(self.colors):
            return self.colors[col] or FALLBACK_COLOR
        return FALLBACK_COLOR


class GridColorMap:
    """2-D map giving ``rows[row][col]`` exactly."""

    def __init__(self, rows):
        self.rows = tuple(tuple(r) if r is not None else None for r in rows)

    def color_for(self, row: int, col: int) -> str:
        if not 0 <= row < len(self.rows) or self.rows[row] is None:
            return FALLBACK_COLOR
        cells = self.rows[row]
        if 0 <= col < len(cells):
            return cells[col] or FALLBACK_COLOR
        return FALLBACK_COLOR


def build_colorizer(config: StyleConfig):
    """Choose the colorizer variant for *config*.

    A map with any entry that is itself a row is treated as 2-D; its None
    rows render black. Maps whose dimensions differ from the module count
    are not rejected; uncovered positions render black.
    """
    color_map = config.square_color_map
    if color_map is None:
        return FlatColor(config.square_color)
    if is_grid_map(color_map):
        return GridColorMap(color_map)
    return ColumnColorMap(color_map)
