"""Style configuration for stylised QR rendering."""

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, fields
from pathlib import Path

from PIL import ImageColor

from qrstyle.errors import ConfigurationError

DEFAULT_SQUARE_COLOR = "black"
DEFAULT_DEBUG_DIR = "debug"


def _check_color(value, where: str) -> None:
    if value is None:
        return
    if not isinstance(value, str):
        raise ConfigurationError(f"{where}: colour must be a string, got {type(value).__name__}")
    try:
        ImageColor.getrgb(value)
    except ValueError as e:
        raise ConfigurationError(f"{where}: unknown colour {value!r}") from e


def _is_row(value) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, str)


def is_grid_map(color_map) -> bool:
    """True when any entry of *color_map* is itself a row of colours."""
    return any(_is_row(entry) for entry in color_map)


def _freeze_color_map(color_map):
    """Validate a 1-D or 2-D colour map and return it as nested tuples.

    Slots may be None; those fall back to black when rendering.
    """
    if color_map is None:
        return None
    if not _is_row(color_map):
        raise ConfigurationError("square_color_map must be a list of colours or a list of rows")

    if is_grid_map(color_map):
        rows = []
        for r, row in enumerate(color_map):
            if row is None:
                rows.append(None)
                continue
            if not _is_row(row):
                raise ConfigurationError(f"square_color_map[{r}]: expected a row of colours or None")
            for c, color in enumerate(row):
                _check_color(color, f"square_color_map[{r}][{c}]")
            rows.append(tuple(row))
        return tuple(rows)

    for c, color in enumerate(color_map):
        _check_color(color, f"square_color_map[{c}]")
    return tuple(color_map)


@dataclass(frozen=True)
class StyleConfig:
    """Read-only rendering options.

    Attributes:
        square_size_px:   Side length in output pixels of one QR module.
        square_color:     Colour for dark modules when no map is given.
        square_color_map: Optional per-position colours. A 2-D map gives
                          ``map[row][col]`` exactly; a 1-D map is indexed by
                          column and reused for every row. Missing slots
                          render black.
        debug:            Write intermediate images to ``debug_dir``.
        debug_dir:        Directory for debug PNGs.
    """

    square_size_px: int = 5
    square_color: str = DEFAULT_SQUARE_COLOR
    square_color_map: tuple | None = None
    debug: bool = False
    debug_dir: str = DEFAULT_DEBUG_DIR

    def __post_init__(self):
        size = self.square_size_px
        if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
            raise ConfigurationError(f"square_size_px must be a positive integer, got {size!r}")
        _check_color(self.square_color, "square_color")
        object.__setattr__(self, "square_color_map", _freeze_color_map(self.square_color_map))

    @classmethod
    def from_dict(cls, data: Mapping) -> "StyleConfig":
        """Build a config from a plain mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(f"Unknown style option(s): {', '.join(sorted(unknown))}")
        return cls(**data)


def read_json(path: str | Path):
    """Read a JSON style file; unreadable or malformed files are configuration errors."""
    try:
        with open(path) as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"{path}: invalid JSON ({e})") from e
    except OSError as e:
        raise ConfigurationError(f"{path}: cannot read ({e.strerror or e})") from e


def load_config(path: str | Path) -> StyleConfig:
    """Load a StyleConfig from a JSON file."""
    data = read_json(path)
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path}: expected a JSON object")
    return StyleConfig.from_dict(data)
