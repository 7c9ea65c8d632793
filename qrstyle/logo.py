"""Logo loading."""

from pathlib import Path

from PIL import Image

from qrstyle.logging import audit, get_logger, trace

log = get_logger("logo")


@trace
def load_logo(path: str | Path) -> Image.Image:
    """Open any Pillow-readable image and return it as RGBA.

    Images without an alpha channel become fully opaque, so the whole
    rectangle will clear the modules beneath it.
    """
    with Image.open(path) as img:
        logo = img.convert("RGBA")
    audit("logo.loaded", logger=log, path=str(path), size=f"{logo.size[0]}x{logo.size[1]}")
    return logo


def transparent_logo(size: int = 1) -> Image.Image:
    """A fully transparent placeholder for rendering without a logo."""
    return Image.new("RGBA", (size, size), (0, 0, 0, 0))
