"""Logo overlay: centre the logo on a transparent canvas and clear the modules it covers."""

import numpy as np
from PIL import Image

from qrstyle.debug import DebugSink, NullDebugSink
from qrstyle.logging import audit, get_logger, trace

log = get_logger("overlay")

# Pillow alpha value for a pixel with 0% opacity
TRANSPARENT_ALPHA = 0


def composite_center(base: Image.Image, source: Image.Image) -> Image.Image:
    """Source-over *source* onto a copy of *base*, centres aligned.

    Parts of *source* that fall outside *base* are cropped away.
    """
    result = base.convert("RGBA")
    source = source.convert("RGBA")
    bw, bh = result.size
    sw, sh = source.size
    x = (bw - sw) // 2
    y = (bh - sh) // 2

    box = (max(0, -x), max(0, -y), min(sw, bw - x), min(sh, bh - y))
    if box[0] >= box[2] or box[1] >= box[3]:
        return result
    result.alpha_composite(source, dest=(max(0, x), max(0, y)), source=box)
    return result


@trace
def center_logo(logo: Image.Image, size: int) -> Image.Image:
    """Place *logo* in the middle of a fully transparent ``size`` x ``size`` canvas."""
    canvas = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    overlay = composite_center(canvas, logo)
    audit("logo.centered", logger=log, canvas=f"{size}x{size}",
          logo=f"{logo.size[0]}x{logo.size[1]}")
    return overlay


@trace
def whiten_overlapped_squares(
    matrix,
    overlay: Image.Image,
    square_size_px: int,
    sink: DebugSink | None = None,
) -> list[tuple[int, int]]:
    """Force every module touched by a non-transparent overlay pixel to light.

    A single visible pixel inside a module's footprint is enough; there is no
    coverage threshold. *matrix* is modified in place.

    Args:
        matrix:         ModuleMatrix to correct.
        overlay:        Output of :func:`center_logo`, same pixel size as the
                        unbordered QR image.
        square_size_px: Pixel side of one module.
        sink:           Receives each module's overlay crop as ``debug_<row>_<col>``
                        and a notice for every overlapped module.

    Returns:
        (row, col) of every module whose footprint overlaps the logo.
    """
    sink = sink or NullDebugSink()
    s = square_size_px
    alpha = np.array(overlay.getchannel("A"))
    n = matrix.module_count

    overlapped = []
    for row in range(n):
        for col in range(n):
            x, y = col * s, row * s
            sink.emit(f"debug_{row}_{col}", lambda x=x, y=y: overlay.crop((x, y, x + s, y + s)))

            region = alpha[y : y + s, x : x + s]
            if np.any(region != TRANSPARENT_ALPHA):
                matrix.modules[row][col] = False
                overlapped.append((row, col))
                sink.note("overlay.non_transparent_region", row=row, col=col)

    audit("overlay.corrected", logger=log, modules=n * n, whitened=len(overlapped))
    return overlapped
