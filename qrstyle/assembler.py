"""Image assembler: rasterise the module matrix, overlay the logo, add the quiet zone."""

from PIL import Image, ImageDraw

from qrstyle.debug import DebugSink, NullDebugSink
from qrstyle.logging import audit, get_logger, trace
from qrstyle.overlay import composite_center

log = get_logger("assembler")

LIGHT_COLOR = "white"
MARGIN_MODULES = 1


def image_width_pixels(module_count: int, square_size_px: int) -> int:
    """Pixel side of the unbordered QR image (width == height)."""
    return module_count * square_size_px


@trace
def render_modules(matrix, colorizer, square_size_px: int) -> Image.Image:
    """Paint one ``square_size_px`` block per module onto a transparent canvas.

    Dark modules take ``colorizer.color_for(row, col)``, light ones white.
    """
    s = square_size_px
    width = image_width_pixels(matrix.module_count, s)
    img = Image.new("RGBA", (width, width), (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)

    for row in range(matrix.module_count):
        for col in range(matrix.module_count):
            color = colorizer.color_for(row, col) if matrix.dark(row, col) else LIGHT_COLOR
            x, y = col * s, row * s
            draw.rectangle([x, y, x + s - 1, y + s - 1], fill=color)
    return img


@trace
def assemble(
    matrix,
    colorizer,
    overlay: Image.Image,
    square_size_px: int,
    sink: DebugSink | None = None,
) -> Image.Image:
    """Build the final image from a corrected matrix and the centred logo overlay.

    The returned RGBA image is ``(module_count + 2) * square_size_px`` wide:
    the QR image plus one module of opaque white on every side.
    """
    sink = sink or NullDebugSink()
    qr_img = render_modules(matrix, colorizer, square_size_px)
    sink.emit("qr_code_image_before_overlay", lambda: qr_img)

    qr_with_logo = composite_center(qr_img, overlay)

    width = image_width_pixels(matrix.module_count + 2 * MARGIN_MODULES, square_size_px)
    framed = Image.new("RGBA", (width, width), LIGHT_COLOR)
    final = composite_center(framed, qr_with_logo)

    audit("image.assembled", logger=log,
          modules=matrix.module_count, square_px=square_size_px,
          image_px=f"{width}x{width}")
    return final
