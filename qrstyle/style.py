"""Stylised QR rendering: coloured modules with a centred logo that stays scannable."""

from dataclasses import dataclass, field

from PIL import Image

from qrstyle.assembler import assemble, image_width_pixels
from qrstyle.colorizer import build_colorizer
from qrstyle.config import StyleConfig
from qrstyle.debug import DebugSink, sink_for
from qrstyle.logging import audit, get_logger, trace
from qrstyle.matrix import ModuleMatrix, generate_qrcode_matrix
from qrstyle.overlay import center_logo, whiten_overlapped_squares

log = get_logger("style")


@dataclass
class StyledQR:
    """Everything a render produced.

    ``matrix`` is the corrected grid that was drawn; ``original`` is the
    encoder output before the logo cleared any modules.
    """
    image: Image.Image
    matrix: ModuleMatrix
    original: ModuleMatrix
    whitened: list[tuple[int, int]] = field(default_factory=list)

    @property
    def version(self) -> int | None:
        return self.matrix.version


class QRStyle:
    """Generates stylised QR images for one style configuration.

    Holds no state between calls; every render builds its own matrix and
    canvases.
    """

    def __init__(self, config: StyleConfig | None = None, sink: DebugSink | None = None):
        self.config = config or StyleConfig()
        self.colorizer = build_colorizer(self.config)
        self.sink = sink or sink_for(self.config)

    @trace
    def render(self, payload: str, logo: Image.Image) -> StyledQR:
        """Run the full pipeline and keep the corrected matrix alongside the image."""
        s = self.config.square_size_px

        matrix = generate_qrcode_matrix(payload, self.sink, self.colorizer, s)
        original = matrix.copy()

        overlay = center_logo(logo, image_width_pixels(matrix.module_count, s))
        whitened = whiten_overlapped_squares(matrix, overlay, s, self.sink)

        image = assemble(matrix, self.colorizer, overlay, s, self.sink)
        self.sink.emit("qr_code_image_final", lambda: image)

        audit("qr.styled", logger=log,
              data=payload[:80], version=matrix.version,
              modules=matrix.module_count, whitened=len(whitened),
              image_px=f"{image.size[0]}x{image.size[1]}")
        return StyledQR(image=image, matrix=matrix, original=original, whitened=whitened)

    def generate(self, payload: str, logo: Image.Image) -> Image.Image:
        """Return the stylised QR image for *payload* with *logo* embedded."""
        return self.render(payload, logo).image


def generate(payload: str, logo: Image.Image, config: StyleConfig | None = None) -> Image.Image:
    """Render *payload* as a stylised QR image with *logo* in the centre.

    Raises:
        EncodingError: payload too long for ECC level H.
    """
    return QRStyle(config).generate(payload, logo)
