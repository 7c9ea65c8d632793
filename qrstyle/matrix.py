"""Matrix producer: encode a payload into a QR module grid at ECC level H."""

import qrcode
import qrcode.constants
from qrcode.exceptions import DataOverflowError

from qrstyle.assembler import render_modules
from qrstyle.debug import DebugSink, NullDebugSink
from qrstyle.errors import EncodingError
from qrstyle.logging import audit, get_logger, trace

log = get_logger("matrix")


class ModuleMatrix:
    """Square grid of QR modules, True = dark.

    Wraps the encoder's module list directly; the overlap corrector is the
    only stage allowed to write to it.
    """

    def __init__(self, modules: list[list[bool]], version: int | None = None):
        size = len(modules)
        if any(len(row) != size for row in modules):
            raise ValueError("module matrix must be square")
        self.modules = modules
        self.version = version

    @property
    def module_count(self) -> int:
        return len(self.modules)

    def dark(self, row: int, col: int) -> bool:
        return bool(self.modules[row][col])

    def copy(self) -> "ModuleMatrix":
        return ModuleMatrix([list(row) for row in self.modules], self.version)

    def __repr__(self):
        return f"ModuleMatrix(module_count={self.module_count}, version={self.version})"


@trace
def generate_qrcode_matrix(payload: str, sink: DebugSink | None = None, colorizer=None,
                           square_size_px: int = 5) -> ModuleMatrix:
    """Encode *payload* with the highest redundancy so a logo can be embedded.

    The version is left to the encoder (``fit=True``); more payload means more
    modules. When a debug sink is active the uncorrected matrix is rendered
    with *colorizer* and emitted before anything modifies it.

    Raises:
        EncodingError: the payload exceeds version 40-H capacity.
    """
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_H,
        box_size=1,
        border=0,
    )
    qr.add_data(payload)
    # qrcode 8 reports overflow by rejecting version 41 with a plain ValueError
    try:
        qr.make(fit=True)
    except (DataOverflowError, ValueError) as e:
        raise EncodingError(
            f"Payload of {len(payload)} chars does not fit a QR code at ECC level H"
        ) from e

    matrix = ModuleMatrix([[bool(m) for m in row] for row in qr.modules], version=qr.version)
    audit("matrix.encoded", logger=log,
          data=payload[:80], version=matrix.version,
          size=f"{matrix.module_count}x{matrix.module_count}", ecc="H")

    sink = sink or NullDebugSink()
    if colorizer is not None:
        sink.emit("qr_code_image_before_modification",
                  lambda: render_modules(matrix, colorizer, square_size_px))
    return matrix
