"""qrstyle: stylised QR codes with per-module colours and an embedded logo."""

from qrstyle.colorizer import ColumnColorMap, FlatColor, GridColorMap, build_colorizer
from qrstyle.config import StyleConfig, load_config
from qrstyle.debug import DebugSink, DirectoryDebugSink, NullDebugSink
from qrstyle.errors import ConfigurationError, EncodingError, QRStyleError
from qrstyle.matrix import ModuleMatrix, generate_qrcode_matrix
from qrstyle.style import QRStyle, StyledQR, generate

__all__ = [
    "ColumnColorMap",
    "ConfigurationError",
    "DebugSink",
    "DirectoryDebugSink",
    "EncodingError",
    "FlatColor",
    "GridColorMap",
    "ModuleMatrix",
    "NullDebugSink",
    "QRStyle",
    "QRStyleError",
    "StyleConfig",
    "StyledQR",
    "build_colorizer",
    "generate",
    "generate_qrcode_matrix",
    "load_config",
]
