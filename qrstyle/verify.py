"""Scan verification: check that a stylised QR image still decodes."""

import time
from dataclasses import dataclass

import cv2
import numpy as np
from PIL import Image, ImageOps
from pyzbar.pyzbar import decode as pyzbar_decode

from qrstyle.logging import audit, get_logger, trace

log = get_logger("verify")

# Extra white border added before scanning; the rendered image only carries one module
DEFAULT_QUIET_ZONE_PX = 40


@dataclass
class ScanResult:
    """Result of a single scan attempt."""
    success: bool
    decoded_data: str | None = None
    decode_time_ms: float = 0.0
    decoder: str = ""
    error: str | None = None


def prepare_for_scan(image: Image.Image, quiet_zone_px: int = DEFAULT_QUIET_ZONE_PX) -> Image.Image:
    """Flatten onto white and pad with a wider quiet zone."""
    rgba = image.convert("RGBA")
    flat = Image.new("RGBA", rgba.size, "white")
    flat.alpha_composite(rgba)
    rgb = flat.convert("RGB")
    if quiet_zone_px > 0:
        rgb = ImageOps.expand(rgb, border=quiet_zone_px, fill="white")
    return rgb


def _result(decoder: str, elapsed: float, data: str | None = None, error: str | None = None) -> ScanResult:
    success = data is not None
    audit("scan.verified", logger=log, decoder=decoder, success=success,
          time_ms=round(elapsed, 1), data=(data or "")[:80], error=error)
    return ScanResult(success=success, decoded_data=data, decode_time_ms=elapsed,
                      decoder=decoder, error=error)


@trace
def scan_pyzbar(image: Image.Image) -> ScanResult:
    """Scan a QR code using pyzbar (wraps ZBar)."""
    start = time.perf_counter()
    try:
        results = pyzbar_decode(image)
    except Exception as e:
        return _result("pyzbar/zbar", (time.perf_counter() - start) * 1000, error=str(e))
    elapsed = (time.perf_counter() - start) * 1000
    if results:
        return _result("pyzbar/zbar", elapsed, data=results[0].data.decode("utf-8", errors="replace"))
    return _result("pyzbar/zbar", elapsed, error="No QR code detected")


@trace
def scan_opencv(image: Image.Image) -> ScanResult:
    """Scan a QR code using OpenCV's built-in QR detector."""
    start = time.perf_counter()
    try:
        gray = cv2.cvtColor(np.array(image.convert("RGB")), cv2.COLOR_RGB2GRAY)
        data, _points, _ = cv2.QRCodeDetector().detectAndDecode(gray)
    except Exception as e:
        return _result("opencv", (time.perf_counter() - start) * 1000, error=str(e))
    elapsed = (time.perf_counter() - start) * 1000
    if data:
        return _result("opencv", elapsed, data=data)
    return _result("opencv", elapsed, error="No QR code detected")


@trace
def verify(
    image: Image.Image,
    expected_data: str | None = None,
    quiet_zone_px: int = DEFAULT_QUIET_ZONE_PX,
) -> list[ScanResult]:
    """Run all available decoders on an image.

    Args:
        image: Rendered QR image (any mode; transparency is flattened onto white).
        expected_data: If provided, marks result as failure if decoded data doesn't match.
        quiet_zone_px: White padding added around the image before scanning.

    Returns:
        List of ScanResults, one per decoder.
    """
    prepared = prepare_for_scan(image, quiet_zone_px)
    results = []
    for scanner in [scan_pyzbar, scan_opencv]:
        result = scanner(prepared)
        if result.success and expected_data is not None and result.decoded_data != expected_data:
            result.success = False
            result.error = f"Data mismatch: got '{result.decoded_data}', expected '{expected_data}'"
        results.append(result)
    return results
