"""Shared fixtures for qrstyle tests."""

import pytest
from PIL import Image

from qrstyle.matrix import ModuleMatrix

EXAMPLE_URL = "http://example.com"


class RecordingSink:
    """Debug sink that keeps rendered images and notices in memory."""

    def __init__(self):
        self.images = {}
        self.notes = []

    def emit(self, label, render):
        self.images[label] = render()

    def note(self, event, **context):
        self.notes.append((event, context))


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def transparent_logo():
    return Image.new("RGBA", (1, 1), (0, 0, 0, 0))


def all_dark(n: int) -> ModuleMatrix:
    return ModuleMatrix([[True] * n for _ in range(n)])


def center_block_logo(square_size_px: int, modules: int = 3, color=(200, 30, 30, 255)) -> Image.Image:
    """Opaque logo exactly covering the centre *modules* x *modules* block of an odd matrix."""
    side = modules * square_size_px
    return Image.new("RGBA", (side, side), color)


def center_block(module_count: int, modules: int = 3) -> set[tuple[int, int]]:
    c = module_count // 2
    half = modules // 2
    return {(r, col) for r in range(c - half, c + half + 1) for col in range(c - half, c + half + 1)}


def module_pixel(image: Image.Image, row: int, col: int, square_size_px: int, margin: int = 1):
    """RGBA value at the centre of module (row, col) in a bordered image."""
    s = square_size_px
    return image.getpixel(((col + margin) * s + s // 2, (row + margin) * s + s // 2))
