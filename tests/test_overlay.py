"""Tests for logo centring and overlap whitening."""

from PIL import Image

from conftest import EXAMPLE_URL, all_dark, center_block, center_block_logo
from qrstyle.matrix import generate_qrcode_matrix
from qrstyle.overlay import center_logo, composite_center, whiten_overlapped_squares


def test_center_logo_places_logo_in_the_middle():
    logo = Image.new("RGBA", (10, 10), (255, 0, 0, 255))
    overlay = center_logo(logo, 30)
    assert overlay.size == (30, 30)
    assert overlay.mode == "RGBA"
    assert overlay.getpixel((10, 10)) == (255, 0, 0, 255)
    assert overlay.getpixel((19, 19)) == (255, 0, 0, 255)
    assert overlay.getpixel((9, 9))[3] == 0
    assert overlay.getpixel((20, 20))[3] == 0


def test_logo_larger_than_canvas_is_clamped():
    logo = Image.new("RGBA", (50, 50), (0, 0, 255, 255))
    overlay = center_logo(logo, 30)
    assert overlay.size == (30, 30)
    assert overlay.getchannel("A").getextrema() == (255, 255)


def test_logo_without_alpha_is_opaque():
    logo = Image.new("RGB", (4, 4), (0, 255, 0))
    overlay = center_logo(logo, 8)
    assert overlay.getpixel((4, 4)) == (0, 255, 0, 255)


def test_composite_center_blends_source_over():
    base = Image.new("RGBA", (4, 4), (255, 255, 255, 255))
    source = Image.new("RGBA", (2, 2), (0, 0, 0, 0))
    result = composite_center(base, source)
    assert result.getpixel((1, 1)) == (255, 255, 255, 255)
    assert base.getpixel((1, 1)) == (255, 255, 255, 255)


def test_single_visible_pixel_whitens_its_module():
    """No coverage threshold: one non-transparent pixel is enough."""
    matrix = all_dark(3)
    overlay = Image.new("RGBA", (12, 12), (0, 0, 0, 0))
    overlay.putpixel((5, 6), (10, 10, 10, 1))

    whitened = whiten_overlapped_squares(matrix, overlay, 4)

    assert whitened == [(1, 1)]
    assert matrix.modules == [
        [True, True, True],
        [True, False, True],
        [True, True, True],
    ]


def test_light_modules_stay_light():
    matrix = all_dark(2)
    matrix.modules[0][0] = False
    overlay = Image.new("RGBA", (4, 4), (0, 0, 0, 255))
    whiten_overlapped_squares(matrix, overlay, 2)
    assert matrix.modules == [[False, False], [False, False]]


def test_transparent_overlay_changes_nothing(transparent_logo):
    matrix = generate_qrcode_matrix(EXAMPLE_URL)
    original = matrix.copy()
    overlay = center_logo(transparent_logo, matrix.module_count * 5)

    assert whiten_overlapped_squares(matrix, overlay, 5) == []
    assert matrix.modules == original.modules


def test_center_block_logo_whitens_only_center_modules():
    s = 5
    matrix = generate_qrcode_matrix(EXAMPLE_URL)
    original = matrix.copy()
    n = matrix.module_count
    overlay = center_logo(center_block_logo(s), n * s)

    whitened = whiten_overlapped_squares(matrix, overlay, s)

    expected = center_block(n)
    assert set(whitened) == expected
    for row in range(n):
        for col in range(n):
            if (row, col) in expected:
                assert matrix.modules[row][col] is False
            else:
                assert matrix.modules[row][col] == original.modules[row][col]


def test_matrix_identity_is_preserved():
    matrix = all_dark(2)
    modules = matrix.modules
    whiten_overlapped_squares(matrix, Image.new("RGBA", (2, 2), (0, 0, 0, 255)), 1)
    assert matrix.modules is modules


def test_every_module_crop_is_emitted(sink):
    matrix = all_dark(3)
    overlay = Image.new("RGBA", (6, 6), (0, 0, 0, 0))
    whiten_overlapped_squares(matrix, overlay, 2, sink)
    assert len(sink.images) == 9
    assert sink.images["debug_2_1"].size == (2, 2)


def test_overlapped_modules_are_noted(sink):
    matrix = all_dark(3)
    overlay = Image.new("RGBA", (6, 6), (0, 0, 0, 0))
    overlay.putpixel((0, 5), (0, 0, 0, 255))
    whiten_overlapped_squares(matrix, overlay, 2, sink)
    assert sink.notes == [("overlay.non_transparent_region", {"row": 2, "col": 0})]
