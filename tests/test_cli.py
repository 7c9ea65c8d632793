"""Tests for the qrstyle command line."""

import json
import logging

import pytest
from PIL import Image

from conftest import EXAMPLE_URL
from qrstyle.cli import _style_from_args, build_parser, main


@pytest.fixture(autouse=True)
def reset_logging():
    """main() installs handlers on the qrstyle logger; drop them after each test."""
    yield
    root = logging.getLogger("qrstyle")
    root.handlers.clear()
    root.setLevel(logging.NOTSET)


def test_generate_writes_image(tmp_path, capsys):
    out = tmp_path / "out" / "qr.png"
    main(["generate", EXAMPLE_URL, "-o", str(out), "-s", "3"])

    with Image.open(out) as img:
        assert img.size[0] == img.size[1]
        assert img.size[0] % 3 == 0
    assert "Generated:" in capsys.readouterr().out


def test_generate_with_logo_and_color_map(tmp_path, capsys):
    logo_path = tmp_path / "logo.png"
    Image.new("RGBA", (12, 12), (255, 0, 0, 255)).save(logo_path)
    map_path = tmp_path / "map.json"
    map_path.write_text(json.dumps(["red", "green", "blue"]))
    out = tmp_path / "qr.png"

    main(["generate", EXAMPLE_URL, "-o", str(out), "-s", "4",
          "--logo", str(logo_path), "--color-map", str(map_path)])

    assert out.exists()
    assert "Whitened under logo: 9 modules" in capsys.readouterr().out


def test_flags_override_config_file(tmp_path):
    config_path = tmp_path / "style.json"
    config_path.write_text(json.dumps({"square_size_px": 12, "square_color": "#BA0038"}))
    args = build_parser().parse_args(
        ["generate", "x", "--config", str(config_path), "--color", "#a59140", "--debug"]
    )
    config = _style_from_args(args)
    assert config.square_size_px == 12
    assert config.square_color == "#a59140"
    assert config.debug is True


def test_invalid_square_size_exits(tmp_path):
    with pytest.raises(SystemExit) as exc:
        main(["generate", EXAMPLE_URL, "-o", str(tmp_path / "qr.png"), "-s", "0"])
    assert exc.value.code == 2


def test_no_command_prints_help():
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 1


def test_missing_color_map_file_exits(tmp_path):
    with pytest.raises(SystemExit) as exc:
        main(["generate", EXAMPLE_URL, "-o", str(tmp_path / "qr.png"),
              "--color-map", str(tmp_path / "missing.json")])
    assert exc.value.code == 2


def test_malformed_color_map_file_exits(tmp_path):
    map_path = tmp_path / "map.json"
    map_path.write_text("[\"red\",")
    with pytest.raises(SystemExit) as exc:
        main(["generate", EXAMPLE_URL, "-o", str(tmp_path / "qr.png"), "--color-map", str(map_path)])
    assert exc.value.code == 2
