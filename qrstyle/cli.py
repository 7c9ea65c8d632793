"""qrstyle CLI: render and check stylised QR codes."""

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from PIL import Image

from qrstyle.config import StyleConfig, load_config, read_json
from qrstyle.errors import QRStyleError
from qrstyle.logging import audit, get_logger, setup_logging

log = get_logger("cli")


def _style_from_args(args) -> StyleConfig:
    """Start from --config (if any) and apply explicit flags on top."""
    config = load_config(args.config) if args.config else StyleConfig()
    overrides = {}
    if args.square_size is not None:
        overrides["square_size_px"] = args.square_size
    if args.color is not None:
        overrides["square_color"] = args.color
    if args.color_map is not None:
        overrides["square_color_map"] = read_json(args.color_map)
    if args.debug:
        overrides["debug"] = True
    if args.debug_dir is not None:
        overrides["debug_dir"] = args.debug_dir
    return replace(config, **overrides) if overrides else config


def cmd_generate(args):
    """Render a stylised QR code."""
    from qrstyle.logo import load_logo, transparent_logo
    from qrstyle.style import QRStyle

    config = _style_from_args(args)
    logo = load_logo(args.logo) if args.logo else transparent_logo()

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)

    result = QRStyle(config).render(args.payload, logo)
    result.image.save(output)

    n = result.matrix.module_count
    print(f"Generated: {output} ({result.image.size[0]}x{result.image.size[1]})")
    print(f"  Version: {result.version}, ECC: H, Modules: {n}x{n}")
    print(f"  Whitened under logo: {len(result.whitened)} modules")

    if args.verify:
        from qrstyle.verify import verify

        results = verify(result.image, expected_data=args.payload)
        _print_scan_results(results)
        if not any(r.success for r in results):
            sys.exit(1)


def cmd_verify(args):
    """Verify a QR code image."""
    from qrstyle.verify import verify

    with Image.open(args.image) as img:
        results = verify(img, expected_data=args.expected)
    _print_scan_results(results)
    sys.exit(0 if all(r.success for r in results) else 1)


def _print_scan_results(results):
    for r in results:
        status = "PASS" if r.success else "FAIL"
        print(f"  [{r.decoder:12s}] {status} | {r.decode_time_ms:6.1f}ms | {r.decoded_data or r.error}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="qrstyle", description="Stylised QR codes with an embedded logo")

    # Global logging flags
    parser.add_argument("-V", "--verbose", action="store_true", help="Enable DEBUG-level logging")
    parser.add_argument("--log-file", default=None, help="Write JSON logs to file")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- generate ---
    p_gen = subparsers.add_parser("generate", help="Render a stylised QR code")
    p_gen.add_argument("payload", help="String to encode")
    p_gen.add_argument("-o", "--output", default="output/qr_code_image_final.png", help="Output file path")
    p_gen.add_argument("--logo", default=None, help="Logo image to embed in the centre")
    p_gen.add_argument("--config", default=None, help="JSON style configuration file")
    p_gen.add_argument("-s", "--square-size", type=int, default=None, help="Module pixel size")
    p_gen.add_argument("--color", default=None, help="Dark module colour (e.g. '#a59140')")
    p_gen.add_argument("--color-map", default=None, help="JSON file holding a 1-D or 2-D colour map")
    p_gen.add_argument("--debug", action="store_true", help="Write intermediate images")
    p_gen.add_argument("--debug-dir", default=None, help="Directory for debug images")
    p_gen.add_argument("--verify", action="store_true", help="Scan the result after rendering")

    # --- verify ---
    p_ver = subparsers.add_parser("verify", help="Verify a QR code image")
    p_ver.add_argument("image", help="Path to QR code image")
    p_ver.add_argument("--expected", default=None, help="Expected decoded data (fails if mismatch)")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(level="DEBUG" if args.verbose else "INFO", log_file=args.log_file)
    audit("cli.start", logger=log, command=args.command, verbose=args.verbose)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    commands = {
        "generate": cmd_generate,
        "verify": cmd_verify,
    }
    try:
        commands[args.command](args)
    except QRStyleError as e:
        log.error("%s", e)
        sys.exit(2)
    audit("cli.done", logger=log, command=args.command)


if __name__ == "__main__":
    main()
