"""
Command-line interface for symbol template batch operations.

Substitute parameters into a template, normalize its geometry and inspect
the result without the GUI.

Usage::

    python -m cli normalize "templates/MCB 1P.svg"
    python -m cli normalize "templates/MCB 1P.svg" -p CURRENT=16A -o mcb.svg
    python -m cli inspect "templates/RCD 2P.svg" -p SENSITIVITY=10mA
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from controllers.symbol_builder import SymbolBuilder
from models.symbol import SymbolTemplate
from symbols.constants import NormalizerSettings
from symbols.geometry import is_distribution_block
from symbols.placeholders import find_placeholders

__version__ = "0.3.0"


def parse_parameters(pairs: list[str] | None) -> dict[str, str]:
    """Parse KEY=VALUE strings into a parameter map.

    Raises:
        ValueError: If an entry has no '=' or an empty key.
    """
    parameters = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"expected KEY=VALUE, got {pair!r}")
        parameters[key] = value
    return parameters


def try_load_template(builder: SymbolBuilder, filepath: str) -> tuple[SymbolTemplate | None, str]:
    """Load a vector template without exiting.

    Returns:
        (template, "") on success, or (None, error_message) on failure.
    """
    path = Path(filepath)
    if not path.exists():
        return None, f"file not found: {filepath}"

    template = builder.load_template(path)
    if template is None:
        return None, f"could not read template: {filepath}"
    if not template.is_vector:
        return None, f"not a vector template: {filepath}"
    return template, ""


def _settings_from_args(args: argparse.Namespace) -> NormalizerSettings:
    overrides = {
        "crop_threshold": args.crop_threshold,
        "min_body_size": args.min_body_size,
    }
    return NormalizerSettings.from_dict({k: v for k, v in overrides.items() if v is not None})


def _prepare(args: argparse.Namespace):
    """Shared setup: returns (builder, template, parameters) or an exit code."""
    try:
        parameters = parse_parameters(args.param)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    builder = SymbolBuilder(settings=_settings_from_args(args))
    template, error = try_load_template(builder, args.template)
    if template is None:
        print(f"Error: {error}", file=sys.stderr)
        return 1

    return builder, template, builder.initial_parameters(template, parameters)


def cmd_normalize(args: argparse.Namespace) -> int:
    """Write the substituted, normalized markup."""
    prepared = _prepare(args)
    if isinstance(prepared, int):
        return prepared
    builder, template, parameters = prepared

    result = builder.resolve(template, parameters)

    if args.output:
        Path(args.output).write_text(result.markup, encoding="utf-8")
        print(f"Normalized symbol written to {args.output}", file=sys.stderr)
    else:
        print(result.markup)

    print(f"Size: {result.width:.2f} x {result.height:.2f}", file=sys.stderr)
    return 0


def cmd_inspect(args: argparse.Namespace) -> int:
    """Print placeholders, resolved parameters and geometry as JSON."""
    prepared = _prepare(args)
    if isinstance(prepared, int):
        return prepared
    builder, template, parameters = prepared

    result = builder.resolve(template, parameters)
    report = {
        "template": template.template_id,
        "placeholders": find_placeholders(template.markup),
        "parameters": parameters,
        "width": result.width,
        "height": result.height,
        "view_box": list(result.view_box) if result.view_box else None,
        "distribution_block": is_distribution_block(template.template_id),
    }
    print(json.dumps(report, indent=2, ensure_ascii=False))
    return 0


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("template", help="Path to an SVG symbol template")
    parser.add_argument(
        "--param", "-p", action="append", metavar="KEY=VALUE",
        help="Parameter value (repeatable); missing placeholders get defaults",
    )
    parser.add_argument("--crop-threshold", type=float, help="Reject body crops at or beyond this coordinate")
    parser.add_argument("--min-body-size", type=float, help="Minimum body rect width and height")


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="symbol-cli",
        description="Substitute, normalize and inspect schematic symbol templates.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # normalize
    norm_parser = subparsers.add_parser("normalize", help="Output the normalized symbol markup")
    _add_common_arguments(norm_parser)
    norm_parser.add_argument("--output", "-o", help="Write markup to file instead of stdout")

    # inspect
    inspect_parser = subparsers.add_parser("inspect", help="Report placeholders and geometry as JSON")
    _add_common_arguments(inspect_parser)

    return parser


def main(argv=None) -> int:
    """CLI entry point. Returns exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    handlers = {
        "normalize": cmd_normalize,
        "inspect": cmd_inspect,
    }

    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
