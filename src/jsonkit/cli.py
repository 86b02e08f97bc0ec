"""jsonkit command line interface

Apply an RFC 6902 patch file to a JSON document:

    jsonkit apply --input doc.json --patch ops.json [--output out.json | --in-place] [--safe]
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import pydantic

from .config import Settings, configure_logging, load_settings
from .parser import dumps
from .patcher import JsonPatcher
from .utils.errors import JsonKitError

logger = logging.getLogger(__name__)


def _read_json(path: Path, encoding: str):
    try:
        return json.loads(path.read_text(encoding=encoding))
    except json.JSONDecodeError as e:
        raise JsonKitError(f"Invalid JSON in {path}: {e}", details={"path": str(path)}) from e


def _log_level(value: str) -> str:
    try:
        return Settings(log_level=value).log_level
    except pydantic.ValidationError:
        raise argparse.ArgumentTypeError(f"unknown log level '{value}'")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="jsonkit", description="JSON Patch tools.")
    parser.add_argument("--log-level", type=_log_level, help="Logging level (default: JSONKIT_LOG_LEVEL or INFO).")
    subcommands = parser.add_subparsers(dest="command", required=True)

    apply_cmd = subcommands.add_parser("apply", help="Apply an RFC 6902 patch to a JSON document.")
    apply_cmd.add_argument("--input", required=True, help="Path to the JSON document to patch.")
    apply_cmd.add_argument("--patch", required=True, help="Path to the RFC 6902 patch file.")
    apply_cmd.add_argument("--output", help="Optional output path (default: stdout).")
    apply_cmd.add_argument(
        "--in-place",
        action="store_true",
        help="Overwrite the input file in-place (ignored when --output is provided).",
    )
    apply_cmd.add_argument(
        "--safe",
        action="store_true",
        help="Report patch failures as JSON on stderr instead of raising.",
    )
    return parser


def _run_apply(args: argparse.Namespace) -> int:
    settings = load_settings()
    input_path = Path(args.input)
    document = _read_json(input_path, settings.encoding)
    operations = _read_json(Path(args.patch), settings.encoding)

    patcher = JsonPatcher()
    if args.safe:
        result = patcher.apply_safe(document, operations)
        if not result.success:
            error = {"success": False, "error": result.error.message, "details": result.error.details}
            sys.stderr.write(dumps(error, indent=settings.indent) + "\n")
            return 1
        patched = result.data
    else:
        patched = patcher.apply(document, operations)

    rendered = dumps(patched, indent=settings.indent)
    if args.output:
        Path(args.output).write_text(rendered + "\n", encoding=settings.encoding)
        logger.info(f"Wrote patched document to {args.output}")
        return 0
    if args.in_place:
        input_path.write_text(rendered + "\n", encoding=settings.encoding)
        logger.info(f"Patched {input_path} in place")
        return 0

    sys.stdout.write(rendered + "\n")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the jsonkit script."""
    args = _build_parser().parse_args(argv)
    configure_logging(args.log_level)

    if args.command == "apply":
        return _run_apply(args)
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
