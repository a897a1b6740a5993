from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from .constants import DEFAULT_INDENT
from .document_io import read_document, with_trailing_newline, write_document_atomic
from .json_repair import repair
from .models import KeywordMode, RepairOptions
from .rendering import RepairedJsonError, ensure_valid, render
from .tools.repair_lines import repair_lines


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 2

    options = _resolve_options(args)

    if args.command == "fix":
        source = None if args.input in {None, "-"} else Path(args.input)
        try:
            raw = read_document(source)
        except FileNotFoundError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 2
        repaired = repair(raw, options)
        try:
            if args.raw:
                if repaired:
                    ensure_valid(repaired)
                text = repaired
            else:
                text = render(repaired, indent=None if args.compact else args.indent)
        except RepairedJsonError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 1

        if args.output:
            write_document_atomic(Path(args.output), with_trailing_newline(text))
            print(f"Wrote repaired JSON: {args.output}", file=sys.stderr)
        else:
            sys.stdout.write(with_trailing_newline(text))
        return 0

    if args.command == "fix-lines":
        try:
            stats = repair_lines(
                input_path=Path(args.input_jsonl),
                output_path=Path(args.output_jsonl),
                options=options,
            )
        except FileNotFoundError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 2
        print(stats.format_summary(), file=sys.stderr)
        return 0 if stats.failed == 0 else 1

    parser.print_help()
    return 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="jsonmend", description="Repair malformed or almost-JSON text")
    sub = parser.add_subparsers(dest="command")

    fx = sub.add_parser("fix", help="Repair one document and print it as standard JSON")
    fx.add_argument("input", nargs="?", help="Input file (default: stdin)")
    fx.add_argument("--output", help="Write to this file instead of stdout")
    fx.add_argument("--indent", type=int, default=DEFAULT_INDENT)
    fx.add_argument("--compact", action="store_true", help="Single-line output")
    fx.add_argument("--raw", action="store_true", help="Emit the repaired text as is, without re-serialising")
    _add_option_args(fx)

    fl = sub.add_parser("fix-lines", help="Repair every line of a JSONL file")
    fl.add_argument("input_jsonl")
    fl.add_argument("output_jsonl")
    _add_option_args(fl)

    return parser


def _add_option_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--keyword-mode", choices=[m.value for m in KeywordMode])
    parser.add_argument("--string-escapes", action=argparse.BooleanOptionalAction, default=True)
    parser.add_argument("--keep-string-newlines", action=argparse.BooleanOptionalAction, default=None)
    parser.add_argument("--wrap-bare-members", action=argparse.BooleanOptionalAction, default=None)
    parser.add_argument("--auto-filled-key")


def _resolve_options(args) -> RepairOptions:
    options = RepairOptions.from_env()
    overrides: dict[str, object] = {"string_escapes": args.string_escapes}
    if args.keyword_mode is not None:
        overrides["keyword_mode"] = KeywordMode.parse(args.keyword_mode)
    if args.keep_string_newlines is not None:
        overrides["keep_string_newlines"] = args.keep_string_newlines
    if args.wrap_bare_members is not None:
        overrides["wrap_bare_members"] = args.wrap_bare_members
    if args.auto_filled_key:
        overrides["auto_filled_key"] = args.auto_filled_key
    return replace(options, **overrides)


if __name__ == "__main__":
    sys.exit(main())
