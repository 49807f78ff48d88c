"""Repair JSON-like text read from stdin and write JSON to stdout."""

import argparse
import logging
import sys

from .JsonRepairFormat import process_json
from .JsonRepairPy import repair
from .JsonRepairTypes import JsonRepairOptions

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="jsonrepairpy", description=__doc__)
    parser.add_argument(
        "--mode",
        choices=("repair", "pretty", "minify"),
        default="repair",
        help="repair: print the repaired text as is; pretty/minify: re-serialize the parsed value",
    )
    parser.add_argument("--indent", choices=("2", "4", "tab"), default="4")
    parser.add_argument("--sort-keys", action="store_true")
    parser.add_argument("--trim-whitespace", action="store_true")
    parser.add_argument("--ndjson", action="store_true", help="one value per line (repair mode only)")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser

def main(argv: list[str] | None = None, stdin=None, stdout=None, stderr=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.ndjson and args.mode != "repair":
        parser.error("--ndjson only applies to --mode repair")
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout
    stderr = stderr if stderr is not None else sys.stderr
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=stderr,
    )

    text = stdin.read()
    if args.mode == "repair":
        options = JsonRepairOptions(trim_whitespace=args.trim_whitespace, newline_delimited=args.ndjson)
        result = repair(text, options=options)
        if not result:
            print(f"Repair failed: {result.error()}", file=stderr)
            return 1
        stdout.write(result.value() + "\n")
        return 0

    processed = process_json(
        text,
        indent="0" if args.mode == "minify" else args.indent,
        trim_whitespace=args.trim_whitespace,
        keep_order=not args.sort_keys,
    )
    if not processed.success:
        print(processed.error, file=stderr)
        return 1
    stdout.write(processed.data + "\n")
    return 0

if __name__ == "__main__":
    sys.exit(main())
