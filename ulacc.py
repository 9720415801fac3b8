#!/usr/bin/env python3
"""
ulacc — ULA assembler CLI

Usage:
    python ulacc.py <input.ula> [-o output.hex] [--dialect pt|en] [--strict]
                                [--format hex|listing] [-v] [-q]
                                [--log-file PATH] [--no-log]

Output defaults to the input path with a .hex suffix. Use -o - for stdout.

Examples:
    python ulacc.py testeula.ula                  # writes testeula.hex
    python ulacc.py prog.ula -o - --format listing
    python ulacc.py prog.ula --dialect en --strict -v
"""

import argparse
import logging
import sys
import os
from pathlib import Path

# Allow running from project root or as module
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from ula_asm import __version__, assemble_file, DIALECTS, DEFAULT_DIALECT, OUTPUT_FORMATS
from ula_asm.errors import UlaError

logger = logging.getLogger("ulacc")


def default_output_path(input_path: str) -> str:
    """testeula.ula -> testeula.hex"""
    return str(Path(input_path).with_suffix('.hex'))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ulacc",
        description="Assembles .ula ALU programs into hex instruction words",
        epilog="Dialects: " + ", ".join(
            f"{name} ({d['description']})" for name, d in DIALECTS.items()),
    )
    parser.add_argument("input", help="Input .ula source file")
    parser.add_argument("-o", "--output",
                        help="Output file (default: input with .hex suffix, '-' for stdout)")
    parser.add_argument("--dialect", default=DEFAULT_DIALECT, choices=list(DIALECTS.keys()),
                        help=f"Start/end marker set (default: {DEFAULT_DIALECT})")
    parser.add_argument("--strict", action="store_true",
                        help="Reject unknown mnemonics, unset operands and operands > 15")
    parser.add_argument("--format", choices=list(OUTPUT_FORMATS), default="hex",
                        help="Output format (default: hex)")
    parser.add_argument("--verbose", "-v", action="count", default=0,
                        help="Increase verbosity (-v, -vv)")
    parser.add_argument("--quiet", "-q", action="store_true",
                        help="Suppress all output except errors")
    parser.add_argument("--log-file", type=str,
                        help="Write log to file")
    parser.add_argument("--no-log", action="store_true",
                        help="Disable logging")
    parser.add_argument("--version", action="version",
                        version=f"ulacc {__version__}")
    return parser


def setup_logging(args):
    """Configure logging based on arguments"""
    if args.no_log:
        logging.disable(logging.CRITICAL)
        return
    logging.disable(logging.NOTSET)

    if args.quiet:
        level = logging.ERROR
    elif args.verbose == 0:
        level = logging.INFO
    else:
        level = logging.DEBUG

    handlers = []

    # Console goes to stderr so '-o -' output stays clean
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    handlers.append(console)

    if args.log_file:
        log_path = Path(args.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))
        handlers.append(file_handler)

    logging.basicConfig(
        level=logging.DEBUG if args.log_file else level,
        handlers=handlers,
        force=True
    )


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args)

    output = args.output or default_output_path(args.input)
    logger.debug("Input:   %s", args.input)
    logger.debug("Output:  %s (%s)", output, args.format)
    logger.debug("Dialect: %s, strict: %s", args.dialect, args.strict)

    try:
        assemble_file(args.input, output, dialect=args.dialect,
                      strict=args.strict, fmt=args.format)
    except UlaError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Internal assembler error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
