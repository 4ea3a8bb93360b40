"""Command-line interface for tokenweave."""

from __future__ import annotations

import argparse
import logging
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from tokenweave.errors import LexError, ReconstructError

logger = logging.getLogger(__name__)

CONFIG_NAME = "tokenweave.toml"


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    check: bool
    diff: bool
    final_newline: bool
    debug: bool
    verbose: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="tokenweave",
        description="Rebuild source text from its token tree, preserving whitespace",
    )
    p.add_argument("input", help="Input source file")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "--check",
        action="store_true",
        help="Only verify that the round trip reproduces the input",
    )
    p.add_argument(
        "--diff",
        action="store_true",
        default=None,
        help="With --check, print a unified diff of any divergence",
    )
    p.add_argument(
        "--final-newline",
        action="store_true",
        default=None,
        help="Append a newline to non-empty output",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_NAME})",
    )
    p.add_argument("--debug", action="store_true", help="Dump the token tree to stderr")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / CONFIG_NAME

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    final_newline = False
    cfg_final = config.get("final_newline")
    if isinstance(cfg_final, bool):
        final_newline = cfg_final
    if args.final_newline is not None:
        final_newline = args.final_newline

    diff = False
    cfg_check = config.get("check")
    if isinstance(cfg_check, dict):
        cfg_diff = cfg_check.get("diff")
        if isinstance(cfg_diff, bool):
            diff = cfg_diff
    if args.diff is not None:
        diff = args.diff

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        check=args.check,
        diff=diff,
        final_newline=final_newline,
        debug=args.debug,
        verbose=args.verbose,
    )


def reconstruct_file(options: CliOptions) -> str:
    """Read and tokenize a source file, then rebuild it from its token tree."""
    from tokenweave.debug import dump_tree
    from tokenweave.lexer import tokenize
    from tokenweave.reconstruct import reconstruct

    source = options.input_file.read_text(encoding="utf-8")
    stream = tokenize(source, str(options.input_file))
    logger.debug("%s: %d top-level nodes", options.input_file, len(stream))

    if options.debug:
        dump_tree(stream, file=sys.stderr)

    try:
        code = reconstruct(stream)
    except ReconstructError as exc:
        raise exc.with_source(source) from exc

    if options.final_newline and code:
        code += "\n"
    return code


def check_file(options: CliOptions) -> bool:
    """Report on stderr whether the input survives a round trip unchanged."""
    from tokenweave.verify import expected_text, first_divergence, unified_diff

    source = options.input_file.read_text(encoding="utf-8")
    expected = expected_text(source)
    actual = reconstruct_file(options)
    if options.final_newline and actual:
        actual = actual[:-1]

    divergence = first_divergence(expected, actual)
    if divergence is None:
        return True

    pos = divergence.position
    print(
        f"{options.input_file}:{pos.line}:{pos.column}: reconstruction diverges from source",
        file=sys.stderr,
    )
    print(f"  expected: {divergence.expected_line!r}", file=sys.stderr)
    print(f"  actual:   {divergence.actual_line!r}", file=sys.stderr)
    if options.diff:
        sys.stderr.write(unified_diff(expected, actual, str(options.input_file)))
    return False


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        options = resolve_options(args)
    except tomllib.TOMLDecodeError as exc:
        print(f"error: invalid config: {exc}", file=sys.stderr)
        return 2

    try:
        if options.check:
            return 0 if check_file(options) else 1
        code = reconstruct_file(options)
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except LexError as exc:
        print(exc.format(str(options.input_file)), file=sys.stderr)
        return 1
    except ReconstructError as exc:
        print(exc.format(str(options.input_file)), file=sys.stderr)
        return 2

    if options.output_file:
        options.output_file.write_text(code, encoding="utf-8")
    else:
        sys.stdout.write(code)

    return 0
