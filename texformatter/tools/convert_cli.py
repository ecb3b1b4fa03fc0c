"""Command-line converter from ChatGPT-style LaTeX to Obsidian MathJax.

    texformatter notes.md                 # converted text on stdout
    pbpaste | texformatter                # read stdin
    texformatter a.md b.md --in-place     # rewrite files
    texformatter notes.md -o out.md       # write to a file
    texformatter --examples               # show the built-in gallery

Converted text is the only thing written to stdout; logging and the
optional per-source report go to stderr.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from loguru import logger

from texformatter.gallery import get_examples, render_example
from texformatter.tex.convert import ConversionResult, convert_with_report

STDIN_MARKER = "-"


def _configure_logging(verbose: bool = False) -> None:
    """Configure loguru to log only to stderr."""

    logger.remove()
    level = "DEBUG" if verbose else "INFO"
    logger.add(sys.stderr, level=level)


def _with_newline(text: str) -> str:
    return text + "\n" if text else text


def _report(label: str, result: ConversionResult) -> None:
    stages = ", ".join(result.stages) or "none"
    logger.info(
        f"{label}: dialect={result.dialect.value} changed={result.changed} stages={stages}"
    )


def _print_examples() -> None:
    for i, ex in enumerate(get_examples(), start=1):
        source, converted = render_example(ex)
        print(f"[{i}] {ex.title}: {ex.description}")
        print("--- ChatGPT style")
        print(source)
        print("--- Obsidian compatible")
        print(converted)
        print()


def _read_source(source: str) -> str:
    if source == STDIN_MARKER:
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="texformatter",
        description=(
            "Convert ChatGPT-style LaTeX (\\( \\), \\[ \\], align) into "
            "Obsidian-compatible MathJax ($, $$, aligned)."
        ),
    )
    parser.add_argument(
        "sources",
        nargs="*",
        help="Files to convert. Reads stdin when omitted or given as '-'.",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Write the converted text to this file instead of stdout.",
    )
    parser.add_argument(
        "--in-place",
        action="store_true",
        help="Rewrite each source file with its converted text.",
    )
    parser.add_argument(
        "--report",
        action="store_true",
        help="Log the detected dialect and the stages that fired for each source.",
    )
    parser.add_argument(
        "--examples",
        action="store_true",
        help="Print the built-in conversion examples and exit.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging (DEBUG level).",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(verbose=args.verbose)

    if args.examples:
        _print_examples()
        return

    sources = args.sources or [STDIN_MARKER]

    if args.in_place and args.output:
        parser.error("--in-place cannot be combined with --output")
    if args.in_place and STDIN_MARKER in sources:
        parser.error("--in-place needs file sources, not stdin")

    outputs: list[str] = []
    failures = 0

    for source in sources:
        label = "<stdin>" if source == STDIN_MARKER else source
        try:
            content = _read_source(source)
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Could not read {label}: {e}")
            failures += 1
            continue

        result = convert_with_report(content)
        if args.report:
            _report(label, result)

        if args.in_place:
            try:
                Path(source).write_text(_with_newline(result.content), encoding="utf-8")
            except OSError as e:
                logger.error(f"Could not write {label}: {e}")
                failures += 1
                continue
            logger.info(f"Rewrote {label}")
        else:
            outputs.append(result.content)

    if not args.in_place:
        text = "\n\n".join(outputs)
        if args.output:
            try:
                Path(args.output).write_text(_with_newline(text), encoding="utf-8")
            except OSError as e:
                logger.error(f"Could not write {args.output}: {e}")
                sys.exit(1)
            logger.info(f"Saved converted text to {args.output}")
        else:
            sys.stdout.write(_with_newline(text))
            sys.stdout.flush()

    if failures:
        logger.error(f"{failures} source(s) failed")
        sys.exit(1)


if __name__ == "__main__":  # pragma: no cover
    main()
