from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from loguru import logger

from texformatter.tex.dialect import MathDialect, detect_math_dialect
from texformatter.tex.stages import STAGES


@dataclass(frozen=True)
class ConversionResult:
    content: str
    changed: bool
    stages: Tuple[str, ...] = ()
    dialect: MathDialect = MathDialect.UNKNOWN


def convert(content: str) -> str:
    """Convert ChatGPT-style LaTeX into Obsidian-compatible MathJax.

    Runs every stage of ``STAGES`` in order. Never raises on string input;
    anything a stage does not recognise is passed through unchanged.
    """

    if not content or not content.strip():
        return ""

    out = content
    for _, stage in STAGES:
        out = stage(out)
    return out


def convert_with_report(content: str) -> ConversionResult:
    """Same pipeline as :func:`convert`, also recording which stages fired."""

    if not content or not content.strip():
        return ConversionResult(content="", changed=bool(content))

    dialect = detect_math_dialect(content)
    fired = []

    out = content
    for name, stage in STAGES:
        before = out
        out = stage(out)
        if out != before:
            fired.append(name)
            logger.debug(f"Stage '{name}' rewrote text ({len(before)} -> {len(out)} chars)")

    return ConversionResult(
        content=out,
        changed=out != content,
        stages=tuple(fired),
        dialect=dialect,
    )
