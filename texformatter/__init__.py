"""Convert ChatGPT-style LaTeX into Obsidian-compatible MathJax."""

from texformatter.tex.convert import ConversionResult, convert, convert_with_report
from texformatter.tex.dialect import MathDialect, detect_math_dialect

__version__ = "0.1.0"

__all__ = [
    "ConversionResult",
    "MathDialect",
    "convert",
    "convert_with_report",
    "detect_math_dialect",
]
