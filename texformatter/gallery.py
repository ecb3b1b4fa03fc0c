"""Built-in conversion examples.

Each example only stores its ChatGPT-style source; the converted form is
always produced by the live pipeline so the gallery cannot drift from the
converter.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from texformatter.tex.convert import convert


@dataclass(frozen=True)
class ConversionExample:
    title: str
    description: str
    source: str


EXAMPLES: Tuple[ConversionExample, ...] = (
    ConversionExample(
        title="Inline math",
        description="\\( ... \\) delimiters become single dollars.",
        source="The circle \\(x^2 + y^2 = r^2\\) has radius \\(r\\).",
    ),
    ConversionExample(
        title="Aligned equations",
        description="align environments become aligned inside a $$ block.",
        source="\\begin{align}\nf(x) &= x^2 \\\\\ng(x) &= 2x\n\\end{align}",
    ),
    ConversionExample(
        title="Display block",
        description="\\[ ... \\] becomes $$ ... $$ and \\displaystyle is dropped.",
        source="\\[\n\\displaystyle \\int_0^1 x^2 \\, dx = \\frac{1}{3}\n\\]",
    ),
    ConversionExample(
        title="Matrix",
        description="Bare matrix environments are wrapped in $$.",
        source="The identity is \\begin{pmatrix}1 & 0 \\\\ 0 & 1\\end{pmatrix}.",
    ),
    ConversionExample(
        title="Piecewise definition",
        description="cases environments are wrapped in $$ and keep their name.",
        source="|x| = \\begin{cases} x & x \\ge 0 \\\\ -x & x < 0 \\end{cases}",
    ),
    ConversionExample(
        title="Literal underscores",
        description="A _ or ^ with nothing to attach to is escaped.",
        source="Files like draft_ and notes^ keep their symbols next to \\(a_1 + b^{2}\\).",
    ),
    ConversionExample(
        title="Redundant braces",
        description="\\text{{...}} loses its extra pair of braces.",
        source="\\(\\text{{speed}} = \\frac{d}{t}\\)",
    ),
)


def get_examples() -> Tuple[ConversionExample, ...]:
    return EXAMPLES


def render_example(example: ConversionExample) -> Tuple[str, str]:
    """Return ``(source, converted)`` for one example."""
    return example.source, convert(example.source)
