"""Individual rewrite stages of the conversion pipeline.

Every stage is a plain ``str -> str`` function with no state. They are
pattern based (no parsing), so unbalanced or malformed input simply passes
through whatever a stage does not recognise.

The order in ``STAGES`` matters: later stages re-scan text produced by
earlier ones (e.g. the ``$$`` guard of the matrix stage sees the markers
written by the delimiter stages).
"""

from __future__ import annotations

import re
from typing import Callable, Tuple

ALIGNED_ENVIRONMENTS = ("align", "align*", "eqnarray", "eqnarray*")
MATRIX_ENVIRONMENTS = ("cases", "matrix", "pmatrix", "bmatrix", "vmatrix", "Vmatrix")

_ALIGNED_ENV_PAT = re.compile(
    r"\\begin\{(?P<env>align\*?|eqnarray\*?)\}(?P<body>.*?)\\end\{(?P=env)\}",
    re.DOTALL,
)

# A $$ marker flush against the environment (at most one line break away)
# is captured so the guard can check whether it opens or closes the block
# around the environment.
_MATRIX_ENV_PAT = re.compile(
    r"(?P<open>\$\$[ \t]*\n?[ \t]*)?"
    r"(?P<env_span>\\begin\{(?P<env>cases|matrix|pmatrix|bmatrix|vmatrix|Vmatrix)\}"
    r"(?P<body>.*?)"
    r"\\end\{(?P=env)\})"
    r"(?P<close>[ \t]*\n?[ \t]*\$\$)?",
    re.DOTALL,
)

_DOLLAR_PAT = re.compile(r"(?<!\\)\$\$?")

_DISPLAYSTYLE_PAT = re.compile(r"\\displaystyle\s*")

_BARE_SCRIPT_PAT = re.compile(r"(?<!\\)[_^](?![a-zA-Z0-9{])")

_TRAILING_SPACE_PAT = re.compile(r"[ \t]+$", re.MULTILINE)
_BLANK_RUN_PAT = re.compile(r"\n\s*\n\s*\n")
_LEADING_BREAK_PAT = re.compile(r"\A\s*\n")
_TRAILING_BREAK_PAT = re.compile(r"\n\s*\Z")

_TEXT_DOUBLE_BRACE_PAT = re.compile(r"\\text\{\{([^}]+)\}\}")
_DOUBLE_BRACE_PAT = re.compile(r"\{\{([^{}]+)\}\}")

BLOCK_MARKER = "$$"


def normalize_inline_delimiters(text: str) -> str:
    r"""``\(`` and ``\)`` become ``$``, each side replaced on its own."""
    return text.replace("\\(", "$").replace("\\)", "$")


def normalize_block_delimiters(text: str) -> str:
    r"""``\[`` and ``\]`` become ``$$``, each side replaced on its own."""
    return text.replace("\\[", BLOCK_MARKER).replace("\\]", BLOCK_MARKER)


def find_block_markers(text: str) -> list[int]:
    """Offsets of the ``$$`` that open or close display blocks, in order.

    ``$`` and ``$$`` are paired left to right the way a Markdown math
    scanner does. Inside an inline formula a ``$$`` is the end of that
    formula plus the start of the next one (``$a$$b$``), not a block marker.
    An inline formula left open does not run past the end of its line.
    Escaped dollars are ignored.
    """
    markers: list[int] = []
    in_inline = False
    in_block = False
    pos = 0
    while True:
        m = _DOLLAR_PAT.search(text, pos)
        if m is None:
            return markers
        if in_inline and "\n" in text[pos:m.start()]:
            in_inline = False

        if in_block:
            if m.group(0) == BLOCK_MARKER:
                markers.append(m.start())
                in_block = False
            pos = m.end()
        elif in_inline:
            # Close the inline formula with one dollar; rescan the rest.
            in_inline = False
            pos = m.start() + 1
        elif m.group(0) == BLOCK_MARKER:
            markers.append(m.start())
            in_block = True
            pos = m.end()
        else:
            in_inline = True
            pos = m.end()


def wrap_aligned_environments(text: str) -> str:
    """Rewrite align/eqnarray environments as ``aligned`` inside a $$ block.

    Matching is non-greedy up to the first ``\\end`` of the same name, so
    nested environments of the same kind are not supported.
    """

    def _repl(m: re.Match) -> str:
        body = m.group("body")
        return BLOCK_MARKER + "\\begin{aligned}" + body + "\\end{aligned}" + BLOCK_MARKER

    return _ALIGNED_ENV_PAT.sub(_repl, text)


def wrap_matrix_environments(text: str) -> str:
    """Wrap cases/matrix environments in $$ unless they are already in a block.

    The environment name is kept as is. An environment is left alone when
    its own ``\\begin``..``\\end`` span contains ``$$``, or when it sits flush
    against the ``$$`` that opens or closes the block around it. A flush
    ``$$`` belonging to a neighbouring block does not count.
    """

    position = {offset: i for i, offset in enumerate(find_block_markers(text))}

    def _repl(m: re.Match) -> str:
        env_span = m.group("env_span")
        opens_block = (
            m.group("open") is not None and position.get(m.start("open"), 1) % 2 == 0
        )
        closes_block = (
            m.group("close") is not None
            and position.get(m.end("close") - len(BLOCK_MARKER), 0) % 2 == 1
        )
        if BLOCK_MARKER in env_span or opens_block or closes_block:
            return m.group(0)
        prefix = m.group("open") or ""
        suffix = m.group("close") or ""
        return prefix + BLOCK_MARKER + env_span + BLOCK_MARKER + suffix

    return _MATRIX_ENV_PAT.sub(_repl, text)


def strip_displaystyle(text: str) -> str:
    r"""Drop ``\displaystyle`` and the whitespace after it."""
    return _DISPLAYSTYLE_PAT.sub("", text)


def escape_bare_scripts(text: str) -> str:
    """Escape ``_``/``^`` that have no operand after them.

    A script character followed by an ASCII letter, digit or ``{`` is an
    operator and stays. One that is already escaped stays too.
    """
    return _BARE_SCRIPT_PAT.sub(lambda m: "\\" + m.group(0), text)


def normalize_whitespace(text: str) -> str:
    """Trim line ends, collapse blank runs and pull $$ flush against content."""
    out = _TRAILING_SPACE_PAT.sub("", text)
    out = _BLANK_RUN_PAT.sub("\n\n", out)

    markers = find_block_markers(out)
    if not markers:
        return out

    # Even-indexed chunks sit outside $$ blocks, odd-indexed ones inside.
    chunks = []
    prev = 0
    for offset in markers:
        chunks.append(out[prev:offset])
        prev = offset + len(BLOCK_MARKER)
    chunks.append(out[prev:])

    last = len(chunks) - 1
    for i in range(1, len(chunks), 2):
        chunk = _LEADING_BREAK_PAT.sub("", chunks[i])
        if i < last:
            chunk = _TRAILING_BREAK_PAT.sub("", chunk)
        chunks[i] = chunk
    return BLOCK_MARKER.join(chunks)


def collapse_redundant_braces(text: str) -> str:
    r"""``\text{{x}}`` and ``{{x}}`` lose their extra pair of braces."""
    out = _TEXT_DOUBLE_BRACE_PAT.sub(lambda m: "\\text{" + m.group(1) + "}", text)
    out = _DOUBLE_BRACE_PAT.sub(lambda m: "{" + m.group(1) + "}", out)
    return out


def trim(text: str) -> str:
    """Strip leading and trailing whitespace."""
    return text.strip()


Stage = Tuple[str, Callable[[str], str]]

STAGES: Tuple[Stage, ...] = (
    ("inline_delimiters", normalize_inline_delimiters),
    ("block_delimiters", normalize_block_delimiters),
    ("aligned_environments", wrap_aligned_environments),
    ("matrix_environments", wrap_matrix_environments),
    ("displaystyle", strip_displaystyle),
    ("escape_scripts", escape_bare_scripts),
    ("whitespace", normalize_whitespace),
    ("redundant_braces", collapse_redundant_braces),
    ("trim", trim),
)
