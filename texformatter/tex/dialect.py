from __future__ import annotations

import enum
import re


class MathDialect(str, enum.Enum):
    CHATGPT = "chatgpt"
    OBSIDIAN = "obsidian"
    MIXED = "mixed"
    UNKNOWN = "unknown"


# \( \) \[ \], align/eqnarray (not aligned), \displaystyle
_CHATGPT_MARKERS = re.compile(
    r"\\[()\[\]]|\\begin\{(?:align|eqnarray)\*?\}|\\displaystyle"
)

_OBSIDIAN_MARKERS = re.compile(r"(?<!\\)\$|\\begin\{aligned\}")


def detect_math_dialect(content: str) -> MathDialect:
    """Best-effort dialect detection.

    The goal is not to be perfect, but to tell a caller whether a piece of
    text still carries ChatGPT-style delimiters, already looks converted, or
    mixes both.
    """

    if not content:
        return MathDialect.UNKNOWN

    has_chatgpt = _CHATGPT_MARKERS.search(content) is not None
    has_obsidian = _OBSIDIAN_MARKERS.search(content) is not None

    if has_chatgpt and has_obsidian:
        return MathDialect.MIXED
    if has_chatgpt:
        return MathDialect.CHATGPT
    if has_obsidian:
        return MathDialect.OBSIDIAN
    return MathDialect.UNKNOWN
