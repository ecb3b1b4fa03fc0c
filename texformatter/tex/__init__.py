"""Math dialect detection and conversion utilities.

This package provides small, best-effort helpers to turn ChatGPT-flavoured
LaTeX (``\\( \\)``, ``\\[ \\]``, ``align`` environments) into the MathJax
dialect understood by Obsidian-style Markdown renderers (``$``, ``$$``,
``aligned``).
"""
