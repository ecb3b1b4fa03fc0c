import pytest

from texformatter.gallery import EXAMPLES, get_examples, render_example

EXPECTED = {
    "Inline math": "The circle $x^2 + y^2 = r^2$ has radius $r$.",
    "Aligned equations": (
        "$$\\begin{aligned}\nf(x) &= x^2 \\\\\ng(x) &= 2x\n\\end{aligned}$$"
    ),
    "Display block": "$$\\int_0^1 x^2 \\, dx = \\frac{1}{3}$$",
    "Matrix": "The identity is $$\\begin{pmatrix}1 & 0 \\\\ 0 & 1\\end{pmatrix}$$.",
    "Piecewise definition": (
        "|x| = $$\\begin{cases} x & x \\ge 0 \\\\ -x & x < 0 \\end{cases}$$"
    ),
    "Literal underscores": (
        "Files like draft\\_ and notes\\^ keep their symbols next to $a_1 + b^{2}$."
    ),
    "Redundant braces": "$\\text{speed} = \\frac{d}{t}$",
}


def test_every_example_has_an_expectation():
    assert {ex.title for ex in get_examples()} == set(EXPECTED)


@pytest.mark.parametrize("example", EXAMPLES, ids=lambda ex: ex.title)
def test_example_renders_expected_output(example):
    source, converted = render_example(example)
    assert source == example.source
    assert converted == EXPECTED[example.title]
