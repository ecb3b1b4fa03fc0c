import pytest


@pytest.fixture
def chatgpt_answer():
    return (
        "The roots are \\(x_1\\) and \\(x_2\\):   \n"
        "\\[\n"
        "\\displaystyle x = \\frac{-b \\pm \\sqrt{b^2 - 4ac}}{2a}\n"
        "\\]\n"
        "\n\n\n"
        "Done."
    )


@pytest.fixture
def obsidian_answer():
    return (
        "The roots are $x_1$ and $x_2$:\n"
        "$$x = \\frac{-b \\pm \\sqrt{b^2 - 4ac}}{2a}$$\n"
        "\n"
        "Done."
    )
