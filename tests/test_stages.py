from texformatter.tex import stages
from texformatter.tex.stages import (
    collapse_redundant_braces,
    escape_bare_scripts,
    find_block_markers,
    normalize_block_delimiters,
    normalize_inline_delimiters,
    normalize_whitespace,
    strip_displaystyle,
    trim,
    wrap_aligned_environments,
    wrap_matrix_environments,
)


def test_stage_order():
    assert [name for name, _ in stages.STAGES] == [
        "inline_delimiters",
        "block_delimiters",
        "aligned_environments",
        "matrix_environments",
        "displaystyle",
        "escape_scripts",
        "whitespace",
        "redundant_braces",
        "trim",
    ]


# -------- delimiters --------


def test_inline_delimiters_replaced_independently():
    assert normalize_inline_delimiters("\\(a\\) and \\(b") == "$a$ and $b"


def test_block_delimiters_replaced_independently():
    assert normalize_block_delimiters("\\[x\\]") == "$$x$$"
    assert normalize_block_delimiters("\\[x") == "$$x"


# -------- environments --------


def test_aligned_environment_variants():
    assert (
        wrap_aligned_environments("\\begin{align*}a&=b\\end{align*}")
        == "$$\\begin{aligned}a&=b\\end{aligned}$$"
    )
    assert (
        wrap_aligned_environments("\\begin{eqnarray}a&=&b\\end{eqnarray}")
        == "$$\\begin{aligned}a&=&b\\end{aligned}$$"
    )


def test_sequential_aligned_environments_are_wrapped_separately():
    content = "\\begin{align}a\\end{align} and \\begin{eqnarray*}b\\end{eqnarray*}"
    assert (
        wrap_aligned_environments(content)
        == "$$\\begin{aligned}a\\end{aligned}$$ and $$\\begin{aligned}b\\end{aligned}$$"
    )


def test_aligned_environment_needs_matching_end():
    content = "\\begin{align}a\\end{align*}"
    assert wrap_aligned_environments(content) == content


def test_aligned_is_not_rewrapped():
    content = "$$\\begin{aligned}a\\end{aligned}$$"
    assert wrap_aligned_environments(content) == content


def test_matrix_environment_is_wrapped_and_keeps_its_name():
    assert (
        wrap_matrix_environments("\\begin{bmatrix}a\\end{bmatrix}")
        == "$$\\begin{bmatrix}a\\end{bmatrix}$$"
    )
    assert (
        wrap_matrix_environments("\\begin{Vmatrix}a\\end{Vmatrix}")
        == "$$\\begin{Vmatrix}a\\end{Vmatrix}$$"
    )


def test_matrix_environment_containing_block_marker_is_untouched():
    content = "\\begin{matrix}$$\\end{matrix}"
    assert wrap_matrix_environments(content) == content


def test_matrix_environment_delimited_on_own_lines_is_untouched():
    content = "$$\n\\begin{vmatrix}a\\end{vmatrix}\n$$"
    assert wrap_matrix_environments(content) == content


def test_unlisted_environment_is_untouched():
    content = "\\begin{Bmatrix}a\\end{Bmatrix}"
    assert wrap_matrix_environments(content) == content


# -------- displaystyle / escapes --------


def test_strip_displaystyle_eats_trailing_whitespace():
    assert strip_displaystyle("\\displaystyle   \\sum") == "\\sum"
    assert strip_displaystyle("\\displaystyle\n x") == "x"


def test_escape_bare_scripts():
    assert escape_bare_scripts("a_") == "a\\_"
    assert escape_bare_scripts("x^ 2") == "x\\^ 2"
    assert escape_bare_scripts("x_1 y^{2} z_a") == "x_1 y^{2} z_a"


def test_escape_leaves_escaped_scripts_alone():
    assert escape_bare_scripts("\\_ and \\^") == "\\_ and \\^"


def test_escape_treats_command_operand_as_bare():
    assert escape_bare_scripts("x_\\alpha") == "x\\_\\alpha"


def test_escape_only_counts_ascii_alphanumerics():
    assert escape_bare_scripts("x_é") == "x\\_é"


# -------- whitespace --------


def test_trailing_spaces_and_tabs_are_stripped():
    assert normalize_whitespace("a  \nb\t\n") == "a\nb\n"


def test_blank_line_runs_collapse():
    assert normalize_whitespace("a\n\n\n\nb") == "a\n\nb"
    assert normalize_whitespace("a\n\nb") == "a\n\nb"


def test_block_markers_pulled_flush_against_content():
    assert normalize_whitespace("$$\nx\n$$") == "$$x$$"
    assert normalize_whitespace("Text\n$$\nx = 1\n$$\nMore") == "Text\n$$x = 1$$\nMore"


def test_unclosed_block_only_loses_leading_break():
    assert normalize_whitespace("$$\nx\n") == "$$x\n"


# -------- braces / trim --------


def test_redundant_braces():
    assert collapse_redundant_braces("\\text{{hi}}") == "\\text{hi}"
    assert collapse_redundant_braces("\\frac{{1}}{2}") == "\\frac{1}{2}"


def test_braces_with_nested_content_are_kept():
    content = "{{a{b}}}"
    assert collapse_redundant_braces(content) == "{{a{b}}}"


def test_trim():
    assert trim("  \n$x$\n ") == "$x$"


# -------- block markers --------


def test_block_markers_pair_in_order():
    assert find_block_markers("$$a$$ and $$b$$") == [0, 3, 10, 13]


def test_adjacent_inline_formulas_are_not_block_markers():
    assert find_block_markers("$a$$b$") == []
    assert find_block_markers("$a$$b$ text\n$$x$$") == [12, 15]


def test_escaped_dollars_are_not_block_markers():
    assert find_block_markers("costs \\$$5") == []


def test_unclosed_inline_formula_stops_at_line_end():
    assert find_block_markers("costs $5\n$$x$$") == [9, 12]


def test_matrix_after_separate_block_is_wrapped():
    content = "$$a$$\n\\begin{cases}x\\end{cases}"
    assert wrap_matrix_environments(content) == "$$a$$\n$$\\begin{cases}x\\end{cases}$$"


def test_matrix_before_separate_block_is_wrapped():
    content = "\\begin{pmatrix}1\\end{pmatrix} $$b$$"
    assert wrap_matrix_environments(content) == "$$\\begin{pmatrix}1\\end{pmatrix}$$ $$b$$"


def test_matrix_flush_with_only_its_opening_marker_is_untouched():
    content = "$$\\begin{bmatrix}a\\end{bmatrix} = A$$"
    assert wrap_matrix_environments(content) == content


def test_whitespace_pairing_ignores_adjacent_inline_formulas():
    content = "$a$$b$ text\n$$\nx\n$$"
    assert normalize_whitespace(content) == "$a$$b$ text\n$$x$$"
