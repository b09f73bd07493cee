import time

import pytest

from codel.services.fix_matcher import (
    FIX_MATCH_STRATEGIES,
    bug_line_fallback,
    build_context,
    changed_lines,
    is_fix_guess_correct,
    key_fixes,
    match_fix,
    single_line_in_target,
)


@pytest.fixture
def average_puzzle(make_bug_puzzle):
    return make_bug_puzzle(
        buggy_lines=(
            "function average(nums) {",
            "  let total = 0;",
            "  for (const n of nums) total += n;",
            "  const avg = total / nums.length;",
            "  return total;",
            "}",
        ),
        bug_line_number=5,
        fixed_lines=(
            "function average(nums) {",
            "  let total = 0;",
            "  for (const n of nums) total += n;",
            "  const avg = total / nums.length;",
            "  return total / nums.length;",
            "}",
        ),
    )


@pytest.fixture
def alias_puzzle(make_bug_puzzle):
    return make_bug_puzzle(
        buggy_lines=(
            "function count(items) {",
            "  const total = items.length;",
            "  const x = total;",
            "  return 0;",
            "}",
        ),
        bug_line_number=4,
        fixed_lines=(
            "function count(items) {",
            "  const total = items.length;",
            "  const x = total;",
            "  return total;",
            "}",
        ),
    )


@pytest.fixture
def is_even_puzzle(make_bug_puzzle):
    return make_bug_puzzle(
        buggy_lines=("function isEven(n) {", "  return n % 2 = 0;", "}"),
        fixed_lines=("function isEven(n) {", "  return n % 2 === 0;", "}"),
        valid_fixes=("return n % 2 == 0;", "return !(n % 2);"),
    )


def test_strategies_run_in_documented_order():
    assert [name for name, _ in FIX_MATCH_STRATEGIES] == [
        'exact_full_match',
        'exact_full_match_ignoring_whitespace',
        'changed_lines_only_match',
        'any_changed_line_match',
        'substring_of_target',
        'substring_ignoring_whitespace',
        'single_line_in_target',
        'declared_valid_fix',
        'variable_indirection',
        'bug_line_fallback',
    ]


def test_empty_guess_is_rejected(bug_puzzle):
    assert match_fix("", bug_puzzle) == (False, None)
    assert match_fix("  \n\t\n ", bug_puzzle) == (False, None)


def test_exact_full_match(bug_puzzle):
    result = match_fix("let i=0\nif(i==1)\nreturn i", bug_puzzle)
    assert result == (True, 'exact_full_match')


def test_exact_full_match_tolerates_spacing_runs(bug_puzzle):
    result = match_fix("\n  let   i=0   \n if(i==1)\nreturn\ti\n\n", bug_puzzle)
    assert result == (True, 'exact_full_match')


def test_exact_full_match_dominates_variable_rule(average_puzzle):
    guess = "\n".join(average_puzzle.fixed_lines)
    assert match_fix(guess, average_puzzle) == (True, 'exact_full_match')


def test_exact_match_ignoring_whitespace(bug_puzzle):
    result = match_fix("let i = 0\nif (i == 1)\nreturn i", bug_puzzle)
    assert result == (True, 'exact_full_match_ignoring_whitespace')


def test_single_corrected_line_matches_changed_lines(bug_puzzle):
    assert match_fix("if(i==1)", bug_puzzle) == (True, 'changed_lines_only_match')


def test_all_changed_lines_in_order(make_bug_puzzle):
    puzzle = make_bug_puzzle(
        buggy_lines=("x = 1", "y = x + 1", "z = y * 2"),
        bug_line_number=2,
        fixed_lines=("x = 1", "y = x - 1", "z = y / 2"),
    )
    assert match_fix("y = x - 1\nz = y / 2", puzzle) == (True, 'changed_lines_only_match')
    assert match_fix("z = y / 2\ny = x - 1", puzzle) == (True, 'any_changed_line_match')


def test_any_changed_line_with_extra_context(bug_puzzle):
    result = match_fix("if(i==1)\nconsole.log(i)", bug_puzzle)
    assert result == (True, 'any_changed_line_match')


def test_fragment_of_target_is_accepted(bug_puzzle):
    assert match_fix("return i", bug_puzzle) == (True, 'substring_of_target')


def test_fragment_with_different_spacing(bug_puzzle):
    result = match_fix("if (i==1) return i", bug_puzzle)
    assert result == (True, 'substring_ignoring_whitespace')


def test_guess_containing_whole_target(bug_puzzle):
    result = match_fix("// fixed\nlet i=0 if(i == 1) return i", bug_puzzle)
    assert result == (True, 'substring_ignoring_whitespace')


def test_declared_valid_fix_line(is_even_puzzle):
    assert match_fix("return n%2==0;", is_even_puzzle) == (True, 'declared_valid_fix')


def test_declared_valid_fix_split_across_lines(is_even_puzzle):
    assert match_fix("return !(n %\n 2);", is_even_puzzle) == (True, 'declared_valid_fix')


def test_returning_alias_without_assignment_is_rejected(alias_puzzle):
    assert match_fix("return x;", alias_puzzle) == (False, 'variable_indirection')


def test_returning_alias_with_assignment_is_accepted(alias_puzzle):
    guess = "const x = total;\nreturn x;"
    assert match_fix(guess, alias_puzzle) == (True, 'variable_indirection')


def test_returning_computed_variable(average_puzzle):
    assert not is_fix_guess_correct("return avg;", average_puzzle)
    assert is_fix_guess_correct("const avg = total / nums.length;\nreturn avg;", average_puzzle)


def test_returning_unrelated_variable_falls_through(average_puzzle):
    assert match_fix("return result;", average_puzzle) == (False, None)


def test_wrong_fix_is_rejected(bug_puzzle):
    assert match_fix("if(i===1)", bug_puzzle) == (False, None)
    assert not is_fix_guess_correct("console.log(i)", bug_puzzle)


def test_single_line_in_target_strategy(bug_puzzle):
    assert single_line_in_target(build_context("i==1", bug_puzzle)) is True
    assert single_line_in_target(build_context("i==1\nreturn i", bug_puzzle)) is None
    assert single_line_in_target(build_context("nope", bug_puzzle)) is None


def test_bug_line_fallback_strategy(bug_puzzle):
    assert bug_line_fallback(build_context("  if(i==1)  ", bug_puzzle)) is True
    assert bug_line_fallback(build_context("return i", bug_puzzle)) is None


def test_bug_line_fallback_with_short_fixed_snippet(make_bug_puzzle):
    puzzle = make_bug_puzzle(buggy_lines=("a", "b", "c"), bug_line_number=3, fixed_lines=("a",))
    assert bug_line_fallback(build_context("a", puzzle)) is None


def test_changed_lines_with_unequal_lengths(make_bug_puzzle):
    puzzle = make_bug_puzzle(
        buggy_lines=("def add_tag(tag, tags=[]):", "    tags.append(tag)", "    return tags"),
        bug_line_number=1,
        fixed_lines=(
            "def add_tag(tag, tags=None):",
            "    tags = [] if tags is None else tags",
            "    tags.append(tag)",
            "    return tags",
        ),
    )
    assert changed_lines(puzzle) == [
        "def add_tag(tag, tags=None):",
        "tags = [] if tags is None else tags",
        "tags.append(tag)",
        "return tags",
    ]
    assert match_fix("def add_tag(tag, tags=None):", puzzle).accepted


def test_key_fixes(bug_puzzle, is_even_puzzle):
    assert key_fixes(bug_puzzle) == ["if(i==1)"]
    assert key_fixes(is_even_puzzle) == ["return n % 2 === 0;"]


def test_long_whitespace_run_in_guess_is_handled_quickly(bug_puzzle):
    started = time.perf_counter()
    assert match_fix("x" + " " * 200_000 + "y", bug_puzzle) == (False, None)
    assert time.perf_counter() - started < 1.0


def test_blank_line_in_both_snippets_is_not_changed(make_bug_puzzle):
    puzzle = make_bug_puzzle(
        buggy_lines=("let i=0", "", "if(i=1)"),
        bug_line_number=3,
        fixed_lines=("let i=0", "", "if(i==1)"),
    )
    assert changed_lines(puzzle) == ["if(i==1)"]
    assert match_fix("if(i==1)", puzzle) == (True, 'changed_lines_only_match')
