"""
Fix-Match Evaluator

Decides whether a free-form fix guess counts as having fixed a bug puzzle.

The decision is an ordered chain of named strategies, going from strict
equality to increasingly forgiving matches. Each strategy looks at a
precomputed MatchContext and answers:

- True:  accept the guess, stop
- False: reject the guess, stop
- None:  no opinion, try the next strategy

A guess that reaches the end of the chain is rejected.
"""

import re
from dataclasses import dataclass
from typing import Callable, Dict, List, NamedTuple, Optional, Tuple

from ..models.puzzle import BugPuzzle
from .normalizer import (
    normalize_for_comparison,
    normalize_line,
    normalize_lines,
    strip_all_whitespace,
)

_RETURN_EXPR = re.compile(r"^return\s+(.+?);?$")
_RETURN_NAME = re.compile(r"^return\s+([A-Za-z_$][\w$]*)\s*;?$")
_ASSIGNMENT = re.compile(r"^(?:const|let|var)\s+([A-Za-z_$][\w$]*)\s*=\s*(.+?);?$")


@dataclass(frozen=True)
class MatchContext:
    """Normalized views of a guess and its puzzle, shared by all strategies."""
    puzzle: BugPuzzle
    guess_lines: Tuple[str, ...]
    target_lines: Tuple[str, ...]
    changed_lines: Tuple[str, ...]

    @property
    def full_guess(self) -> str:
        return " ".join(self.guess_lines)

    @property
    def full_target(self) -> str:
        return " ".join(self.target_lines)

    @property
    def is_single_line(self) -> bool:
        return len(self.guess_lines) == 1


class FixMatch(NamedTuple):
    """Verdict plus the name of the strategy that decided it."""
    accepted: bool
    rule: Optional[str]


Strategy = Callable[[MatchContext], Optional[bool]]


def changed_lines(puzzle: BugPuzzle) -> List[str]:
    """
    Corrected lines whose text differs from the buggy line at the same index.

    Lines are compared in collapsed-whitespace form. A fixed line with no
    buggy counterpart (fixed snippet longer than the buggy one) counts as
    changed.
    """
    result = []
    for index, line in enumerate(puzzle.fixed_lines):
        fixed_line = normalize_for_comparison(line)
        if index >= len(puzzle.buggy_lines):
            result.append(fixed_line)
            continue
        if normalize_for_comparison(puzzle.buggy_lines[index]) != fixed_line:
            result.append(fixed_line)
    return result


def build_context(fix_guess: str, puzzle: BugPuzzle) -> MatchContext:
    guess_lines = tuple(
        line for line in (normalize_for_comparison(raw) for raw in normalize_lines(fix_guess))
        if line
    )
    return MatchContext(
        puzzle=puzzle,
        guess_lines=guess_lines,
        target_lines=tuple(normalize_for_comparison(line) for line in puzzle.fixed_lines),
        changed_lines=tuple(changed_lines(puzzle)),
    )


def exact_full_match(ctx: MatchContext) -> Optional[bool]:
    if ctx.guess_lines == ctx.target_lines:
        return True
    return None


def exact_full_match_ignoring_whitespace(ctx: MatchContext) -> Optional[bool]:
    if len(ctx.guess_lines) != len(ctx.target_lines):
        return None
    if all(strip_all_whitespace(guess) == strip_all_whitespace(target)
           for guess, target in zip(ctx.guess_lines, ctx.target_lines)):
        return True
    return None


def changed_lines_only_match(ctx: MatchContext) -> Optional[bool]:
    if ctx.changed_lines and ctx.guess_lines == ctx.changed_lines:
        return True
    return None


def any_changed_line_match(ctx: MatchContext) -> Optional[bool]:
    """A guess holding just the corrected line, without context, is enough."""
    changed = set(ctx.changed_lines)
    if any(line in changed for line in ctx.guess_lines):
        return True
    return None


def substring_of_target(ctx: MatchContext) -> Optional[bool]:
    if ctx.full_guess in ctx.full_target:
        return True
    return None


def substring_ignoring_whitespace(ctx: MatchContext) -> Optional[bool]:
    guess = strip_all_whitespace(ctx.full_guess)
    target = strip_all_whitespace(ctx.full_target)
    if guess == target or guess in target or target in guess:
        return True
    return None


def single_line_in_target(ctx: MatchContext) -> Optional[bool]:
    if ctx.is_single_line and ctx.guess_lines[0] in ctx.full_target:
        return True
    return None


def declared_valid_fix(ctx: MatchContext) -> Optional[bool]:
    if not ctx.puzzle.valid_fixes:
        return None

    valid = {strip_all_whitespace(fix) for fix in ctx.puzzle.valid_fixes}
    if any(strip_all_whitespace(line) in valid for line in ctx.guess_lines):
        return True
    if strip_all_whitespace(ctx.full_guess) in valid:
        return True
    return None


def _returned_expression(ctx: MatchContext) -> Optional[str]:
    for line in ctx.target_lines:
        match = _RETURN_EXPR.match(line)
        if match:
            return strip_all_whitespace(match.group(1))
    return None


def _assignments_of(expression: str, puzzle: BugPuzzle) -> Dict[str, str]:
    """Variables the buggy snippet assigns from `expression`, mapped to the stripped assignment line."""
    assignments = {}
    for raw in puzzle.buggy_lines:
        line = normalize_for_comparison(raw)
        match = _ASSIGNMENT.match(line)
        if match and strip_all_whitespace(match.group(2)) == expression:
            assignments.setdefault(match.group(1), strip_all_whitespace(line))
    return assignments


def variable_indirection(ctx: MatchContext) -> Optional[bool]:
    """
    Accept `return name;` when `name` holds the value the fix returns.

    The guess must also define the variable: returning it without the
    assignment line is rejected outright rather than passed on to later
    strategies.
    """
    expression = _returned_expression(ctx)
    if not expression:
        return None

    assignments = _assignments_of(expression, ctx.puzzle)
    if not assignments:
        return None

    full_guess = strip_all_whitespace(ctx.full_guess)
    for line in ctx.guess_lines:
        match = _RETURN_NAME.match(line)
        if match and match.group(1) in assignments:
            return assignments[match.group(1)] in full_guess
    return None


def bug_line_fallback(ctx: MatchContext) -> Optional[bool]:
    index = max(0, ctx.puzzle.bug_line_number - 1)
    if (ctx.is_single_line and index < len(ctx.target_lines)
            and ctx.guess_lines[0] == ctx.target_lines[index]):
        return True
    return None


FIX_MATCH_STRATEGIES: Tuple[Tuple[str, Strategy], ...] = (
    ('exact_full_match', exact_full_match),
    ('exact_full_match_ignoring_whitespace', exact_full_match_ignoring_whitespace),
    ('changed_lines_only_match', changed_lines_only_match),
    ('any_changed_line_match', any_changed_line_match),
    ('substring_of_target', substring_of_target),
    ('substring_ignoring_whitespace', substring_ignoring_whitespace),
    ('single_line_in_target', single_line_in_target),
    ('declared_valid_fix', declared_valid_fix),
    ('variable_indirection', variable_indirection),
    ('bug_line_fallback', bug_line_fallback),
)


def match_fix(fix_guess: str, puzzle: BugPuzzle) -> FixMatch:
    """
    Run the strategy chain against a guess.

    Args:
        fix_guess: Raw text from the fix input, one or more lines
        puzzle: The bug puzzle being played

    Returns:
        FixMatch with the verdict and the deciding strategy name, or
        rule=None when the guess was empty or nothing matched
    """
    ctx = build_context(fix_guess, puzzle)
    if not ctx.guess_lines:
        return FixMatch(False, None)

    for name, strategy in FIX_MATCH_STRATEGIES:
        verdict = strategy(ctx)
        if verdict is not None:
            return FixMatch(verdict, name)

    return FixMatch(False, None)


def is_fix_guess_correct(fix_guess: str, puzzle: BugPuzzle) -> bool:
    return match_fix(fix_guess, puzzle).accepted


def key_fixes(puzzle: BugPuzzle) -> List[str]:
    """Trimmed corrected lines to reveal once the game is over."""
    highlights = []
    for index, line in enumerate(puzzle.fixed_lines):
        buggy_line = puzzle.buggy_lines[index] if index < len(puzzle.buggy_lines) else None
        if not buggy_line or normalize_line(buggy_line) != normalize_line(line):
            trimmed = line.strip()
            if trimmed:
                highlights.append(trimmed)
    return highlights
