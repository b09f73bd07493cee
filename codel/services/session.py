"""
Game Session State Machine

An explicit session state object and the pure transitions that act on it.
Every transition takes a state and returns a new one; a transition whose
precondition does not hold returns the state it was given.
"""

from dataclasses import dataclass, replace
from typing import Optional, Tuple, Union

from ..config.game_settings import MAX_TRIES
from ..models.game import BugGuess, GameMode, GameStatus, LineFeedback
from ..models.puzzle import BugPuzzle, CompletionPuzzle
from .catalog import PuzzleCatalog
from .fix_matcher import is_fix_guess_correct
from .normalizer import normalize_lines
from .scoring import is_all_correct, score_guess

Puzzle = Union[BugPuzzle, CompletionPuzzle]
LineInput = Union[int, str, None]


@dataclass(frozen=True)
class SessionState:
    """
    Everything a single player's game holds.

    The unselected state (mode is None) is what the home screen shows.
    """
    mode: Optional[GameMode] = None
    levels: Tuple[Puzzle, ...] = ()
    level: int = 0
    max_tries: int = MAX_TRIES
    bug_guesses: Tuple[BugGuess, ...] = ()
    completion_guesses: Tuple[str, ...] = ()
    feedback: Tuple[Tuple[LineFeedback, ...], ...] = ()
    hints_revealed: int = 0

    @property
    def puzzle(self) -> Optional[Puzzle]:
        if self.mode is None or not 0 <= self.level < len(self.levels):
            return None
        return self.levels[self.level]

    @property
    def tries_used(self) -> int:
        if self.mode is GameMode.BUG:
            return len(self.bug_guesses)
        return len(self.completion_guesses)

    @property
    def tries_left(self) -> int:
        return max(0, self.max_tries - self.tries_used)

    @property
    def won(self) -> bool:
        if self.mode is GameMode.BUG:
            return any(guess.solved for guess in self.bug_guesses)

        if self.mode is GameMode.COMPLETE and self.feedback:
            # A shorter guess can score all-correct on a prefix of the target
            last = self.feedback[-1]
            return is_all_correct(last) and len(last) == len(self.puzzle.lines)

        return False

    @property
    def status(self) -> Optional[GameStatus]:
        if self.mode is None:
            return None
        if self.won:
            return GameStatus.WON
        if self.tries_used >= self.max_tries:
            return GameStatus.EXHAUSTED
        return GameStatus.IN_PROGRESS

    @property
    def game_over(self) -> bool:
        return self.status in (GameStatus.WON, GameStatus.EXHAUSTED)

    @property
    def is_last_level(self) -> bool:
        return self.level >= len(self.levels) - 1

    @property
    def can_advance(self) -> bool:
        return self.mode is GameMode.BUG and self.status is GameStatus.WON and not self.is_last_level

    @property
    def all_levels_complete(self) -> bool:
        return self.mode is GameMode.BUG and self.status is GameStatus.WON and self.is_last_level

    @property
    def available_hints(self) -> Tuple[str, ...]:
        if self.puzzle is None:
            return ()
        return self.puzzle.available_hints()

    @property
    def revealed_hints(self) -> Tuple[str, ...]:
        return self.available_hints[:self.hints_revealed]


def select_mode(catalog: PuzzleCatalog, mode: GameMode, level: int = 0,
                max_tries: int = MAX_TRIES) -> SessionState:
    """
    Start a session in `mode` at `level` (0-based).

    A level outside the mode's level list falls back to the first level.
    """
    levels = catalog.levels(mode)
    if not 0 <= level < len(levels):
        level = 0
    return SessionState(mode=mode, levels=levels, level=level, max_tries=max_tries)


def parse_line_number(value: LineInput) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if not isinstance(value, str):
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def validate_submission(state: SessionState, line: LineInput = None, fix: Optional[str] = None,
                        code: Optional[str] = None) -> Optional[str]:
    """
    Check a submission against the current state.

    Returns:
        None when the submission would be recorded, otherwise a short
        reason it is blocked
    """
    if state.puzzle is None:
        return "No game in progress"

    if state.game_over:
        return "Game is already over"

    if state.mode is GameMode.BUG:
        line_number = parse_line_number(line)
        line_count = len(state.puzzle.buggy_lines)
        if line_number is None or not 1 <= line_number <= line_count:
            return f"Line number must be between 1 and {line_count}"
        if not isinstance(fix, str) or not fix.strip():
            return "Fix is required"
        return None

    if not isinstance(code, str) or not normalize_lines(code):
        return "Code is required"
    return None


def submit_guess(state: SessionState, line: LineInput = None, fix: Optional[str] = None,
                 code: Optional[str] = None) -> SessionState:
    """
    Record one attempt.

    Bug mode reads `line` and `fix`; completion mode reads `code`. Blocked
    submissions (see validate_submission) leave the state untouched.
    """
    if validate_submission(state, line=line, fix=fix, code=code) is not None:
        return state

    if state.mode is GameMode.BUG:
        puzzle = state.puzzle
        line_number = parse_line_number(line)
        guess = BugGuess(
            line=line_number,
            fix=fix,
            line_correct=line_number == puzzle.bug_line_number,
            fix_correct=is_fix_guess_correct(fix, puzzle),
        )
        return replace(state, bug_guesses=state.bug_guesses + (guess,))

    feedback = tuple(score_guess(normalize_lines(code), state.puzzle.lines))
    return replace(
        state,
        completion_guesses=state.completion_guesses + (code,),
        feedback=state.feedback + (feedback,),
    )


def _fresh_level(state: SessionState, level: int) -> SessionState:
    return replace(
        state,
        level=level,
        bug_guesses=(),
        completion_guesses=(),
        feedback=(),
        hints_revealed=0,
    )


def retry(state: SessionState) -> SessionState:
    """Start the current level over."""
    if state.mode is None:
        return state
    return _fresh_level(state, state.level)


def advance_level(state: SessionState) -> SessionState:
    """Move to the next bug level; only after a win and never past the last level."""
    if not state.can_advance:
        return state
    return _fresh_level(state, state.level + 1)


def reset(state: SessionState) -> SessionState:
    """Back to home: discard everything."""
    return SessionState()


def reveal_hint(state: SessionState) -> SessionState:
    if state.hints_revealed >= len(state.available_hints):
        return state
    return replace(state, hints_revealed=state.hints_revealed + 1)


def reset_hints(state: SessionState) -> SessionState:
    if state.hints_revealed == 0:
        return state
    return replace(state, hints_revealed=0)
