"""
Puzzle Catalog

Read-only view of the puzzle records with the level lists computed once.
"""

from typing import List, Optional, Sequence, Tuple, TypeVar, Union

from ..config.game_settings import (
    BUG_PUZZLES, COMPLETION_PUZZLES, MAX_BUG_LEVELS,
    load_bug_puzzles, load_completion_puzzles, validate_puzzle_integrity,
)
from ..models.game import GameMode
from ..models.puzzle import BugPuzzle, CompletionPuzzle

P = TypeVar('P', BugPuzzle, CompletionPuzzle)


def order_levels(puzzles: Sequence[P], limit: Optional[int] = None) -> Tuple[P, ...]:
    """Sort by difficulty rank, then id, and keep the first `limit` entries."""
    ordered = sorted(puzzles, key=lambda puzzle: (puzzle.difficulty.rank, puzzle.id))
    if limit is not None:
        ordered = ordered[:max(0, limit)]
    return tuple(ordered)


class PuzzleCatalog:
    """
    Level lists for both game modes.

    Bug levels are capped at `max_bug_levels`; completion levels are not.
    """

    def __init__(self,
                 bug_puzzles: Sequence[BugPuzzle],
                 completion_puzzles: Sequence[CompletionPuzzle],
                 max_bug_levels: int = MAX_BUG_LEVELS):
        self.bug_levels = order_levels(bug_puzzles, max_bug_levels)
        self.completion_levels = order_levels(completion_puzzles)

    @classmethod
    def load(cls, puzzle_dir: Optional[str] = None,
             max_bug_levels: int = MAX_BUG_LEVELS) -> "PuzzleCatalog":
        """
        Build a catalog from the bundled puzzles or from another directory.

        Raises:
            FileNotFoundError: If a puzzle file is missing
            ValueError: If the puzzle data fails validation
        """
        if puzzle_dir is None:
            bug_puzzles: List[BugPuzzle] = BUG_PUZZLES
            completion_puzzles: List[CompletionPuzzle] = COMPLETION_PUZZLES
        else:
            bug_puzzles = load_bug_puzzles(puzzle_dir)
            completion_puzzles = load_completion_puzzles(puzzle_dir)

        validate_puzzle_integrity(bug_puzzles, completion_puzzles)
        return cls(bug_puzzles, completion_puzzles, max_bug_levels)

    def levels(self, mode: GameMode) -> Tuple[Union[BugPuzzle, CompletionPuzzle], ...]:
        if mode is GameMode.BUG:
            return self.bug_levels
        return self.completion_levels
