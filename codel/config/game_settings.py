"""
Game Configuration Constants Module

This module defines all game configuration constants and loads the static
puzzle catalog. All game parameters are centralized here to enable easy
modification.
"""

import json
import os
from typing import Any, Dict, Final, List, Optional, Sequence

from ..models.puzzle import BugPuzzle, CompletionPuzzle, Difficulty

# Core Game Configuration Constants
MAX_TRIES: Final[int] = 6
"""
Maximum number of guess attempts allowed per puzzle, in both game modes.
Type: Final[int] - Immutable to prevent accidental modification
"""

MAX_BUG_LEVELS: Final[int] = 15
"""
Number of bug puzzles exposed as levels, picked by difficulty then id.
"""

DIFFICULTY_ORDER: Final[List[str]] = [difficulty.value for difficulty in Difficulty]

PUZZLE_DIR: Final[str] = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'puzzles')
BUG_PUZZLE_FILE: Final[str] = 'find_the_bug.json'
COMPLETION_PUZZLE_FILE: Final[str] = 'complete_the_code.json'


def _load_records(file_name: str, puzzle_dir: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    Load a JSON array of puzzle records.

    Raises:
        FileNotFoundError: If the file is not found
        ValueError: If the JSON is malformed, not an array, or empty
    """
    json_file_path = os.path.join(puzzle_dir or PUZZLE_DIR, file_name)

    try:
        with open(json_file_path, 'r', encoding='utf-8') as f:
            records = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Puzzle file not found: {json_file_path}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {file_name}: {e}") from e

    if not isinstance(records, list):
        raise ValueError(f"{file_name} must contain an array of puzzles")

    if not records:
        raise ValueError(f"{file_name} cannot be empty")

    return records


def load_bug_puzzles(puzzle_dir: Optional[str] = None) -> List[BugPuzzle]:
    return [BugPuzzle.from_dict(record) for record in _load_records(BUG_PUZZLE_FILE, puzzle_dir)]


def load_completion_puzzles(puzzle_dir: Optional[str] = None) -> List[CompletionPuzzle]:
    return [CompletionPuzzle.from_dict(record)
            for record in _load_records(COMPLETION_PUZZLE_FILE, puzzle_dir)]


# Curated puzzle database loaded from JSON files
BUG_PUZZLES: Final[List[BugPuzzle]] = load_bug_puzzles()
COMPLETION_PUZZLES: Final[List[CompletionPuzzle]] = load_completion_puzzles()


def validate_puzzle_integrity(bug_puzzles: Sequence[BugPuzzle] = BUG_PUZZLES,
                              completion_puzzles: Sequence[CompletionPuzzle] = COMPLETION_PUZZLES) -> bool:
    """
    Validates the integrity and consistency of the puzzle database.

    This function performs validation to ensure:
    1. Uniqueness validation: No duplicate ids within a puzzle type
    2. Snippet validation: Buggy, fixed and target snippets are not empty
    3. Fix validation: Every bug puzzle changes at least one line

    Unequal buggy/fixed line counts are allowed; the evaluator copes with them.

    Returns:
        bool: True if the puzzles pass all validation checks

    Raises:
        ValueError: If any validation check fails with detailed error message
    """
    for label, puzzles in (('bug', bug_puzzles), ('completion', completion_puzzles)):
        ids = [puzzle.id for puzzle in puzzles]
        if len(ids) != len(set(ids)):
            duplicates = sorted({puzzle_id for puzzle_id in ids if ids.count(puzzle_id) > 1})
            raise ValueError(f"Duplicate {label} puzzle ids: {duplicates}")

    for puzzle in bug_puzzles:
        if not puzzle.buggy_lines or not puzzle.fixed_lines:
            raise ValueError(f"Bug puzzle {puzzle.id} has an empty snippet")
        if list(puzzle.buggy_lines) == list(puzzle.fixed_lines):
            raise ValueError(f"Bug puzzle {puzzle.id} fixed lines are identical to the buggy lines")

    for puzzle in completion_puzzles:
        if not puzzle.lines:
            raise ValueError(f"Completion puzzle {puzzle.id} has no target lines")

    return True


def get_puzzle_statistics(bug_puzzles: Sequence[BugPuzzle] = BUG_PUZZLES,
                          completion_puzzles: Sequence[CompletionPuzzle] = COMPLETION_PUZZLES) -> dict:
    """
    Summarizes the puzzle database for game balancing.

    Returns:
        dict: Statistical analysis including:
            - total_bug_puzzles / total_completion_puzzles
            - bug_by_difficulty: Count of bug puzzles per difficulty
            - languages: Count of puzzles per language across both modes
            - avg_target_lines: Average completion target length
    """
    bug_by_difficulty = {difficulty: 0 for difficulty in DIFFICULTY_ORDER}
    languages: Dict[str, int] = {}

    for puzzle in bug_puzzles:
        bug_by_difficulty[puzzle.difficulty.value] += 1
        languages[puzzle.language] = languages.get(puzzle.language, 0) + 1

    for puzzle in completion_puzzles:
        languages[puzzle.language] = languages.get(puzzle.language, 0) + 1

    avg_target_lines = 0.0
    if completion_puzzles:
        avg_target_lines = round(
            sum(len(puzzle.lines) for puzzle in completion_puzzles) / len(completion_puzzles), 2
        )

    return {
        "total_bug_puzzles": len(bug_puzzles),
        "total_completion_puzzles": len(completion_puzzles),
        "bug_by_difficulty": bug_by_difficulty,
        "languages": languages,
        "avg_target_lines": avg_target_lines,
    }


if __name__ == "__main__":

    try:
        validate_puzzle_integrity()
        print(" Puzzle validation passed")

        stats = get_puzzle_statistics()
        print(f" Puzzle statistics: {stats}")

        print(" All configuration validation checks passed")
    except ValueError as config_error:
        print(f" Configuration validation failed: {config_error}")
        exit(1)
