"""
Line Diff Scorer

Wordle-style evaluation at line granularity. Lines are compared verbatim:
completion mode rewards exact reproduction.
"""

from typing import List, Optional, Sequence

from ..models.game import LineFeedback, LineStatus


def score_guess(guess_lines: Sequence[str], target_lines: Sequence[str]) -> List[LineFeedback]:
    """
    Score guessed lines against the target.

    Args:
        guess_lines: Normalized lines of the player's guess
        target_lines: Canonical lines of the puzzle

    Returns:
        One LineFeedback per guessed line: CORRECT for the same text at the
        same index, PRESENT for the same text at an index no other guess line
        has claimed, ABSENT otherwise
    """
    used = [False] * len(target_lines)
    statuses: List[Optional[LineStatus]] = []

    # First pass: exact position matches
    for index, line in enumerate(guess_lines):
        if index < len(target_lines) and line == target_lines[index]:
            used[index] = True
            statuses.append(LineStatus.CORRECT)
        else:
            statuses.append(None)

    # Second pass: first unused occurrence elsewhere in the target
    for index, line in enumerate(guess_lines):
        if statuses[index] is not None:
            continue
        statuses[index] = LineStatus.ABSENT
        for target_index, target_line in enumerate(target_lines):
            if not used[target_index] and target_line == line:
                used[target_index] = True
                statuses[index] = LineStatus.PRESENT
                break

    return [LineFeedback(line, status) for line, status in zip(guess_lines, statuses)]


def is_all_correct(feedback: Sequence[LineFeedback]) -> bool:
    return bool(feedback) and all(item.status is LineStatus.CORRECT for item in feedback)
