"""
Puzzle Data Models

Immutable records for the two puzzle types shipped with the game.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class Difficulty(Enum):
    """Puzzle difficulty, ranked for level sequencing."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def rank(self) -> int:
        return _DIFFICULTY_RANK[self]


_DIFFICULTY_RANK = {
    Difficulty.EASY: 0,
    Difficulty.MEDIUM: 1,
    Difficulty.HARD: 2,
}


@dataclass(frozen=True)
class BugPuzzle:
    """A snippet with one defective line and its corrected version."""
    id: int
    title: str
    language: str
    difficulty: Difficulty
    hint: str
    buggy_lines: Tuple[str, ...]
    bug_line_number: int  # 1-based
    fixed_lines: Tuple[str, ...]
    explanation: str
    hints: Tuple[str, ...] = ()
    goal: Optional[str] = None
    valid_fixes: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BugPuzzle":
        """
        Build a puzzle from a JSON record.

        Accepts both the snake_case keys used in this package and the
        camelCase keys used by the browser client's data files.

        Raises:
            ValueError: If a required field is missing or the bug line
                number is out of range
        """
        def pick(*names, default=None):
            for name in names:
                if name in data:
                    return data[name]
            return default

        required = {
            'id': pick('id'),
            'title': pick('title'),
            'language': pick('language'),
            'difficulty': pick('difficulty'),
            'hint': pick('hint'),
            'buggy_lines': pick('buggy_lines', 'buggyLines'),
            'bug_line_number': pick('bug_line_number', 'bugLineNumber'),
            'fixed_lines': pick('fixed_lines', 'fixedLines'),
            'explanation': pick('explanation'),
        }
        missing = [name for name, value in required.items() if value is None]
        if missing:
            raise ValueError(f"Bug puzzle {data.get('id')!r} is missing fields: {missing}")

        buggy_lines = tuple(required['buggy_lines'])
        bug_line_number = int(required['bug_line_number'])
        if not 1 <= bug_line_number <= len(buggy_lines):
            raise ValueError(
                f"Bug puzzle {required['id']!r} has bug line {bug_line_number} "
                f"outside 1..{len(buggy_lines)}"
            )

        return cls(
            id=int(required['id']),
            title=required['title'],
            language=required['language'],
            difficulty=Difficulty(required['difficulty']),
            hint=required['hint'],
            buggy_lines=buggy_lines,
            bug_line_number=bug_line_number,
            fixed_lines=tuple(required['fixed_lines']),
            explanation=required['explanation'],
            hints=tuple(pick('hints', default=()) or ()),
            goal=pick('goal'),
            valid_fixes=tuple(pick('valid_fixes', 'validFixes', default=()) or ()),
        )

    def available_hints(self) -> Tuple[str, ...]:
        """Declared hints, or a three-step fallback built from the other fields."""
        if self.hints:
            return self.hints
        return (
            self.hint,
            f"Look closely at line {self.bug_line_number}.",
            self.explanation,
        )


@dataclass(frozen=True)
class CompletionPuzzle:
    """A target snippet the player must reproduce verbatim."""
    id: int
    title: str
    language: str
    difficulty: Difficulty
    hint: str
    lines: Tuple[str, ...]
    description: Optional[str] = None
    tags: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CompletionPuzzle":
        missing = [name for name in ('id', 'title', 'language', 'difficulty', 'hint', 'lines')
                   if data.get(name) is None]
        if missing:
            raise ValueError(f"Completion puzzle {data.get('id')!r} is missing fields: {missing}")

        meta = data.get('meta') or {}
        return cls(
            id=int(data['id']),
            title=data['title'],
            language=data['language'],
            difficulty=Difficulty(data['difficulty']),
            hint=data['hint'],
            lines=tuple(data['lines']),
            description=data.get('description', meta.get('description')),
            tags=tuple(data.get('tags', meta.get('tags')) or ()),
        )

    def available_hints(self) -> Tuple[str, ...]:
        return (self.hint,)
