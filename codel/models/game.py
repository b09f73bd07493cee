"""
Game Data Models

Contains all game-related data structures and enums.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class GameMode(Enum):
    """The two game variants."""
    BUG = "bug"
    COMPLETE = "complete"


class GameStatus(Enum):
    """Per-level progress of a session."""
    IN_PROGRESS = "in_progress"
    WON = "won"
    EXHAUSTED = "exhausted"


class LineStatus(Enum):
    """Line evaluation status, Wordle style at line granularity."""
    CORRECT = "correct"
    PRESENT = "present"
    ABSENT = "absent"


@dataclass(frozen=True)
class LineFeedback:
    """Verdict for one guessed line."""
    line: str
    status: LineStatus

    def to_dict(self) -> Dict[str, str]:
        return {'line': self.line, 'status': self.status.value}


@dataclass(frozen=True)
class BugGuess:
    """One bug-mode submission."""
    line: int
    fix: str
    line_correct: bool
    fix_correct: bool

    @property
    def solved(self) -> bool:
        return self.line_correct and self.fix_correct


@dataclass
class GameState:
    """Client-facing game state representation."""
    game_id: str
    game_mode: str
    status: str
    level: int
    total_levels: int
    puzzle: Dict
    max_tries: int
    tries_left: int
    game_over: bool
    won: bool
    can_advance: bool
    all_levels_complete: bool
    hints: List[str]
    hints_available: int
    guesses: List[Dict] = field(default_factory=list)
    feedback: List[List[Dict]] = field(default_factory=list)
    answer: Optional[Dict] = None  # Only included when game is over
