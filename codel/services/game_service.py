"""
Game Service

Holds active game sessions and applies session transitions to them.
"""

import uuid
from dataclasses import asdict
from typing import Callable, Dict, List, Optional, Tuple

from ..config.game_settings import MAX_TRIES
from ..models.game import GameMode, GameState
from ..models.puzzle import BugPuzzle, CompletionPuzzle
from . import session
from .catalog import PuzzleCatalog
from .fix_matcher import key_fixes
from .session import SessionState


class GameService:
    """
    Core game service managing multiple game sessions.

    This class handles:
    - Game session management with unique game IDs
    - Guess validation and evaluation via the session transitions
    - Game state views that keep the answer hidden until the game is over
    """

    def __init__(self, catalog: PuzzleCatalog, max_tries: int = MAX_TRIES):
        self.catalog = catalog
        self.max_tries = max_tries
        self.games: Dict[str, SessionState] = {}  # Store active games by game_id

    def create_new_game(self, game_mode: str = "bug", level: int = 0) -> str:
        """
        Creates a new game session.

        Args:
            game_mode: "bug" or "complete"
            level: 0-based index into the mode's level list

        Returns:
            str: Unique game ID for this session

        Raises:
            ValueError: If game_mode is not a known mode or has no levels
        """
        mode = GameMode(game_mode)
        if not self.catalog.levels(mode):
            raise ValueError(f"No levels available for mode {mode.value}")

        game_id = str(uuid.uuid4())
        self.games[game_id] = session.select_mode(self.catalog, mode, level, self.max_tries)
        return game_id

    def get_session(self, game_id: str) -> Optional[SessionState]:
        return self.games.get(game_id)

    def get_game_state(self, game_id: str) -> Optional[GameState]:
        """
        Returns the current game state for a session (without revealing the answer).

        Args:
            game_id: Unique game identifier

        Returns:
            GameState object or None if game not found
        """
        state = self.games.get(game_id)
        if state is None or state.puzzle is None:
            return None

        answer = None
        if state.game_over:
            answer = self._answer_payload(state.puzzle)

        return GameState(
            game_id=game_id,
            game_mode=state.mode.value,
            status=state.status.value,
            level=state.level + 1,
            total_levels=len(state.levels),
            puzzle=self._puzzle_payload(state.puzzle),
            max_tries=state.max_tries,
            tries_left=state.tries_left,
            game_over=state.game_over,
            won=state.won,
            can_advance=state.can_advance,
            all_levels_complete=state.all_levels_complete,
            hints=list(state.revealed_hints),
            hints_available=len(state.available_hints),
            guesses=[asdict(guess) for guess in state.bug_guesses]
            if state.mode is GameMode.BUG else list(state.completion_guesses),
            feedback=[[item.to_dict() for item in row] for row in state.feedback],
            answer=answer,
        )

    def is_valid_guess(self, game_id: str, line=None, fix: Optional[str] = None,
                       code: Optional[str] = None) -> Tuple[bool, str]:
        """
        Validates a submission for a specific game session.

        Returns:
            Tuple of (is_valid, error_message)
        """
        state = self.games.get(game_id)
        if state is None:
            return False, "Game not found"

        error = session.validate_submission(state, line=line, fix=fix, code=code)
        if error:
            return False, error
        return True, ""

    def make_guess(self, game_id: str, line=None, fix: Optional[str] = None,
                   code: Optional[str] = None) -> Optional[GameState]:
        """
        Processes a guess and updates game state.

        Returns:
            Updated GameState or None if the game is unknown or the guess invalid
        """
        is_valid, _ = self.is_valid_guess(game_id, line=line, fix=fix, code=code)
        if not is_valid:
            return None

        return self._apply(game_id, lambda state: session.submit_guess(
            state, line=line, fix=fix, code=code))

    def reveal_hint(self, game_id: str) -> Optional[GameState]:
        return self._apply(game_id, session.reveal_hint)

    def reset_hints(self, game_id: str) -> Optional[GameState]:
        return self._apply(game_id, session.reset_hints)

    def retry(self, game_id: str) -> Optional[GameState]:
        return self._apply(game_id, session.retry)

    def advance_level(self, game_id: str) -> Optional[GameState]:
        """
        Moves a won bug game to the next level.

        Returns:
            Updated GameState, or the unchanged state when advancing is not
            allowed (not won yet, or already on the last level)
        """
        return self._apply(game_id, session.advance_level)

    def delete_game(self, game_id: str) -> bool:
        """
        Removes a game session from memory (back to home).

        Returns:
            bool: True if game was deleted, False if not found
        """
        if game_id in self.games:
            del self.games[game_id]
            return True
        return False

    def get_level_summaries(self, game_mode: str = "bug") -> List[Dict]:
        """Titles and difficulties of a mode's levels, in play order."""
        levels = self.catalog.levels(GameMode(game_mode))
        return [
            {
                "level": index + 1,
                "id": puzzle.id,
                "title": puzzle.title,
                "language": puzzle.language,
                "difficulty": puzzle.difficulty.value,
            }
            for index, puzzle in enumerate(levels)
        ]

    def _apply(self, game_id: str,
               transition: Callable[[SessionState], SessionState]) -> Optional[GameState]:
        state = self.games.get(game_id)
        if state is None:
            return None
        self.games[game_id] = transition(state)
        return self.get_game_state(game_id)

    @staticmethod
    def _puzzle_payload(puzzle) -> Dict:
        payload = {
            "id": puzzle.id,
            "title": puzzle.title,
            "language": puzzle.language,
            "difficulty": puzzle.difficulty.value,
        }
        if isinstance(puzzle, BugPuzzle):
            payload.update({
                "buggy_lines": list(puzzle.buggy_lines),
                "line_count": len(puzzle.buggy_lines),
                "goal": puzzle.goal,
            })
        elif isinstance(puzzle, CompletionPuzzle):
            payload.update({
                "description": puzzle.description,
                "tags": list(puzzle.tags),
            })
        return payload

    @staticmethod
    def _answer_payload(puzzle) -> Dict:
        if isinstance(puzzle, BugPuzzle):
            return {
                "bug_line_number": puzzle.bug_line_number,
                "explanation": puzzle.explanation,
                "fixed_lines": list(puzzle.fixed_lines),
                "key_fixes": key_fixes(puzzle),
            }
        return {"lines": list(puzzle.lines)}


# Global service instance
_game_service = None


def get_game_service() -> Optional[GameService]:
    """Get the global game service instance."""
    return _game_service


def initialize_game_service(catalog: Optional[PuzzleCatalog] = None,
                            max_tries: int = MAX_TRIES) -> GameService:
    """Initialize the global game service instance."""
    global _game_service
    _game_service = GameService(catalog or PuzzleCatalog.load(), max_tries)
    return _game_service
