"""
Services Package

Contains the guess-evaluation core and the service that manages sessions.
"""

from .catalog import PuzzleCatalog
from .fix_matcher import is_fix_guess_correct, match_fix
from .game_service import GameService, get_game_service, initialize_game_service
from .normalizer import normalize_for_comparison, normalize_line, normalize_lines, strip_all_whitespace
from .scoring import score_guess
from .session import SessionState

__all__ = [
    'PuzzleCatalog',
    'is_fix_guess_correct', 'match_fix',
    'GameService', 'get_game_service', 'initialize_game_service',
    'normalize_for_comparison', 'normalize_line', 'normalize_lines', 'strip_all_whitespace',
    'score_guess',
    'SessionState',
]
