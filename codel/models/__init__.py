"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import BugGuess, GameMode, GameState, GameStatus, LineFeedback, LineStatus
from .puzzle import BugPuzzle, CompletionPuzzle, Difficulty

__all__ = [
    'BugGuess', 'GameMode', 'GameState', 'GameStatus', 'LineFeedback', 'LineStatus',
    'BugPuzzle', 'CompletionPuzzle', 'Difficulty',
]
