"""
Configuration Package

Contains all configuration-related files and settings.

This package separates two types of configuration:
- app_config.py: Flask application configuration (environment-based)
- game_settings.py: Game rules, constants and the puzzle catalog (business logic)
"""

from .app_config import Config, DevelopmentConfig, ProductionConfig, TestingConfig, config, get_config
from .game_settings import (
    BUG_PUZZLES, COMPLETION_PUZZLES, MAX_BUG_LEVELS, MAX_TRIES,
    get_puzzle_statistics, validate_puzzle_integrity,
)

__all__ = [
    # App configuration
    'Config', 'DevelopmentConfig', 'ProductionConfig', 'TestingConfig', 'config', 'get_config',
    # Game rules
    'BUG_PUZZLES', 'COMPLETION_PUZZLES', 'MAX_BUG_LEVELS', 'MAX_TRIES',
    'validate_puzzle_integrity', 'get_puzzle_statistics'
]
