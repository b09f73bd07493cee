"""
Configuration Management Module

Centralized configuration management following the 12-factor app methodology.
All configuration is loaded from environment variables with sensible defaults.
"""

import os
from dotenv import load_dotenv

# Load environment variables from config.env
load_dotenv('codel/config/config.env')


class Config:
    """Base configuration class with all settings."""

    # Flask Settings
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'
    TESTING = False

    # Server Settings
    HOST = os.getenv('HOST', '127.0.0.1')
    PORT = int(os.getenv('PORT', 5000))

    # Game Settings
    MAX_TRIES = int(os.getenv('MAX_TRIES', 6))
    MAX_BUG_LEVELS = int(os.getenv('MAX_BUG_LEVELS', 15))
    PUZZLE_DIR = os.getenv('PUZZLE_DIR')  # None means the bundled puzzles

    # Logging Settings
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('LOG_DIR', 'logs')


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DEBUG = True


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def get_config(name=None):
    """
    Resolve a configuration class by name.

    Args:
        name: Key into `config`; defaults to the CODEL_ENV environment variable

    Raises:
        ValueError: If the name is not a known configuration
    """
    name = name or os.getenv('CODEL_ENV', 'default')
    if name not in config:
        raise ValueError(f"Unknown configuration: {name}")
    return config[name]
