"""
CodeL Game Server Application Package

Server side of CodeL, a coding puzzle game inspired by Wordle: find the bug
in a snippet, or reproduce a snippet line by line. The guess-evaluation core
lives in the services package; this package wires it to a JSON HTTP API.
"""

from flask import Flask
from flask_cors import CORS
from .config import Config


def create_app(config_class=Config):
    """
    Application factory pattern for creating Flask app instances.

    Args:
        config_class: Configuration class to use

    Returns:
        Flask application instance with all extensions initialized
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Initialize extensions
    CORS(app)

    # Register blueprints
    from .controllers.game_controller import game_bp

    app.register_blueprint(game_bp, url_prefix='/api')

    return app
