"""
CodeL Game Server - Main Entry Point

This is the main entry point for the CodeL game server.
It loads the puzzle catalog, initializes the game service and starts the
Flask application.
"""

from codel import create_app
from codel.config import get_config, get_puzzle_statistics
from codel.services.catalog import PuzzleCatalog
from codel.services.game_service import initialize_game_service
from codel.utils.game_logger import game_logger


def main():
    """Main function to initialize services and start the server."""
    try:
        app_config = get_config()
        print("Initializing services...")

        catalog = PuzzleCatalog.load(app_config.PUZZLE_DIR, app_config.MAX_BUG_LEVELS)
        print(f"✓ Puzzle catalog loaded: {len(catalog.bug_levels)} bug levels, "
              f"{len(catalog.completion_levels)} completion levels")

        game_service = initialize_game_service(catalog, app_config.MAX_TRIES)
        if game_service:
            print("✓ Game service initialized successfully")
        else:
            print("✗ Failed to initialize game service")

        print("Creating Flask application...")
        app = create_app(app_config)
        print("✓ Flask application created successfully")

        game_logger.logger.info(f"CodeL Server Starting - {get_puzzle_statistics()}")

        print(f"\nStarting CodeL Game Server on {app_config.HOST}:{app_config.PORT}")
        print(f"Debug mode: {app_config.DEBUG}")
        print("=" * 50)

        app.run(host=app_config.HOST, port=app_config.PORT, debug=app_config.DEBUG)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("CodeL Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
