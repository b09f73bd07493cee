"""
Game Controller

Handles all game-related HTTP endpoints.
"""

from flask import Blueprint, request, jsonify
from dataclasses import asdict
from ..models.game import GameMode
from ..services.game_service import get_game_service
from ..utils.game_logger import game_logger

game_bp = Blueprint('game', __name__)

GAME_MODES = [mode.value for mode in GameMode]


def _service_unavailable():
    return jsonify({
        'success': False,
        'error': 'Game service unavailable'
    }), 500


def _game_not_found(action, game_id):
    error_response = {
        'success': False,
        'error': 'Game not found'
    }
    game_logger.log_server_response(request, action, False, error_response, game_id)
    return jsonify(error_response), 404


def _log_game_over(game_id, state, **kwargs):
    if not state.game_over:
        return
    event = 'game_won' if state.won else 'game_lost'
    game_logger.log_game_event(
        game_id, event, request.remote_addr,
        game_mode=state.game_mode, level=state.level,
        tries_used=state.max_tries - state.tries_left, **kwargs
    )


@game_bp.route('/new_game', methods=['POST'])
def new_game():
    """Create a new game session."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        data = request.get_json(silent=True) or {}
        game_mode = data.get('game_mode', 'bug')
        level = data.get('level', 1)

        # Validate game mode
        if game_mode not in GAME_MODES:
            return jsonify({
                'success': False,
                'error': 'Invalid game mode. Must be "bug" or "complete"'
            }), 400

        if isinstance(level, bool) or not isinstance(level, int):
            return jsonify({
                'success': False,
                'error': 'Level must be an integer'
            }), 400

        game_logger.log_user_action(request, 'new_game', game_mode=game_mode, level=level)

        # Levels are 1-based on the wire
        game_id = game_service.create_new_game(game_mode, level - 1)
        state = game_service.get_game_state(game_id)

        response_data = {
            'success': True,
            'game_id': game_id,
            'state': asdict(state)
        }

        game_logger.log_server_response(
            request, 'new_game', True, response_data, game_id,
            level=state.level, max_tries=state.max_tries
        )

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'new_game')

        error_response = {
            'success': False,
            'error': str(e)
        }

        game_logger.log_server_response(request, 'new_game', False, error_response)
        return jsonify(error_response), 400


@game_bp.route('/game/<game_id>/state', methods=['GET'])
def get_state(game_id):
    """Get current game state."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        game_logger.log_user_action(request, 'get_state', game_id)

        state = game_service.get_game_state(game_id)
        if state is None:
            return _game_not_found('get_state', game_id)

        response_data = {
            'success': True,
            'state': asdict(state)
        }

        game_logger.log_server_response(
            request, 'get_state', True, response_data, game_id,
            status=state.status, game_over=state.game_over
        )

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'get_state', game_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'get_state', False, error_response, game_id)
        return jsonify(error_response), 500


@game_bp.route('/game/<game_id>/guess', methods=['POST'])
def make_guess(game_id):
    """
    Submit a guess for validation and evaluation.

    Bug mode expects {"line": ..., "fix": ...}; completion mode expects
    {"code": ...}.
    """
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        if game_service.get_session(game_id) is None:
            return _game_not_found('submit_guess', game_id)

        data = request.get_json(silent=True) or {}
        line = data.get('line')
        fix = data.get('fix')
        code = data.get('code')

        game_logger.log_user_action(
            request, 'submit_guess', game_id,
            line=line, fix_length=len(fix) if isinstance(fix, str) else None,
            code_length=len(code) if isinstance(code, str) else None
        )

        # Validate guess first
        is_valid, error = game_service.is_valid_guess(game_id, line=line, fix=fix, code=code)
        if not is_valid:
            error_response = {
                'success': False,
                'error': error
            }
            game_logger.log_server_response(
                request, 'submit_guess', False, error_response, game_id,
                validation_error=error
            )
            return jsonify(error_response), 400

        state = game_service.make_guess(game_id, line=line, fix=fix, code=code)
        if state is None:
            error_response = {
                'success': False,
                'error': 'Failed to process guess'
            }
            game_logger.log_server_response(request, 'submit_guess', False, error_response, game_id)
            return jsonify(error_response), 500

        response_data = {
            'success': True,
            'state': asdict(state)
        }

        game_logger.log_server_response(
            request, 'submit_guess', True, response_data, game_id,
            tries_left=state.tries_left, game_over=state.game_over
        )
        _log_game_over(game_id, state)

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'submit_guess', game_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'submit_guess', False, error_response, game_id)
        return jsonify(error_response), 500


def _run_transition(game_id, action, transition):
    """Shared body of the routes that apply one session transition."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        game_logger.log_user_action(request, action, game_id)

        before = game_service.get_game_state(game_id)
        state = getattr(game_service, transition)(game_id)
        if state is None:
            return _game_not_found(action, game_id)

        response_data = {
            'success': True,
            'state': asdict(state)
        }

        game_logger.log_server_response(request, action, True, response_data, game_id)

        if action == 'reveal_hint' and len(state.hints) > len(before.hints):
            game_logger.log_game_event(game_id, 'hint_revealed', request.remote_addr,
                                       hints_shown=len(state.hints))
        elif action == 'advance_level' and state.level != before.level:
            game_logger.log_game_event(game_id, 'level_advanced', request.remote_addr,
                                       level=state.level)

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, action, game_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, action, False, error_response, game_id)
        return jsonify(error_response), 500


@game_bp.route('/game/<game_id>/hint', methods=['POST'])
def reveal_hint(game_id):
    """Reveal the next hint."""
    return _run_transition(game_id, 'reveal_hint', 'reveal_hint')


@game_bp.route('/game/<game_id>/hint/reset', methods=['POST'])
def reset_hints(game_id):
    """Hide all revealed hints."""
    return _run_transition(game_id, 'reset_hints', 'reset_hints')


@game_bp.route('/game/<game_id>/retry', methods=['POST'])
def retry(game_id):
    """Start the current level over."""
    return _run_transition(game_id, 'retry', 'retry')


@game_bp.route('/game/<game_id>/advance', methods=['POST'])
def advance_level(game_id):
    """Move to the next level after a win."""
    return _run_transition(game_id, 'advance_level', 'advance_level')


@game_bp.route('/game/<game_id>', methods=['DELETE'])
def delete_game(game_id):
    """Delete a game session (back to home)."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        game_logger.log_user_action(request, 'delete_game', game_id)

        success = game_service.delete_game(game_id)

        response_data = {
            'success': success
        }

        game_logger.log_server_response(request, 'delete_game', success, response_data, game_id)

        if not success:
            return jsonify(response_data), 404

        game_logger.log_game_event(game_id, 'game_deleted', request.remote_addr)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'delete_game', game_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'delete_game', False, error_response, game_id)
        return jsonify(error_response), 500


@game_bp.route('/levels', methods=['GET'])
def list_levels():
    """List the levels of a game mode in play order."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        game_mode = request.args.get('game_mode', 'bug')
        if game_mode not in GAME_MODES:
            return jsonify({
                'success': False,
                'error': 'Invalid game mode. Must be "bug" or "complete"'
            }), 400

        return jsonify({
            'success': True,
            'game_mode': game_mode,
            'levels': game_service.get_level_summaries(game_mode)
        })

    except Exception as e:
        game_logger.log_error(request, e, 'list_levels')
        return jsonify({'success': False, 'error': str(e)}), 500


@game_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    try:
        game_service = get_game_service()

        game_logger.log_user_action(request, 'health_check')

        response_data = {
            'status': 'healthy',
            'active_games': len(game_service.games) if game_service else 0,
            'bug_levels': len(game_service.catalog.bug_levels) if game_service else 0,
            'completion_levels': len(game_service.catalog.completion_levels) if game_service else 0,
            'log_stats': game_logger.get_log_stats()
        }

        game_logger.log_server_response(request, 'health_check', True, response_data)

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'health_check')
        error_response = {
            'status': 'error',
            'error': str(e)
        }
        game_logger.log_server_response(request, 'health_check', False, error_response)
        return jsonify(error_response), 500
