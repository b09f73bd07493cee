import os
import tempfile

import pytest

# The module-level game logger reads LOG_DIR on import
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="codel-logs-"))

from codel import create_app  # noqa: E402
from codel.config import TestingConfig  # noqa: E402
from codel.models.puzzle import BugPuzzle, CompletionPuzzle, Difficulty  # noqa: E402
from codel.services import game_service as game_service_module  # noqa: E402
from codel.services.catalog import PuzzleCatalog  # noqa: E402
from codel.services.game_service import GameService  # noqa: E402


@pytest.fixture
def make_bug_puzzle():
    def factory(**overrides):
        fields = dict(
            id=1,
            title="Equality check",
            language="javascript",
            difficulty=Difficulty.EASY,
            hint="Assignment or comparison?",
            buggy_lines=("let i=0", "if(i=1)", "return i"),
            bug_line_number=2,
            fixed_lines=("let i=0", "if(i==1)", "return i"),
            explanation="= assigns, == compares.",
        )
        fields.update(overrides)
        return BugPuzzle(**fields)

    return factory


@pytest.fixture
def bug_puzzle(make_bug_puzzle):
    return make_bug_puzzle()


@pytest.fixture
def completion_puzzle():
    return CompletionPuzzle(
        id=1,
        title="Double",
        language="javascript",
        difficulty=Difficulty.EASY,
        hint="Multiply by two.",
        lines=("function f(x){", "return x*2;", "}"),
    )


@pytest.fixture
def catalog(make_bug_puzzle, completion_puzzle):
    bug_puzzles = [
        make_bug_puzzle(id=3, difficulty=Difficulty.HARD, title="Third"),
        make_bug_puzzle(id=1, title="First"),
        make_bug_puzzle(id=2, difficulty=Difficulty.MEDIUM, title="Second"),
    ]
    return PuzzleCatalog(bug_puzzles, [completion_puzzle], max_bug_levels=15)


@pytest.fixture
def service(catalog):
    return GameService(catalog, max_tries=6)


@pytest.fixture
def app_instance(service, monkeypatch):
    monkeypatch.setattr(game_service_module, "_game_service", service)
    app = create_app(TestingConfig)
    return app


@pytest.fixture
def client(app_instance):
    return app_instance.test_client()
