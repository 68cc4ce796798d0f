"""
Pytest configuration and shared fixtures for all blocklyvm tests.

Every test gets a fresh headless world, a recording HUD and an interpreter
wired to both, so no program state leaks between tests.
"""

import sys
import pytest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
from blocklyvm import Interpreter, ProgramSession, RecordingHud, RecordingWorld
from blocklyvm.frontend.condition import ConditionEvaluator, get_parser


# =============================================================================
# Session-scoped fixtures (shared across all tests)
# =============================================================================

@pytest.fixture(scope="session")
def session_conditions():
    """
    Session-scoped condition evaluator.

    The lark parser is built once (with its native cache) and is stateless,
    so sharing it between interpreters is safe.
    """
    get_parser()
    return ConditionEvaluator()


# =============================================================================
# Function-scoped fixtures (default - one per test)
# =============================================================================

@pytest.fixture
def world():
    return RecordingWorld()


@pytest.fixture
def hud():
    return RecordingHud()


@pytest.fixture
def interpreter(world, hud, session_conditions):
    """Fresh interpreter per test, acting on the test's world and HUD."""
    return Interpreter(world=world, hud=hud, conditions=session_conditions)


@pytest.fixture
def session(interpreter):
    return ProgramSession(interpreter)


# =============================================================================
# Helper fixtures
# =============================================================================

@pytest.fixture
def run(interpreter):
    """
    Run program text (one instruction per line, indentation ignored) on the
    test's interpreter and return the Outcome.
    """
    from tests.test_utils import program

    def _run(source: str):
        return interpreter.run(program(source))

    return _run


# =============================================================================
# Markers
# =============================================================================

def pytest_configure(config):
    """Register custom markers for test organization."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
