"""Pytest configuration for the MiniLang test suite."""

import pytest

from minilang.app import create_app
from minilang.compiler import Interpreter, SemanticAnalyzer, fold_constants, parse


def execute(code, fold=True):
    """Check, optionally fold, and interpret code; return the printed lines."""
    program = parse(code)
    SemanticAnalyzer().analyze(program)
    if fold:
        fold_constants(program)
    interp = Interpreter()
    interp.run(program)
    return interp.output


@pytest.fixture
def run():
    return execute


@pytest.fixture
def client():
    app = create_app({"TESTING": True})
    return app.test_client()
