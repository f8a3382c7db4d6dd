import logging
import math

import pytest

from zest.interpreter import Interpreter

# Every test runs with the ZEST_* settings unset so that a developer's shell
# configuration cannot change lexing mode, depth limit or log level.


@pytest.fixture(autouse=True)
def _clean_zest_environment(monkeypatch):
    for var in ("ZEST_BAREWORDS", "ZEST_MAX_DEPTH", "ZEST_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture(autouse=True)
def _restore_zest_logger():
    logger = logging.getLogger("zest")
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)


@pytest.fixture
def bindings():
    """Flat base scope as a caller would supply it."""
    return {"pi": math.pi, "name": "zest", "answer": 42, "yes": True}


@pytest.fixture
def interp(bindings):
    return Interpreter(bindings)
