"""
Pytest configuration and fixtures for bnfparse tests.
"""

import logging
import sys
import pytest
from pathlib import Path

from starlette.testclient import TestClient

# Add project root to path for all imports
project_root = str(Path(__file__).parent.parent)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from bnfparse.config import BnfParseConfig
from bnfparse.web.api.main import create_app


@pytest.fixture
def bnfparse_home(tmp_path, monkeypatch):
    """Point the bnfparse base directory at a temporary directory."""
    home = tmp_path / ".bnfparse"
    monkeypatch.setenv("BNFPARSE_HOME", str(home))
    return home


@pytest.fixture
def client():
    """Create a test client for the FastAPI app."""
    with TestClient(create_app(BnfParseConfig())) as test_client:
        yield test_client


@pytest.fixture
def sample_grammar():
    """A small arithmetic grammar using every notation feature."""
    return (
        "<expr> ::= <term> | <term> \"+\" <expr>\n"
        "<term> ::= <digit> | '(' <expr> ')'\n"
        "<digit> ::= \"0\" | \"1\" | \"2\"\n"
        "<quote> ::= \"'\" | '\"'\n"
    )


@pytest.fixture
def grammar_file(tmp_path, sample_grammar):
    """Write the sample grammar to a file."""
    path = tmp_path / "arith.bnf"
    path.write_text(sample_grammar)
    return path


@pytest.fixture(autouse=True)
def reset_bnfparse_logger():
    """Drop handlers installed by setup_bnfparse_logger() during a test."""
    yield
    logger = logging.getLogger("bnfparse")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
