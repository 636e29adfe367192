"""
Shared pytest fixtures and configuration for Taboo tests.

This file is automatically discovered by pytest and provides fixtures
that can be used across all test files.

Fixture Organization
--------------------
- **clean_env**: Strips TABOO_* / ANTHROPIC_API_KEY so the host shell cannot leak in
- **temp_dir**: Temporary directory for file operations
- **config**: Config whose preferences file lives in temp_dir
- **make_deck**: Builds decks of any size
- **FakeTimer / fake_timer_factory**: Timer stand-in that never starts a thread
- **mock_llm_client**: Mock LLM client answering with a valid deck
"""

import json
import tempfile
from pathlib import Path
from typing import Callable, Generator, Optional
from unittest.mock import Mock

import pytest

from taboo.core.config import Config
from taboo.game.models import Deck, SessionConfig
from taboo.game.session import TabooSession
from tests.fixtures import FakeTimer, build_deck, deck_json

ENV_VARS = (
    "ANTHROPIC_API_KEY",
    "TABOO_LLM_MODEL",
    "TABOO_LLM_TEMPERATURE",
    "TABOO_USE_MOCK",
    "TABOO_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove game environment variables for every test."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


# ============================================================================
# Path and Configuration Fixtures
# ============================================================================


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory (cleaned up after test)
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def prefs_path(temp_dir: Path) -> Path:
    return temp_dir / "prefs" / "preferences.json"


@pytest.fixture
def config(temp_dir: Path, prefs_path: Path) -> Config:
    """Config with the preferences file inside temp_dir."""
    config = Config()
    config._base_path = temp_dir
    config.preferences.path = str(prefs_path)
    return config


@pytest.fixture
def config_file(temp_dir: Path, prefs_path: Path) -> Path:
    """A taboo.yaml pointing preferences at temp_dir."""
    path = temp_dir / "taboo.yaml"
    path.write_text(
        f"preferences:\n  path: {json.dumps(str(prefs_path))}\n",
        encoding="utf-8",
    )
    return path


# ============================================================================
# Deck and Session Fixtures
# ============================================================================


@pytest.fixture
def make_deck() -> Callable[..., Deck]:
    return build_deck


@pytest.fixture
def fake_timer_factory() -> Generator[type, None, None]:
    FakeTimer.instances = []
    yield FakeTimer
    FakeTimer.instances = []


@pytest.fixture
def make_session(fake_timer_factory: type) -> Callable[..., TabooSession]:
    """Build a session over a generated deck with a fake timer."""

    def _make(
        size: int,
        skip_budget: Optional[int] = None,
        time_limit: Optional[int] = None,
        **kwargs,
    ) -> TabooSession:
        return TabooSession(
            build_deck(size),
            SessionConfig(
                deck_size=size,
                skip_budget=skip_budget,
                time_limit_seconds=time_limit,
            ),
            timer_factory=fake_timer_factory,
            **kwargs,
        )

    return _make


# ============================================================================
# LLM Mock Fixtures
# ============================================================================


@pytest.fixture
def mock_llm_client() -> Mock:
    """Mock LLM client matching the LLMClient interface.

    generate_with_context answers with a valid 5-card, 3-taboo-word deck.
    """
    client = Mock()
    client.generate_with_context.return_value = deck_json(5, 3)
    client.is_available.return_value = True
    client.model_name = "mock-model"
    client.get_usage.return_value = {
        "prompt_tokens": 120,
        "completion_tokens": 480,
        "total_tokens": 600,
    }
    return client
