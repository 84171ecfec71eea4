"""Shared test fixtures for fix-locator."""

from pathlib import Path

import pytest

from fix_locator.adapters.storage import InMemoryStore
from fix_locator.core.preferences import RepoPreferences

# Get the fixtures directory
FIXTURES_DIR = Path(__file__).parent / "fixtures"
SOURCES_DIR = FIXTURES_DIR / "sources"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def hero_source() -> str:
    """Load a component whose button matches the original markup exactly."""
    return (SOURCES_DIR / "Hero.tsx").read_text()


@pytest.fixture
def commented_hero_source() -> str:
    """Load a component with the anchor text in both a comment and real markup."""
    return (SOURCES_DIR / "CommentedHero.tsx").read_text()


@pytest.fixture
def card_source() -> str:
    """Load a component with a multi-line element and no text."""
    return (SOURCES_DIR / "Card.tsx").read_text()


@pytest.fixture
def avatar_source() -> str:
    """Load a fragment with a self-closing image tag."""
    return (SOURCES_DIR / "Avatar.tsx").read_text()


@pytest.fixture
def button_html() -> str:
    """Return the original HTML of a button reported by the scanner."""
    return '<button class="btn-primary">Click Me</button>'


@pytest.fixture
def store() -> InMemoryStore:
    """Create an empty in-memory key-value store."""
    return InMemoryStore()


@pytest.fixture
def preferences(store: InMemoryStore) -> RepoPreferences:
    """Create preferences backed by the in-memory store."""
    return RepoPreferences(store)
