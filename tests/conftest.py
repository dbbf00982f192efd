"""Shared fixtures for the rephraser tests."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest


def _word_count(text: str) -> int:
    return len(text.split())


def _make_completion(content: str | None) -> SimpleNamespace:
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


@pytest.fixture
def count_words():
    """Deterministic stand-in tokenizer: one token per whitespace-separated word."""
    return _word_count


@pytest.fixture
def make_client():
    """Factory for a fake async chat-completions client."""

    def _factory(content: str | None = None, side_effect: Exception | None = None) -> MagicMock:
        client = MagicMock()
        client.chat.completions.create = AsyncMock(
            return_value=_make_completion(content), side_effect=side_effect,
        )
        return client

    return _factory


@pytest.fixture
def history() -> list[dict]:
    return [
        {"role": "user", "content": "Show me your return options"},
        {"role": "assistant", "content": "1. Store credit 2. Refund to card"},
        {"role": "user", "content": "Tell me more about item 2"},
    ]
