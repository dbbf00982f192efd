"""Tests for the token-bounded history window."""

from __future__ import annotations

import pytest

from models.schemas import ConversationTurn
from rag.history_window import build_history_block


def _turns(n: int) -> list[ConversationTurn]:
    return [
        ConversationTurn(role="user" if i % 2 == 0 else "assistant", content=f"message number {i}")
        for i in range(n)
    ]


def test_renders_turns_chronologically(count_words):
    turns = [
        ConversationTurn(role="user", content="a"),
        ConversationTurn(role="assistant", content="b"),
        ConversationTurn(role="user", content="c"),
    ]
    block = build_history_block(turns, 10, 1000, count_words)
    assert block == "**user**: a\n\n**assistant**: b\n\n**user**: c"


def test_accepts_role_content_mappings(count_words):
    block = build_history_block([{"role": "user", "content": "hi"}], 5, 100, count_words)
    assert block == "**user**: hi"


def test_zero_turns_considered_is_empty(count_words):
    assert build_history_block(_turns(4), 0, 10_000, count_words) == ""


def test_zero_budget_is_empty():
    assert build_history_block(_turns(4), 10, 0, lambda text: 0) == ""


def test_empty_history_is_empty(count_words):
    assert build_history_block([], 10, 100, count_words) == ""


def test_only_last_n_turns_considered(count_words):
    block = build_history_block(_turns(5), 2, 1000, count_words)
    assert block == "**assistant**: message number 3\n\n**user**: message number 4"


@pytest.mark.parametrize("budget", [0, 1, 3, 4, 7, 8, 11, 12, 20, 100])
def test_kept_lines_never_exceed_budget(count_words, budget):
    block = build_history_block(_turns(6), 6, budget, count_words)
    lines = block.split("\n\n") if block else []
    assert sum(count_words(line) for line in lines) <= budget


@pytest.mark.parametrize("budget", [4, 8, 12, 16])
def test_drops_from_oldest_end(count_words, budget):
    turns = _turns(6)
    rendered = [t.render() for t in turns]
    block = build_history_block(turns, 6, budget, count_words)
    lines = block.split("\n\n")
    # each rendered line is 4 words
    assert lines == rendered[-(budget // 4):]


def test_stops_at_first_overflow_without_backfill(count_words):
    turns = [
        ConversationTurn(role="user", content="x"),
        ConversationTurn(role="assistant", content="a very long answer that will not fit"),
        ConversationTurn(role="user", content="y"),
    ]
    # "**user**: x" and "**user**: y" cost 2 each; the middle line costs 9
    block = build_history_block(turns, 3, 5, count_words)
    assert block == "**user**: y"


def test_joiner_is_not_counted():
    turns = [ConversationTurn(role="user", content="a"), ConversationTurn(role="user", content="b")]
    block = build_history_block(turns, 2, 2 * len("**user**: a"), len)
    assert block == "**user**: a\n\n**user**: b"
    assert len(block) > 2 * len("**user**: a")
