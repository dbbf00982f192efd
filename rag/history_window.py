"""Token-bounded rendering of recent conversation turns.

The newest turns are kept first; walking back in time stops at the first
turn that would overflow the budget, so older turns are never backfilled.
Each rendered line is counted on its own and the ``"\\n\\n"`` joiner is not
counted, so the budget is slightly soft.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from loguru import logger

from models.schemas import ConversationTurn
from rag.tokenizer import TokenCounter, tiktoken_counter

TURN_SEPARATOR = "\n\n"


def _as_turn(turn: ConversationTurn | Mapping) -> ConversationTurn:
    if isinstance(turn, ConversationTurn):
        return turn
    return ConversationTurn.model_validate(turn)


def build_history_block(
    turns: Sequence[ConversationTurn | Mapping],
    max_turns_considered: int,
    max_tokens: int,
    count_tokens: TokenCounter | None = None,
) -> str:
    """Render the most recent turns that fit into *max_tokens*.

    Args:
        turns: Conversation in chronological order.
        max_turns_considered: How many of the latest turns may be included.
        max_tokens: Token budget for the kept lines.
        count_tokens: Tokenizer; defaults to tiktoken ``cl100k_base``.

    Returns:
        Kept turns as ``**role**: content`` lines joined by a blank line,
        or ``""`` when nothing fits.
    """
    if max_turns_considered <= 0 or max_tokens <= 0 or not turns:
        return ""
    count_tokens = count_tokens or tiktoken_counter()

    candidates = [_as_turn(t).render() for t in turns[-max_turns_considered:]]

    kept: list[str] = []
    total_tokens = 0
    for line in reversed(candidates):
        line_tokens = count_tokens(line)
        if total_tokens + line_tokens > max_tokens:
            break
        kept.append(line)
        total_tokens += line_tokens
    kept.reverse()

    logger.debug(
        "History window: kept {}/{} turns ({} tokens, budget {})",
        len(kept), len(candidates), total_tokens, max_tokens,
    )
    return TURN_SEPARATOR.join(kept)
