"""Query rewriting: turn the current message (and conversation) into a standalone search query."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from loguru import logger

from config import RephraserSettings
from models.schemas import ConversationTurn, RephraseMode, RephraseResult
from rag.client import create_client
from rag.errors import RephraserError
from rag.rephraser import TraceHook, rephrase
from rag.tag_parser import split_result_block
from rag.tokenizer import TokenCounter, tiktoken_counter


class QueryRewriter:
    """Rewrites the user's message into a standalone search query for retrieval."""

    def __init__(
        self,
        settings: RephraserSettings | None = None,
        client: Any | None = None,
        count_tokens: TokenCounter | None = None,
        on_trace: TraceHook | None = None,
    ) -> None:
        self.settings = settings or RephraserSettings.from_env()
        logger.info("Initialising QueryRewriter (model={})", self.settings.model)
        self._client = client if client is not None else create_client(self.settings)
        self._count_tokens = count_tokens or tiktoken_counter(self.settings.token_encoding)
        self._on_trace = on_trace
        logger.info("QueryRewriter ready")

    async def rephrase(
        self,
        user_input: str,
        history: Sequence[ConversationTurn | Mapping],
        system_prompt: str = "",
        mode: RephraseMode | str | None = None,
    ) -> str:
        """Return the rephrased block, or *user_input* if the model could not improve it.

        Errors from the completion call or a malformed reply propagate.
        """
        return await rephrase(
            self._client,
            self.settings.model,
            user_input,
            system_prompt,
            mode if mode is not None else self.settings.mode,
            history,
            self.settings.max_turns,
            self.settings.max_history_tokens,
            count_tokens=self._count_tokens,
            on_trace=self._on_trace,
        )

    async def rephrase_structured(
        self,
        user_input: str,
        history: Sequence[ConversationTurn | Mapping],
        system_prompt: str = "",
        mode: RephraseMode | str | None = None,
    ) -> RephraseResult:
        """Like ``rephrase`` but split into question and chunks."""
        block = await self.rephrase(user_input, history, system_prompt, mode)
        return split_result_block(block, user_input)

    async def rewrite(
        self,
        user_input: str,
        history: Sequence[ConversationTurn | Mapping],
        system_prompt: str = "",
        mode: RephraseMode | str | None = None,
    ) -> str:
        """Return a standalone search query. On failure, returns the original query."""
        if not user_input or not user_input.strip():
            return user_input
        try:
            return await self.rephrase(user_input, history, system_prompt, mode)
        except RephraserError as exc:
            logger.warning("Query rewrite failed, using original: {}", exc)
            return user_input.strip()
