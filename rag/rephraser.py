"""Rephrase the latest user turn into a self-contained retrieval query.

One completion call per invocation: the windowed history, optional system
prompt and raw user input go into a mode-specific template, and the tagged
reply is reduced to either the original input (when the model says it could
not improve it) or the trimmed ``RESULT`` block.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any

from loguru import logger

from models.schemas import ConversationTurn, RephraseMode, RephraseTrace
from rag.errors import CompletionError
from rag.history_window import build_history_block
from rag.prompts import build_prompt
from rag.tag_parser import RESULT_TAG, could_improve, extract_tag
from rag.tokenizer import TokenCounter

TEMPERATURE = 1.0
MAX_COMPLETION_TOKENS = 512

TraceHook = Callable[[RephraseTrace], None]


async def _complete(client: Any, model: str, prompt: str) -> str:
    try:
        response = await client.chat.completions.create(
            model=model,
            messages=[{"role": "system", "content": prompt}],
            temperature=TEMPERATURE,
            max_tokens=MAX_COMPLETION_TOKENS,
            stream=False,
        )
    except Exception as exc:
        raise CompletionError(f"Completion request to model '{model}' failed: {exc}") from exc

    try:
        content = response.choices[0].message.content
    except (AttributeError, IndexError, TypeError) as exc:
        raise CompletionError(f"Completion from model '{model}' has no message") from exc
    if not content:
        raise CompletionError(f"Completion from model '{model}' returned empty content")
    return content


async def rephrase(
    client: Any,
    model: str,
    user_input: str,
    system_prompt: str | None,
    mode: RephraseMode | str | None,
    history: Sequence[ConversationTurn | Mapping],
    max_turns_considered: int,
    max_tokens: int,
    *,
    count_tokens: TokenCounter | None = None,
    on_trace: TraceHook | None = None,
) -> str:
    """Rewrite *user_input* into an enriched, context-complete query.

    Args:
        client: OpenAI-compatible async client exposing ``chat.completions.create``.
        model: Model identifier passed through to the completion call.
        user_input: The user's latest message.
        system_prompt: Optional application prompt; omitted from the template when empty.
        mode: ``"rephrase"`` for a question only, anything else for question plus 5 chunks.
        history: Prior conversation turns, oldest first.
        max_turns_considered: Number of latest turns eligible for the history window.
        max_tokens: Token budget for the history window.
        count_tokens: Tokenizer used for the budget; defaults to tiktoken.
        on_trace: Called with the prompt/result pair, or the prompt and error when the call fails.

    Returns:
        *user_input* unchanged when the model reports no improvement,
        otherwise the trimmed contents of the ``RESULT`` tag.

    Raises:
        CompletionError: The call failed or returned no content.
        MalformedResponseError: An expected tag pair is missing from the reply.
    """
    resolved_mode = RephraseMode.from_value(mode)
    conversation = build_history_block(history, max_turns_considered, max_tokens, count_tokens)
    prompt = build_prompt(resolved_mode, user_input, conversation, system_prompt)

    logger.debug("Rephraser prompt:\n{}", prompt)
    try:
        result = await _complete(client, model, prompt)
    except CompletionError as exc:
        if on_trace is not None:
            on_trace(RephraseTrace(prompt=prompt, result="", model=model, mode=resolved_mode, error=str(exc)))
        raise

    logger.debug("Rephraser result:\n{}", result)
    if on_trace is not None:
        on_trace(RephraseTrace(prompt=prompt, result=result, model=model, mode=resolved_mode))

    if not could_improve(result):
        logger.info("Rephraser kept original input ({} mode)", resolved_mode.value)
        return user_input

    rephrased = extract_tag(result, RESULT_TAG)
    logger.info("Rephrase ({}): '{}' -> '{}'", resolved_mode.value, user_input[:50], rephrased[:50])
    return rephrased
