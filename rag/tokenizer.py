"""Token counting for history budgeting, backed by tiktoken."""

from __future__ import annotations

from collections.abc import Callable
from functools import lru_cache

import tiktoken
from loguru import logger

DEFAULT_ENCODING = "cl100k_base"

TokenCounter = Callable[[str], int]


@lru_cache(maxsize=None)
def _get_encoding(encoding_name: str) -> tiktoken.Encoding:
    logger.info("Loading tiktoken encoding {}", encoding_name)
    return tiktoken.get_encoding(encoding_name)


def tiktoken_counter(encoding_name: str = DEFAULT_ENCODING) -> TokenCounter:
    """Return a deterministic ``text -> token count`` function for *encoding_name*."""
    encoding = _get_encoding(encoding_name)

    def count_tokens(text: str) -> int:
        if not text:
            return 0
        return len(encoding.encode(text, disallowed_special=()))

    return count_tokens
