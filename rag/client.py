"""Construction of the OpenAI-compatible chat-completions client."""

from __future__ import annotations

from loguru import logger
from openai import AsyncOpenAI

from config import RephraserSettings


def create_client(settings: RephraserSettings) -> AsyncOpenAI:
    """Build an async client for *settings*; the single call is never retried."""
    logger.info("Creating completion client (base_url={})", settings.base_url)
    return AsyncOpenAI(
        api_key=settings.api_key,
        base_url=settings.base_url,
        max_retries=0,
    )
