"""Environment-driven settings for the rephraser.

Values are read from the process environment (and a local ``.env`` file when
present). Defaults point at a local Ollama server through its
OpenAI-compatible endpoint.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from models.schemas import RephraseMode

load_dotenv()

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_BASE_URL = "http://localhost:11434/v1"
DEFAULT_API_KEY = "ollama"
DEFAULT_MODEL = "llama3.2"
DEFAULT_MAX_TURNS = 10
DEFAULT_MAX_HISTORY_TOKENS = 1000
DEFAULT_TOKEN_ENCODING = "cl100k_base"


class RephraserSettings(BaseModel):
    """Connection and budgeting settings for ``QueryRewriter``."""

    base_url: str = DEFAULT_BASE_URL
    api_key: str = DEFAULT_API_KEY
    model: str = DEFAULT_MODEL
    mode: RephraseMode = RephraseMode.REPHRASE_AND_CHUNKS
    max_turns: int = Field(default=DEFAULT_MAX_TURNS, ge=0)
    max_history_tokens: int = Field(default=DEFAULT_MAX_HISTORY_TOKENS, ge=0)
    token_encoding: str = DEFAULT_TOKEN_ENCODING

    @classmethod
    def from_env(cls) -> RephraserSettings:
        return cls(
            base_url=os.getenv("REPHRASER_BASE_URL", DEFAULT_BASE_URL),
            api_key=os.getenv("REPHRASER_API_KEY") or os.getenv("OPENAI_API_KEY") or DEFAULT_API_KEY,
            model=os.getenv("REPHRASER_MODEL", DEFAULT_MODEL),
            mode=RephraseMode.from_value(os.getenv("REPHRASER_MODE")),
            max_turns=os.getenv("REPHRASER_MAX_TURNS", DEFAULT_MAX_TURNS),
            max_history_tokens=os.getenv("REPHRASER_MAX_HISTORY_TOKENS", DEFAULT_MAX_HISTORY_TOKENS),
            token_encoding=os.getenv("REPHRASER_TOKEN_ENCODING", DEFAULT_TOKEN_ENCODING),
        )
