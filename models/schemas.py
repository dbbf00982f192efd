"""Pydantic v2 data models for the conversational query rephraser.

Conversation turns come in from the calling application, the rephraser
hands back plain text, and the caller-side helpers turn that text into a
``RephraseResult`` when the question and chunks are needed separately.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Conversation Models
# ---------------------------------------------------------------------------

class ConversationTurn(BaseModel):
    """One message of a conversation, owned by the calling application."""

    model_config = ConfigDict(frozen=True)

    role: str
    content: str

    def render(self) -> str:
        return f"**{self.role}**: {self.content}"


# ---------------------------------------------------------------------------
# Rephraser Models
# ---------------------------------------------------------------------------

class RephraseMode(str, Enum):
    """Output contract the model must follow."""

    REPHRASE = "rephrase"
    REPHRASE_AND_CHUNKS = "rephrase-and-chunks"

    @classmethod
    def from_value(cls, value: RephraseMode | str | None) -> RephraseMode:
        """Resolve *value* to a mode; ``None`` and unknown values select chunks."""
        if isinstance(value, cls):
            return value
        if value == cls.REPHRASE.value:
            return cls.REPHRASE
        return cls.REPHRASE_AND_CHUNKS


class RephraseTrace(BaseModel):
    """Prompt/result pair captured for debugging a single rephrase call."""

    prompt: str
    result: str
    model: str
    mode: RephraseMode
    error: str | None = None


class RephraseResult(BaseModel):
    """Question and synthetic chunks split out of a rephrased block."""

    question: str
    chunks: list[str] = Field(default_factory=list)
    improved: bool = True
