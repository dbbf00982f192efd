"""Extraction of tagged sections from the rephraser's model output.

This is a substring splitter, not an XML parser: it takes the text between
the first ``<TAG>`` and the next ``</TAG>``. Missing delimiters raise
``MalformedResponseError`` instead of yielding a truncated string.
"""

from __future__ import annotations

import re

from models.schemas import RephraseResult
from rag.errors import MalformedResponseError

COULD_IMPROVE_TAG = "COULD_IMPROVE_USER_INPUT"
RESULT_TAG = "RESULT"

QUESTION_PATTERN = re.compile(r"^\s*Question\s*:\s*", re.IGNORECASE)
CHUNK_PATTERN = re.compile(r"^\s*Chunk\s*\d+\s*:\s*", re.IGNORECASE)


def extract_tag(text: str, tag: str) -> str:
    """Return the trimmed text between ``<tag>`` and ``</tag>``."""
    open_tag, close_tag = f"<{tag}>", f"</{tag}>"
    start = text.find(open_tag)
    if start == -1:
        raise MalformedResponseError(tag, text)
    start += len(open_tag)
    end = text.find(close_tag, start)
    if end == -1:
        raise MalformedResponseError(tag, text)
    return text[start:end].strip()


def could_improve(text: str) -> bool:
    """False only when the model explicitly answered ``false``."""
    return extract_tag(text, COULD_IMPROVE_TAG).lower() != "false"


def split_result_block(block: str, user_input: str = "") -> RephraseResult:
    """Split a rephrased block into its question and chunk lines.

    A block equal to *user_input*, or one without a ``Question:`` line, is
    taken as the user's own input coming back unchanged.
    """
    if user_input and block == user_input:
        return RephraseResult(question=user_input.strip(), improved=False)

    question_parts: list[str] | None = None
    chunk_parts: list[list[str]] = []
    current: list[str] | None = None

    for line in block.splitlines():
        if QUESTION_PATTERN.match(line):
            current = question_parts = [QUESTION_PATTERN.sub("", line, count=1)]
        elif CHUNK_PATTERN.match(line):
            current = [CHUNK_PATTERN.sub("", line, count=1)]
            chunk_parts.append(current)
        elif current is not None and line.strip():
            # continuation of a multi-line question or chunk
            current.append(line)

    if question_parts is None:
        return RephraseResult(question=block.strip() or user_input, improved=False)

    chunks = [_join(parts) for parts in chunk_parts]
    return RephraseResult(
        question=_join(question_parts),
        chunks=[c for c in chunks if c],
        improved=True,
    )


def _join(parts: list[str]) -> str:
    return " ".join(p.strip() for p in parts if p.strip())
