"""Exceptions raised by the rephraser core."""

from __future__ import annotations


class RephraserError(Exception):
    """Base class for every rephraser failure."""


class CompletionError(RephraserError):
    """The completion call failed or produced no usable message content."""


class MalformedResponseError(RephraserError):
    """The model response lacks an expected tag pair."""

    def __init__(self, tag: str, response: str) -> None:
        super().__init__(f"Response is missing the <{tag}>...</{tag}> tag pair")
        self.tag = tag
        self.response = response
