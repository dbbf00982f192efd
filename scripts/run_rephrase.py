#!/usr/bin/env python3
"""
Rephrase a user message against a saved conversation.

The conversation file is a JSON list of {"role": ..., "content": ...} objects,
oldest first.

Usage:
  python scripts/run_rephrase.py "and the second one?" --conversation chat.json
  python scripts/run_rephrase.py "what about returns?" -c chat.json --mode rephrase
  python scripts/run_rephrase.py "what about returns?" -c chat.json --structured --verbose
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

# Project root
ROOT = Path(__file__).resolve().parent.parent


def _load_conversation(path: Path | None) -> list[dict]:
    if path is None:
        return []
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON list of turns")
    return data


async def run(args: argparse.Namespace) -> int:
    sys.path.insert(0, str(ROOT))

    from config import RephraserSettings
    from rag.errors import RephraserError
    from rag.query_rewriter import QueryRewriter

    settings = RephraserSettings.from_env()
    overrides = {
        "model": args.model,
        "max_turns": args.max_turns,
        "max_history_tokens": args.max_tokens,
    }
    settings = settings.model_copy(update={k: v for k, v in overrides.items() if v is not None})

    on_trace = None
    if args.verbose:
        def on_trace(trace) -> None:
            print("--- prompt ---")
            print(trace.prompt)
            print("--- raw result ---")
            print(trace.result)
            print("--------------")

    rewriter = QueryRewriter(settings=settings, on_trace=on_trace)
    history = _load_conversation(args.conversation)

    try:
        if args.structured:
            result = await rewriter.rephrase_structured(args.user_input, history, args.system_prompt, args.mode)
            print(result.model_dump_json(indent=2))
        else:
            print(await rewriter.rephrase(args.user_input, history, args.system_prompt, args.mode))
    except RephraserError as ex:
        print(f"ERROR — {ex}")
        return 1
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Rephrase a user message into a standalone retrieval query")
    parser.add_argument("user_input", type=str, help="The user's latest message")
    parser.add_argument(
        "--conversation", "-c",
        type=Path,
        default=None,
        help="JSON file with prior turns (list of {role, content}), oldest first.",
    )
    parser.add_argument(
        "--mode",
        type=str,
        default=None,
        help="'rephrase' or 'rephrase-and-chunks'. Default: REPHRASER_MODE or rephrase-and-chunks.",
    )
    parser.add_argument("--system-prompt", type=str, default="", help="Application prompt to include")
    parser.add_argument("--model", type=str, default=None, help="Override REPHRASER_MODEL")
    parser.add_argument("--max-turns", type=int, default=None, help="Override REPHRASER_MAX_TURNS")
    parser.add_argument("--max-tokens", type=int, default=None, help="Override REPHRASER_MAX_HISTORY_TOKENS")
    parser.add_argument("--structured", action="store_true", help="Print question and chunks as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Print the prompt and raw model output")
    args = parser.parse_args()

    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
