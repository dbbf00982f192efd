"""Prompt templates for the two rephrasing modes.

Both templates ask the model for the same tag skeleton: a
``COULD_IMPROVE_USER_INPUT`` self-assessment and a ``RESULT`` block. The
chunk template additionally asks for five synthetic passages and an
advisory ``CHUNKS_QUALITY`` rating.
"""

from __future__ import annotations

from langchain_core.prompts import PromptTemplate

from models.schemas import RephraseMode

# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

REPHRASE_TEMPLATE = (
    "You are a summarizer expert. You will go through the prompt, the conversation messages and the user input and create an enriched "
    " question based on the user input that will  be useful to create good vector embeddings for semantic search.\n\n"
    "{prompt_block}"
    "<CONVERSATION>{conversation}</CONVERSATION>\n\n"
    "<USER INPUT>{user_input}</USER INPUT>"
    "Output the enriched user input as a complete and atomic question that incorporates everything required from the PROMPT and CONVERSATION "
    "(i.e. the conversation subject, replace item numbers with the actual item descriptions, etc). "
    "Use the following format:\n\n"
    "```xml\n"
    "<REPHRASER>\n"
    "<COULD_IMPROVE_USER_INPUT>{{reply with true or false}}</COULD_IMPROVE_USER_INPUT>\n"
    "<RESULT>\n"
    "Question: {{YOUR QUESTION}}\n"
    "</RESULT>\n"
    "</REPHRASER>```"
)

REPHRASE_AND_CHUNKS_TEMPLATE = (
    "You are a summarizer expert. You will go through the prompt, the conversation messages and the user input and create "
    "an enriched version of the question with 5 diverse chunks or sources of informtion generated by AI,  that will  be useful "
    "to create good vector embeddings for semantic search.\n\n"
    "{prompt_block}"
    "<CONVERSATION>{conversation}</CONVERSATION>\n\n"
    "<USER INPUT>{user_input}</USER INPUT>\n\n"
    "Output the enriched user input as a complete and atomic question that incorporates everything required from the prompt and context of the conversation "
    "(i.e. the conversation subject, replace item numbers with the actual item descriptions, etc). "
    "Then create 5 possible paragraphs that might have the information that answer the question. "
    "Use the following format:\n\n"
    "```xml\n"
    "<REPHRASER>\n"
    "<COULD_IMPROVE_USER_INPUT>{{reply with true or false}}</COULD_IMPROVE_USER_INPUT>\n"
    "<CHUNKS_QUALITY>{{Rate the quality of the chunks 0 (completely fake, clueless) - 10 (resonable good chunks)}}</CHUNKS_QUALITY>\n"
    "<RESULT>\n"
    "Question: {{YOUR QUESTION}}\n"
    "Chunk 1: {{YOUR CHUNK}}\n"
    "Chunk 2: {{YOUR CHUNK}}\n"
    "Chunk 3: {{YOUR CHUNK}}\n"
    "Chunk 4: {{YOUR CHUNK}}\n"
    "Chunk 5: {{YOUR CHUNK}}\n"
    "</RESULT>\n"
    "</REPHRASER>```"
)

PROMPTS: dict[RephraseMode, PromptTemplate] = {
    RephraseMode.REPHRASE: PromptTemplate.from_template(REPHRASE_TEMPLATE),
    RephraseMode.REPHRASE_AND_CHUNKS: PromptTemplate.from_template(REPHRASE_AND_CHUNKS_TEMPLATE),
}


def build_prompt(
    mode: RephraseMode | str | None,
    user_input: str,
    conversation: str,
    system_prompt: str | None = None,
) -> str:
    """Assemble the rephraser prompt for *mode*.

    The ``<PROMPT>`` section is left out entirely when *system_prompt* is empty.
    """
    template = PROMPTS[RephraseMode.from_value(mode)]
    prompt_block = f"<PROMPT>{system_prompt}</PROMPT>\n\n" if system_prompt else ""
    return template.format(
        prompt_block=prompt_block,
        conversation=conversation,
        user_input=user_input,
    )
