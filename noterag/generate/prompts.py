"""Prompt templates for answer generation.

The context and prompt layouts are part of the request sent to the
completion service, so both must stay deterministic.
"""

NO_INFORMATION_ANSWER = "There is no information on this in the notes."

# Instruction block placed before the context
ANSWER_INSTRUCTIONS = f"""You are an expert at reading comprehension.
Only answer the question and ignore all information unrelated to the question.
Answer short and concisely, skipping over unnecessary information.
However, be aware that the information could be in multiple notes.
Put in all information you can find in the notes. Use a cold and professional tone.
If the information is not present in the context, say '{NO_INFORMATION_ANSWER}'
Using the following context, answer the question."""

# One note inside the context block
CONTEXT_ENTRY_TEMPLATE = "Title: {title}\n\nContent: {content}\n"

# Separator between context entries
CONTEXT_ENTRY_SEPARATOR = "\n"

ANSWER_PROMPT_TEMPLATE = """{instructions}

Context:
{context}

Question:
{question}"""


def format_context_entry(title: str, content: str) -> str:
    """Render one note for the context block."""
    return CONTEXT_ENTRY_TEMPLATE.format(title=title, content=content)


def format_context(entries: list) -> str:
    """Format ranked entries into the context block.

    Args:
        entries: Objects with a ``note`` attribute, already in ranked order

    Returns:
        Context text, empty if there are no entries
    """
    return CONTEXT_ENTRY_SEPARATOR.join(
        format_context_entry(entry.note.title, entry.note.content)
        for entry in entries
    )


def build_answer_prompt(
    context: str,
    question: str,
    instructions: str = ANSWER_INSTRUCTIONS,
) -> str:
    """Build the single prompt sent to the completion service.

    Args:
        context: Assembled context block (may be empty)
        question: User question, included verbatim
        instructions: Instruction block

    Returns:
        Prompt text
    """
    return ANSWER_PROMPT_TEMPLATE.format(
        instructions=instructions,
        context=context,
        question=question,
    )
