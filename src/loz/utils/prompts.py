ESL_PROMPT = "Rephrase the following question to make it sound more natural and answer the question: \n"
PROOFREAD_PROMPT = "Can you proofread the following sentence? Show me the difference between the given sentence and your correction.\n"

MODE_PREFIXES = {
    "esl": ESL_PROMPT,
    "proofread": PROOFREAD_PROMPT,
}

COMMIT_PROMPT = "Generate a commit message for the following code changes:\n"
COMMIT_PIPE_PROMPT = """Generate a commit message for the following code changes like this:
title
<empty line>
description
"""

PIPE_PROMPT_TEMPLATE = "Based on the data provided below, {prompt}:\n{data}"

COMMIT_PROVENANCE_TEMPLATE = "\n\nGenerated by {model}"


def mode_prefix(mode: str | None) -> str:
    """Instruction prepended to prompts in *mode*; empty for unknown or unset modes."""
    if not mode:
        return ""
    return MODE_PREFIXES.get(mode, "")
