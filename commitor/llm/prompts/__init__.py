"""LLM prompt templates for commit message generation.

This package contains:
- system: The shared system prompt with the output format contract
- commit: The user prompt built from a change set
"""

from commitor.llm.prompts.system import (
    SYSTEM_PROMPT_TEMPLATE,
    build_system_prompt,
    language_name,
)
from commitor.llm.prompts.commit import (
    DEFAULT_MAX_DIFF_CHARS,
    USER_PROMPT_TEMPLATE,
    build_prompt,
    format_detailed_diffs,
    format_files_summary,
)


__all__ = [
    "SYSTEM_PROMPT_TEMPLATE",
    "build_system_prompt",
    "language_name",
    "DEFAULT_MAX_DIFF_CHARS",
    "USER_PROMPT_TEMPLATE",
    "build_prompt",
    "format_detailed_diffs",
    "format_files_summary",
]
