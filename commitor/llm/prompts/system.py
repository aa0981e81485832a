"""System prompt for LLM commit message generation.

This prompt is shared across all LLM providers. It restates the output
format contract so providers that weigh the system prompt heavily still
emit the sentinel markers.
"""

from commitor.llm.sentinels import BODY_END, BODY_START, TITLE_END, TITLE_START

SYSTEM_PROMPT_TEMPLATE = f"""You are a professional software developer. You analyze git changes and create commit messages in conventional commit format.

Rules:
1. Use Conventional Commits format: type(scope): description
2. Types: feat, fix, docs, style, refactor, test, chore, perf
3. Scope: changed module/file area (optional)
4. Description: start lowercase, no period, max 50 characters
5. Body (optional): detailed explanation, each line max 72 characters
6. IMPORTANT: Write commit messages in {{language}} language
7. OUTPUT FORMAT IS MANDATORY:
{TITLE_START}
type(scope): description
{TITLE_END}
{BODY_START}
- bullet lines describing the change
{BODY_END}

Example:
{TITLE_START}
feat(auth): add JWT support for user authentication
{TITLE_END}
{BODY_START}
- Token-based authentication system
- Login and logout endpoints
- Route protection with middleware
{BODY_END}"""


def build_system_prompt(language: str) -> str:
    """Build the system prompt for the given language.

    Args:
        language: Display name of the language (e.g., "English").

    Returns:
        The system prompt text.
    """
    return SYSTEM_PROMPT_TEMPLATE.format(language=language_name(language))


def language_name(language: str | None) -> str:
    """Normalize a language name, defaulting to English."""
    name = (language or "").strip()
    return name if name else "English"
