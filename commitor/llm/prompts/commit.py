"""User prompt for commit message generation.

The prompt embeds the sentinel markers from commitor.llm.sentinels, a
language directive, a per-file summary table and the unified diffs of the
change set.
"""

from typing import Sequence

from commitor.git.diff import _should_exclude_file, truncate_diff
from commitor.llm.prompts.system import language_name
from commitor.llm.sentinels import BODY_END, BODY_START, TITLE_END, TITLE_START
from commitor.models import ChangeKind, ChangeSet, FileChange

DEFAULT_MAX_DIFF_CHARS = 50000

USER_PROMPT_TEMPLATE = f"""Analyze the git changes and create a commit message in conventional commit format.

IMPORTANT OUTPUT FORMAT:
1. Return the result EXACTLY in the following structure (no extra text, explanations, or code fences):
{TITLE_START}
type(scope): short description
{TITLE_END}
{BODY_START}
- bullet line describing change
- another line
{BODY_END}
2. There must be exactly one line between each block.
3. Do not include additional commentary outside the markers.

{{language_instruction}}

Branch: {{branch}}
Detected type: {{commit_type}}

Changed files ({{file_count}}):
{{files_summary}}

Statistics:
- Total additions: {{total_additions}}
- Total deletions: {{total_deletions}}

Detailed changes:
{{detailed_diffs}}

Guidelines:
- Title: type(scope): description (max 50 characters, lowercase description)
- Body: concise bullet list describing key changes"""


def _file_label(file: FileChange) -> str:
    if file.kind == ChangeKind.RENAMED and file.old_path:
        return f"{file.old_path} -> {file.path}"
    return file.path


def format_files_summary(change_set: ChangeSet) -> str:
    """Format the per-file table: one ``- path (kind): +A -D`` line per file."""
    return "\n".join(
        f"- {_file_label(f)} ({f.kind.value}): +{f.additions} -{f.deletions}"
        for f in change_set.files
    )


def format_detailed_diffs(
    change_set: ChangeSet,
    max_chars: int = DEFAULT_MAX_DIFF_CHARS,
    ignore_patterns: Sequence[str] = (),
) -> str:
    """Concatenate the file diffs under ``### path`` headers, truncated to max_chars.

    Files matching ``ignore_patterns`` stay in the summary table but their diff
    text is left out.
    """
    patterns = list(ignore_patterns)
    detailed = "\n".join(
        f"\n### {f.path}\n{f.diff}"
        for f in change_set.files
        if not _should_exclude_file(f.path, patterns)
    )
    return truncate_diff(detailed, max_chars)


def build_prompt(
    change_set: ChangeSet,
    language: str | None,
    max_diff_chars: int = DEFAULT_MAX_DIFF_CHARS,
    ignore_patterns: Sequence[str] = (),
) -> str:
    """Build the user prompt for a change set.

    Args:
        change_set: The staged changes.
        language: Display name of the language to write in. Blank means English.
        max_diff_chars: Maximum characters of diff text to include.
        ignore_patterns: Glob patterns for files whose diff text is left out.

    Returns:
        The prompt text.
    """
    stats = change_set.stats
    language_instruction = (
        f"Write the commit message in {language_name(language).upper()} language."
    )

    return USER_PROMPT_TEMPLATE.format(
        language_instruction=language_instruction,
        branch=change_set.branch,
        commit_type=change_set.commit_type.value,
        file_count=stats.file_count,
        files_summary=format_files_summary(change_set),
        total_additions=stats.total_additions,
        total_deletions=stats.total_deletions,
        detailed_diffs=format_detailed_diffs(change_set, max_diff_chars, ignore_patterns),
    )
