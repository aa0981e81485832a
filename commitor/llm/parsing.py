"""Parsing of LLM responses into commit messages.

Contains:
- parse_commit_message: Parse a raw response, structured first, then heuristic
- parse_structured_message: Regime A, text between the sentinel markers
- parse_freeform_message: Regime B, line-based recovery for responses that
  ignored the format
- parse_title: Extract type and scope from a title line
"""

import logging
import re
from typing import Optional

from commitor.llm.exceptions import EmptyGeneratedMessageError
from commitor.llm.sentinels import ALL_SENTINELS, BODY_END, BODY_START, TITLE_END, TITLE_START
from commitor.models import CONVENTIONAL_PATTERN, CommitMessage, parse_title

logger = logging.getLogger(__name__)

_INVISIBLE_CHARS = re.compile("[\u200b\u200c\u200d\ufeff\u2060]")
_LEADING_BULLET = re.compile("^[*\\-•+]\\s+")
_LEADING_PUNCTUATION = re.compile("^[:\\-\u2013\u2014]+")
_CODE_FENCE = re.compile(r"^```")
_TITLE_LABEL = re.compile(r"^title\s*:\s*(.+)$", re.IGNORECASE)
_DESCRIPTION_LABEL = re.compile(r"^description\s*:\s*(.+)$", re.IGNORECASE)
_BARE_LABEL = re.compile(r"^(title|description)\s*:?$", re.IGNORECASE)


__all__ = [
    "parse_commit_message",
    "parse_structured_message",
    "parse_freeform_message",
    "parse_title",
    "extract_section",
    "clean_line",
    "normalize_lines",
]


def extract_section(source: str, start: str, end: str) -> Optional[str]:
    """Return the trimmed text between the first start and end markers.

    Returns:
        The section text, or None if a marker is missing or they are out of order.
    """
    start_index = source.find(start)
    end_index = source.find(end)

    if start_index == -1 or end_index == -1 or end_index <= start_index:
        return None

    return source[start_index + len(start):end_index].strip()


def parse_structured_message(raw: str) -> Optional[CommitMessage]:
    """Parse a response that honors the sentinel format.

    Args:
        raw: The raw response text.

    Returns:
        The commit message, or None if no usable title section is present.
    """
    title = extract_section(raw, TITLE_START, TITLE_END)
    if not title:
        return None

    # A multi-line title section keeps only its first line
    title = title.splitlines()[0].strip()

    body_section = extract_section(raw, BODY_START, BODY_END)
    body_lines = []
    if body_section:
        body_lines = [line.rstrip() for line in body_section.split("\n")]
        body_lines = [line for line in body_lines if line]

    return CommitMessage.build(title=title, body="\n".join(body_lines))


def clean_line(line: str) -> str:
    """Strip invisible characters, stray markers and leading bullets from a line."""
    line = _INVISIBLE_CHARS.sub("", line)
    for sentinel in ALL_SENTINELS:
        line = line.replace(sentinel, "")
    line = line.strip()
    line = _LEADING_BULLET.sub("", line)
    line = _LEADING_PUNCTUATION.sub("", line)
    return line.strip()


def normalize_lines(lines: list[str]) -> list[str]:
    """Unwrap ``Title:``/``Description:`` labels and drop bare labels and fences."""
    normalized = []
    for line in lines:
        if _CODE_FENCE.match(line):
            continue

        title_match = _TITLE_LABEL.match(line)
        if title_match:
            normalized.append(title_match.group(1).strip())
            continue

        description_match = _DESCRIPTION_LABEL.match(line)
        if description_match:
            normalized.append(description_match.group(1).strip())
            continue

        if _BARE_LABEL.match(line):
            continue

        normalized.append(line)

    return [line for line in normalized if line]


def parse_freeform_message(raw: str) -> CommitMessage:
    """Recover a commit message from a response without sentinel markers.

    The title is the last line that follows the conventional pattern, or the
    first line if none does. Body lines are the later lines that are neither
    conventional titles nor repeats of the title, de-duplicated
    case-insensitively in first-seen order.

    Raises:
        EmptyGeneratedMessageError: If the response has no usable lines.
    """
    cleaned = [clean_line(line) for line in raw.split("\n")]
    lines = normalize_lines([line for line in cleaned if line])

    if not lines:
        raise EmptyGeneratedMessageError("Empty commit message received from AI")

    title_index = 0
    for index in range(len(lines) - 1, -1, -1):
        if CONVENTIONAL_PATTERN.match(lines[index]):
            title_index = index
            break

    title = lines[title_index].strip()
    title_key = title.lower()

    seen = set()
    body_lines = []
    for line in lines[title_index + 1:]:
        if CONVENTIONAL_PATTERN.match(line):
            continue
        key = line.lower()
        if key == title_key or key in seen:
            continue
        seen.add(key)
        body_lines.append(line)

    return CommitMessage.build(title=title, body="\n".join(body_lines))


def parse_commit_message(raw: str) -> CommitMessage:
    """Parse a raw LLM response into a commit message.

    The structured format is tried first; responses that do not honor it are
    parsed heuristically.

    Args:
        raw: The raw response text.

    Returns:
        The parsed commit message.

    Raises:
        EmptyGeneratedMessageError: If no message can be recovered.
    """
    structured = parse_structured_message(raw or "")
    if structured is not None:
        logger.debug("Parsed structured response")
        return structured

    logger.debug("Sentinels missing or malformed, falling back to free-form parsing")
    return parse_freeform_message(raw or "")
