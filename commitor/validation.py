"""Advisory style checks for commit messages.

Checks never raise; the caller decides whether a violation blocks the
commit or is only shown as a warning.
"""

from dataclasses import dataclass, field

from commitor.models import CONVENTIONAL_PATTERN, CommitMessage

DEFAULT_MAX_LINE_LENGTH = 72

TITLE_TOO_LONG = "title-too-long"
TITLE_NOT_CONVENTIONAL = "title-not-conventional"
BODY_LINE_TOO_LONG = "body-line-too-long"


@dataclass(frozen=True)
class Violation:
    """A single failed check."""

    code: str
    message: str


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a commit message."""

    valid: bool
    violations: list[Violation] = field(default_factory=list)

    @property
    def messages(self) -> list[str]:
        return [v.message for v in self.violations]


def validate_message(
    message: CommitMessage,
    max_line_length: int = DEFAULT_MAX_LINE_LENGTH,
) -> ValidationResult:
    """Check a commit message against the conventional style rules.

    Args:
        message: The message to check.
        max_line_length: Maximum length of the title and of each body line.

    Returns:
        The validation result with one violation per failed rule.
    """
    violations = []

    if len(message.title) > max_line_length:
        violations.append(
            Violation(TITLE_TOO_LONG, f"Title is too long (max {max_line_length} characters)")
        )

    if not CONVENTIONAL_PATTERN.match(message.title):
        violations.append(
            Violation(TITLE_NOT_CONVENTIONAL, "Title does not follow conventional commit format")
        )

    if any(len(line) > max_line_length for line in message.body_lines):
        violations.append(
            Violation(
                BODY_LINE_TOO_LONG,
                f"Some body lines are too long (max {max_line_length} characters per line)",
            )
        )

    return ValidationResult(valid=not violations, violations=violations)
