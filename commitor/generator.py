"""Orchestration of a commit message generation run.

Contains:
- RetryPolicy: Attempt bound and optional early-stop callback
- CommitGenerator: Ties the repository, classifier, language detector,
  prompt compiler, provider and parser together
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from commitor import user_config
from commitor.classifier import ClassifierPolicy
from commitor.config import (
    DEFAULT_MAX_ATTEMPTS,
    CommitorConfig,
    LanguagePreference,
    resolve_language_label,
)
from commitor.git import ChangeSetBuilder, CommitResult, GitError, Repository
from commitor.language import LanguageDetection, LanguageDetector, LanguageThresholds
from commitor.llm.base import BaseLLMProvider, HealthStatus, LLMResult
from commitor.llm.exceptions import LLMError
from commitor.llm.parsing import parse_commit_message
from commitor.llm.prompts import DEFAULT_MAX_DIFF_CHARS, build_prompt
from commitor.models import ChangeSet, CommitMessage
from commitor.validation import ValidationResult, validate_message

logger = logging.getLogger(__name__)


@dataclass
class RetryPolicy:
    """How many times a retryable generation failure is attempted.

    Attributes:
        max_attempts: Upper bound on attempts that end in a retryable error.
        should_retry: Called with the error and the attempts used so far
            after each retryable failure; returning False stops early.
    """

    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    should_retry: Optional[Callable[[LLMError, int], bool]] = None


class CommitGenerator:
    """Generates commit messages for a repository's staged changes."""

    def __init__(
        self,
        config: CommitorConfig,
        repository: Repository,
        provider: BaseLLMProvider,
        retry_policy: Optional[RetryPolicy] = None,
        max_diff_chars: int = DEFAULT_MAX_DIFF_CHARS,
    ):
        """Initialize the generator.

        Args:
            config: The loaded configuration.
            repository: Repository to analyze and commit to.
            provider: LLM provider used for generation.
            retry_policy: Retry behavior. Defaults to config.max_attempts.
            max_diff_chars: Maximum characters of diff text sent to the provider.
        """
        self.config = config
        self.repository = repository
        self.provider = provider
        self.retry_policy = retry_policy or RetryPolicy(max_attempts=config.max_attempts)
        self.max_diff_chars = max_diff_chars
        # Provider response behind the most recently generated message
        self.last_result: Optional[LLMResult] = None

    def _ignore_patterns(self) -> list[str]:
        """Repository patterns for files whose diff text stays out of the prompt."""
        try:
            return user_config.get_ignore_patterns(self.repository.repo_root())
        except GitError:
            return []

    def analyze(self) -> ChangeSet:
        """Build the change set for the staged files.

        Raises:
            NotARepositoryError: If the directory is not a git repository.
            NoStagedChangesError: If nothing is staged.
        """
        classifier = self.config.classifier
        builder = ChangeSetBuilder(
            self.repository,
            policy=ClassifierPolicy(
                refactor_ratio_min=classifier.refactor_ratio_min,
                refactor_ratio_max=classifier.refactor_ratio_max,
            ),
        )
        return builder.build()

    def detect_language(self) -> LanguageDetection:
        """Detect the language of the repository's readme and commit history."""
        settings = self.config.language_detection
        detector = LanguageDetector(
            self.repository,
            thresholds=LanguageThresholds(
                min_score=settings.min_score,
                min_confidence=settings.min_confidence,
            ),
            commit_window=settings.commit_window,
        )
        return detector.detect()

    def resolve_language(self) -> Optional[str]:
        """Resolve the configured language preference to a display name.

        Returns:
            The language name, or None when the caller has to choose: auto
            detection was undecided, or the custom language is blank.
        """
        preference = self.config.language

        if preference == LanguagePreference.CUSTOM:
            custom = (self.config.custom_language or "").strip()
            return custom or None

        if preference == LanguagePreference.AUTO:
            detection = self.detect_language()
            if detection.language is None:
                return None
            return resolve_language_label(detection.language)

        return resolve_language_label(preference.value)

    def generate_message(self, change_set: ChangeSet, language: str) -> CommitMessage:
        """Generate a commit message for a change set.

        Errors that are not retryable propagate at once and use no attempt.
        Retryable errors are retried until the policy's attempt bound is hit
        or its callback declines; the last error then propagates with its
        ``attempts`` attribute set.

        Args:
            change_set: The staged changes.
            language: Display name of the language to write in.

        Returns:
            The parsed commit message.

        Raises:
            LLMError: The non-retryable error, or the last retryable one.
        """
        prompt = build_prompt(
            change_set, language, self.max_diff_chars, ignore_patterns=self._ignore_patterns()
        )
        attempts = 0

        while True:
            try:
                result = self.provider.generate(prompt, language)
                self.last_result = result
                message = parse_commit_message(result.text)
                logger.debug("Generated message after %d failed attempt(s)", attempts)
                return message
            except LLMError as e:
                if not e.retryable:
                    raise

                attempts += 1
                e.attempts = attempts
                logger.debug(
                    "Attempt %d/%d failed: %s", attempts, self.retry_policy.max_attempts, e
                )

                if attempts >= self.retry_policy.max_attempts:
                    raise
                if self.retry_policy.should_retry and not self.retry_policy.should_retry(e, attempts):
                    raise

    def validate(self, message: CommitMessage) -> ValidationResult:
        """Run the advisory style checks on a message."""
        return validate_message(message)

    def check_provider_health(self) -> HealthStatus:
        """Check that the provider accepts the configured credentials."""
        return self.provider.health_check()

    def commit(self, message: CommitMessage) -> CommitResult:
        """Commit the staged changes with the message's full text."""
        return self.repository.commit(message.raw_message)
