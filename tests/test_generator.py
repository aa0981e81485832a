"""Tests for commitor.generator module."""

import pytest

from commitor.config import CommitorConfig, LanguagePreference
from commitor.generator import CommitGenerator, RetryPolicy
from commitor.git import NumstatRow, StagedStatus
from commitor.llm.exceptions import (
    EmptyGeneratedMessageError,
    GenerationAuthError,
    GenerationRateLimitedError,
    GenerationServerError,
    GenerationUnknownError,
    MissingAPIKeyError,
    ProviderErrorCode,
)
from commitor.models import CommitMessage, CommitType
from commitor.user_config import add_ignore_pattern


def _generator(repository, provider, **config_overrides):
    return CommitGenerator(CommitorConfig(**config_overrides), repository, provider)


class TestAnalyze:
    """Tests for CommitGenerator.analyze."""

    def test_builds_change_set(self, auth_repository, make_provider):
        generator = _generator(auth_repository, make_provider())

        change_set = generator.analyze()

        assert change_set.paths == ["src/auth.ts"]
        assert change_set.commit_type == CommitType.FEAT

    def test_only_ignored_files_staged(self, mock_repo_root, make_repository, make_provider):
        """Test a commit staging only an ignored file still builds."""
        repository = make_repository(
            status=StagedStatus(staged=["package-lock.json"]),
            rows=[NumstatRow(additions=40, deletions=12, path="package-lock.json")],
            diffs={"package-lock.json": "+lockfile churn"},
            root=mock_repo_root,
        )

        change_set = _generator(repository, make_provider()).analyze()

        assert change_set.paths == ["package-lock.json"]
        assert change_set.files[0].diff == "+lockfile churn"
        assert change_set.stats.total_additions == 40

    def test_ignored_diff_text_left_out_of_prompt(
        self, mock_repo_root, make_repository, make_provider, structured_response
    ):
        add_ignore_pattern(mock_repo_root, "generated/*")
        repository = make_repository(
            status=StagedStatus(created=["generated/api.py", "src/app.py"]),
            rows=[
                NumstatRow(additions=100, deletions=0, path="generated/api.py"),
                NumstatRow(additions=3, deletions=0, path="src/app.py"),
            ],
            diffs={"generated/api.py": "+GENERATED CODE", "src/app.py": "+handwritten"},
            root=mock_repo_root,
        )
        provider = make_provider([structured_response])
        generator = _generator(repository, provider)

        generator.generate_message(generator.analyze(), "English")

        prompt = provider.calls[0][1]
        assert "- generated/api.py (added): +100 -0" in prompt
        assert "+GENERATED CODE" not in prompt
        assert "+handwritten" in prompt

    def test_classifier_settings_apply(self, make_repository, make_provider):
        repository = make_repository(
            status=StagedStatus(staged=["src/app.py"]),
            rows=[NumstatRow(additions=15, deletions=10, path="src/app.py")],
        )
        generator = _generator(
            repository,
            make_provider(),
            classifier={"refactor_ratio_min": 0.5, "refactor_ratio_max": 2.0},
        )

        assert generator.analyze().commit_type == CommitType.REFACTOR


class TestResolveLanguage:
    """Tests for CommitGenerator.resolve_language."""

    def test_fixed_preference(self, auth_repository, make_provider):
        generator = _generator(auth_repository, make_provider(), language=LanguagePreference.TURKISH)
        assert generator.resolve_language() == "Turkish"

    def test_custom_preference(self, auth_repository, make_provider):
        generator = _generator(
            auth_repository,
            make_provider(),
            language=LanguagePreference.CUSTOM,
            custom_language=" German ",
        )
        assert generator.resolve_language() == "German"

    def test_auto_detected(self, mock_repo_root, make_repository, make_provider):
        repository = make_repository(
            root=mock_repo_root,
            log=["Fix the parser and add tests for the lexer", "Update the docs for the release"],
        )
        generator = _generator(repository, make_provider(), language=LanguagePreference.AUTO)

        assert generator.resolve_language() == "English"

    def test_auto_undecided(self, mock_repo_root, make_repository, make_provider):
        repository = make_repository(root=mock_repo_root, log=[])
        generator = _generator(repository, make_provider(), language=LanguagePreference.AUTO)

        assert generator.resolve_language() is None

    def test_detection_settings_apply(self, mock_repo_root, make_repository, make_provider):
        repository = make_repository(root=mock_repo_root, log=["fix the bug"])
        generator = _generator(
            repository,
            make_provider(),
            language=LanguagePreference.AUTO,
            language_detection={"min_score": 1},
        )

        assert generator.resolve_language() == "English"


class TestGenerateMessage:
    """Tests for CommitGenerator.generate_message."""

    def test_success(self, auth_repository, make_provider, sample_change_set, structured_response):
        provider = make_provider([structured_response])
        generator = _generator(auth_repository, provider)

        message = generator.generate_message(sample_change_set, "English")

        assert message.title == "feat(auth): add login and logout helpers"
        assert generator.last_result.text == structured_response
        assert len(provider.calls) == 1
        system_prompt, user_prompt, _ = provider.calls[0]
        assert "in English language" in system_prompt
        assert "src/auth.ts" in user_prompt

    def test_auth_error_is_not_retried(self, auth_repository, make_provider, sample_change_set, status_error):
        provider = make_provider([status_error(401), "fix: never used"])
        generator = _generator(auth_repository, provider)

        with pytest.raises(GenerationAuthError) as exc_info:
            generator.generate_message(sample_change_set, "English")

        assert len(provider.calls) == 1
        assert exc_info.value.attempts == 0

    def test_rate_limit_is_not_retried(self, auth_repository, make_provider, sample_change_set, status_error):
        provider = make_provider([status_error(429)])
        generator = _generator(auth_repository, provider)

        with pytest.raises(GenerationRateLimitedError):
            generator.generate_message(sample_change_set, "English")

        assert len(provider.calls) == 1

    def test_missing_key_is_not_retried(self, auth_repository, make_provider, sample_change_set):
        provider = make_provider([MissingAPIKeyError("no key")])
        generator = _generator(auth_repository, provider)

        with pytest.raises(MissingAPIKeyError):
            generator.generate_message(sample_change_set, "English")

        assert len(provider.calls) == 1

    def test_retryable_error_then_success(
        self, auth_repository, make_provider, sample_change_set, status_error, structured_response
    ):
        provider = make_provider([status_error(503), "", structured_response])
        generator = _generator(auth_repository, provider)

        message = generator.generate_message(sample_change_set, "English")

        assert message.type == "feat"
        assert len(provider.calls) == 3

    def test_retries_exhausted(self, auth_repository, make_provider, sample_change_set, status_error):
        provider = make_provider([status_error(500)] * 5)
        generator = CommitGenerator(
            CommitorConfig(), auth_repository, provider, retry_policy=RetryPolicy(max_attempts=3)
        )

        with pytest.raises(GenerationServerError) as exc_info:
            generator.generate_message(sample_change_set, "English")

        assert len(provider.calls) == 3
        assert exc_info.value.attempts == 3

    def test_max_attempts_from_config(self, auth_repository, make_provider, sample_change_set):
        provider = make_provider(["", "", ""])
        generator = _generator(auth_repository, provider, max_attempts=2)

        with pytest.raises(EmptyGeneratedMessageError):
            generator.generate_message(sample_change_set, "English")

        assert len(provider.calls) == 2

    def test_should_retry_stops_early(self, auth_repository, make_provider, sample_change_set):
        provider = make_provider([RuntimeError("boom")] * 5)
        seen = []

        def should_retry(error, attempts):
            seen.append((type(error), attempts))
            return False

        generator = CommitGenerator(
            CommitorConfig(),
            auth_repository,
            provider,
            retry_policy=RetryPolicy(max_attempts=5, should_retry=should_retry),
        )

        with pytest.raises(GenerationUnknownError) as exc_info:
            generator.generate_message(sample_change_set, "English")

        assert len(provider.calls) == 1
        assert seen == [(GenerationUnknownError, 1)]
        assert exc_info.value.attempts == 1

    def test_unparseable_response_is_retried(
        self, auth_repository, make_provider, sample_change_set, structured_response
    ):
        provider = make_provider(["```\n```", structured_response])
        generator = _generator(auth_repository, provider)

        message = generator.generate_message(sample_change_set, "English")

        assert message.scope == "auth"
        assert len(provider.calls) == 2


class TestCommitAndHealth:
    """Tests for commit, validate and check_provider_health."""

    def test_commit_uses_raw_message(self, auth_repository, make_provider):
        generator = _generator(auth_repository, make_provider())
        message = CommitMessage.build("feat: add auth", "- Login")

        result = generator.commit(message)

        assert auth_repository.commits == ["feat: add auth\n\n- Login"]
        assert result.hash == "abc1234"

    def test_validate(self, auth_repository, make_provider):
        generator = _generator(auth_repository, make_provider())

        assert generator.validate(CommitMessage.build("feat: add auth")).valid
        assert not generator.validate(CommitMessage.build("Add auth")).valid

    def test_health_ok(self, auth_repository, make_provider):
        generator = _generator(auth_repository, make_provider(["hi"]))
        assert generator.check_provider_health().ok

    def test_health_invalid_key(self, auth_repository, make_provider, status_error):
        generator = _generator(auth_repository, make_provider([status_error(403)]))

        status = generator.check_provider_health()

        assert not status.ok
        assert status.error == ProviderErrorCode.INVALID_CREDENTIAL
