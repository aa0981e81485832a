"""Shared test fixtures and configuration."""

import tempfile
from pathlib import Path
from typing import Optional

import pytest

from commitor.git.diff import NumstatRow
from commitor.git.exceptions import NotARepositoryError
from commitor.git.repository import CommitResult
from commitor.git.status import StagedStatus
from commitor.llm.base import BaseLLMProvider, LLMResult
from commitor.models import ChangeKind, ChangeSet, CommitType, FileChange


SAMPLE_AUTH_DIFF = """diff --git a/src/auth.ts b/src/auth.ts
new file mode 100644
index 0000000..e69de29
--- /dev/null
+++ b/src/auth.ts
@@ -0,0 +1,5 @@
+export function login(user: string) {
+  return issueToken(user);
+}
+
+export const logout = () => revokeToken();
"""


class FakeRepository:
    """In-memory repository for builder, detector and generator tests."""

    def __init__(
        self,
        status: Optional[StagedStatus] = None,
        rows: Optional[list[NumstatRow]] = None,
        diffs: Optional[dict] = None,
        branch: str = "main",
        log: Optional[list[str]] = None,
        root: Optional[Path] = None,
        is_repo: bool = True,
    ):
        self._status = status or StagedStatus()
        self._rows = rows or []
        self._diffs = diffs or {}
        self._branch = branch
        self._log = log or []
        self._root = root
        self._is_repo = is_repo
        self.diff_requests = []
        self.commits = []

    def is_repository(self) -> bool:
        return self._is_repo

    def repo_root(self) -> Path:
        if not self._is_repo or self._root is None:
            raise NotARepositoryError("Not a git repository")
        return self._root

    def current_branch(self) -> str:
        return self._branch

    def status(self) -> StagedStatus:
        return self._status

    def diff_numstat(self) -> list[NumstatRow]:
        return list(self._rows)

    def diff_text(self, path: str, old_path: Optional[str] = None) -> str:
        self.diff_requests.append((path, old_path))
        diff = self._diffs.get(path, "")
        if isinstance(diff, Exception):
            raise diff
        return diff

    def recent_log(self, n: int = 25) -> list[str]:
        if isinstance(self._log, Exception):
            raise self._log
        return self._log[:n]

    def commit(self, message: str) -> CommitResult:
        self.commits.append(message)
        return CommitResult(hash="abc1234", branch=self._branch, message=message)


class FakeProvider(BaseLLMProvider):
    """Provider that replays queued responses or raises queued exceptions."""

    display_name = "Fake"

    def __init__(self, responses=None):
        super().__init__(
            model="fake-model",
            api_key_env_var="FAKE_API_KEY",
            max_tokens=100,
            temperature=0.0,
            api_key="fake-key",
        )
        self.responses = list(responses or [])
        self.calls = []

    def _complete(self, system_prompt: str, user_prompt: str, max_tokens: int) -> LLMResult:
        self.calls.append((system_prompt, user_prompt, max_tokens))
        response = self.responses.pop(0) if self.responses else ""
        if isinstance(response, BaseException):
            raise response
        return LLMResult(text=response, model=self.model, input_tokens=10, output_tokens=5)


class StatusError(Exception):
    """SDK-style exception carrying an HTTP status code."""

    def __init__(self, status_code: int, message: str = "request failed"):
        super().__init__(message)
        self.status_code = status_code


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def mock_repo_root(temp_dir):
    """Create a mock git repository root directory."""
    git_dir = temp_dir / ".git"
    git_dir.mkdir()
    return temp_dir


@pytest.fixture
def global_dir(temp_dir, mocker):
    """Point ~/.commitor at a temporary directory."""
    config_dir = temp_dir / ".commitor"
    mocker.patch("commitor.global_config._CONFIG_DIR", config_dir)
    return config_dir


@pytest.fixture
def sample_diff():
    """Unified diff for a newly added auth module."""
    return SAMPLE_AUTH_DIFF


@pytest.fixture
def auth_repository(sample_diff, mock_repo_root):
    """Repository with a single newly added src/auth.ts staged."""
    return FakeRepository(
        status=StagedStatus(branch="main", created=["src/auth.ts"]),
        rows=[NumstatRow(additions=5, deletions=0, path="src/auth.ts")],
        diffs={"src/auth.ts": sample_diff},
        root=mock_repo_root,
    )


@pytest.fixture
def sample_change_set(sample_diff):
    """Change set matching auth_repository."""
    return ChangeSet(
        files=(
            FileChange(
                path="src/auth.ts",
                kind=ChangeKind.ADDED,
                additions=5,
                deletions=0,
                diff=sample_diff,
            ),
        ),
        branch="main",
        commit_type=CommitType.FEAT,
    )


@pytest.fixture
def structured_response():
    """Raw provider response that honors the sentinel format."""
    return (
        "<<TITLE>>\n"
        "feat(auth): add login and logout helpers\n"
        "<<TITLE_END>>\n"
        "<<BODY>>\n"
        "- Issue a token on login\n"
        "\n"
        "- Revoke the token on logout   \n"
        "<<BODY_END>>"
    )


@pytest.fixture
def mock_git_commands(mocker):
    """Mock subprocess.run for git commands."""
    return mocker.patch("subprocess.run")


@pytest.fixture
def make_repository():
    """Factory for in-memory repositories."""
    return FakeRepository


@pytest.fixture
def make_provider():
    """Factory for providers replaying queued responses."""
    return FakeProvider


@pytest.fixture
def status_error():
    """Factory for SDK-style exceptions with an HTTP status."""
    return StatusError
