"""Tests for commitor.git.changeset module."""

import shutil
import subprocess
import time

import pytest

from commitor.classifier import ClassifierPolicy
from commitor.git import (
    ChangeSetBuilder,
    GitError,
    GitRepository,
    NoStagedChangesError,
    NotARepositoryError,
    NumstatRow,
    RenamedPath,
    StagedStatus,
    build_change_set,
)
from commitor.models import ChangeKind, CommitType


class TestChangeSetBuilder:
    """Tests for ChangeSetBuilder class."""

    def test_added_file(self, auth_repository, sample_diff):
        """Test a newly added file becomes a feat change set."""
        change_set = ChangeSetBuilder(auth_repository).build()

        assert change_set.branch == "main"
        assert change_set.commit_type == CommitType.FEAT
        assert len(change_set.files) == 1
        file = change_set.files[0]
        assert file.path == "src/auth.ts"
        assert file.kind == ChangeKind.ADDED
        assert file.additions == 5
        assert file.deletions == 0
        assert file.diff == sample_diff
        assert file.old_path is None

    def test_renamed_file(self, make_repository):
        repository = make_repository(
            status=StagedStatus(renamed=[RenamedPath(old="src/old.py", new="src/new.py")]),
            rows=[NumstatRow(additions=10, deletions=10, path="src/new.py")],
        )

        change_set = ChangeSetBuilder(repository).build()

        file = change_set.files[0]
        assert file.kind == ChangeKind.RENAMED
        assert file.old_path == "src/old.py"
        assert repository.diff_requests == [("src/new.py", "src/old.py")]
        assert change_set.commit_type == CommitType.REFACTOR

    def test_deleted_and_modified_kinds(self, make_repository):
        repository = make_repository(
            status=StagedStatus(staged=["src/app.py"], deleted=["src/legacy.py"]),
            rows=[
                NumstatRow(additions=1, deletions=3, path="src/app.py"),
                NumstatRow(additions=0, deletions=40, path="src/legacy.py"),
            ],
        )

        change_set = ChangeSetBuilder(repository).build()

        assert [f.kind for f in change_set.files] == [ChangeKind.MODIFIED, ChangeKind.DELETED]
        assert change_set.commit_type == CommitType.FIX

    def test_only_lock_file_staged(self, make_repository):
        """Test a commit staging only a lock file still builds."""
        repository = make_repository(
            status=StagedStatus(staged=["package-lock.json"]),
            rows=[NumstatRow(additions=40, deletions=12, path="package-lock.json")],
            diffs={"package-lock.json": "+lockfile churn"},
        )

        change_set = ChangeSetBuilder(repository).build()

        assert change_set.paths == ["package-lock.json"]
        assert change_set.files[0].kind == ChangeKind.MODIFIED
        assert change_set.files[0].diff == "+lockfile churn"

    def test_staged_path_missing_from_numstat(self, make_repository):
        repository = make_repository(
            status=StagedStatus(staged=["src/app.py"], created=["empty.txt"]),
            rows=[NumstatRow(additions=2, deletions=1, path="src/app.py")],
        )

        change_set = ChangeSetBuilder(repository).build()

        assert change_set.paths == ["src/app.py", "empty.txt"]
        empty = change_set.files[1]
        assert empty.kind == ChangeKind.ADDED
        assert (empty.additions, empty.deletions) == (0, 0)

    def test_nothing_staged(self, make_repository):
        with pytest.raises(NoStagedChangesError):
            ChangeSetBuilder(make_repository()).build()

    def test_not_a_repository(self, make_repository):
        with pytest.raises(NotARepositoryError):
            ChangeSetBuilder(make_repository(is_repo=False)).build()

    def test_diff_failure_degrades_to_empty(self, make_repository):
        repository = make_repository(
            status=StagedStatus(staged=["a.py", "b.py"]),
            rows=[
                NumstatRow(additions=5, deletions=1, path="a.py"),
                NumstatRow(additions=5, deletions=1, path="b.py"),
            ],
            diffs={"a.py": GitError("boom"), "b.py": "diff b"},
        )

        change_set = ChangeSetBuilder(repository).build()

        assert [f.diff for f in change_set.files] == ["", "diff b"]

    def test_preserves_git_order(self, make_repository):
        paths = [f"src/module_{i}.py" for i in range(12)]
        repository = make_repository(
            status=StagedStatus(staged=paths),
            rows=[NumstatRow(additions=1, deletions=1, path=p) for p in paths],
            diffs={p: f"diff {p}" for p in paths},
        )
        fetch = repository.diff_text
        finished = []

        def slow_diff_text(path, old_path=None):
            # Earlier paths take longest
            time.sleep(0.01 * (len(paths) - paths.index(path)))
            finished.append(path)
            return fetch(path, old_path)

        repository.diff_text = slow_diff_text

        change_set = ChangeSetBuilder(repository, max_workers=4).build()

        assert finished != paths
        assert change_set.paths == paths
        assert [f.diff for f in change_set.files] == [f"diff {p}" for p in paths]

    def test_policy_is_used(self, make_repository):
        repository = make_repository(
            status=StagedStatus(staged=["src/app.py"]),
            rows=[NumstatRow(additions=15, deletions=10, path="src/app.py")],
        )

        default = ChangeSetBuilder(repository).build()
        widened = ChangeSetBuilder(
            repository, policy=ClassifierPolicy(refactor_ratio_min=0.5, refactor_ratio_max=2.0)
        ).build()

        assert default.commit_type == CommitType.FIX
        assert widened.commit_type == CommitType.REFACTOR


def test_build_change_set(auth_repository):
    """Test the convenience wrapper."""
    change_set = build_change_set(auth_repository)
    assert change_set.paths == ["src/auth.ts"]


requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


@pytest.fixture
def git_repo(temp_dir):
    """Create an empty git repository."""
    subprocess.run(["git", "init", "-q"], cwd=temp_dir, check=True)
    return temp_dir


def _stage(repo, relative_path, content):
    path = repo / relative_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    subprocess.run(["git", "add", "--", relative_path], cwd=repo, check=True)


@requires_git
class TestChangeSetBuilderWithGit:
    """Tests for ChangeSetBuilder against a real git repository."""

    def test_build_from_subdirectory(self, git_repo):
        """Test diffs are found when running below the repository root."""
        _stage(git_repo, "src/app.py", "print('hello')\n")

        change_set = ChangeSetBuilder(GitRepository(git_repo / "src")).build()

        assert change_set.paths == ["src/app.py"]
        assert "+print('hello')" in change_set.files[0].diff

    def test_non_ascii_path(self, git_repo):
        _stage(git_repo, "güncelleme.md", "# Başlık\n")

        change_set = ChangeSetBuilder(GitRepository(git_repo)).build()

        file = change_set.files[0]
        assert file.path == "güncelleme.md"
        assert file.kind == ChangeKind.ADDED
        assert file.additions == 1
        assert "+# Başlık" in file.diff
        assert change_set.commit_type == CommitType.DOCS
