"""Commit type classification from staged file changes.

The classifier is an ordered list of named predicates over the staged files.
The first predicate that matches decides the commit type; if none match the
type is feat. Every predicate is a pure function and can be tested on its own.
"""

import re
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Callable, Sequence

from commitor.models import ChangeKind, CommitType, FileChange


@dataclass(frozen=True)
class ClassifierPolicy:
    """Tunable thresholds for the classifier.

    Attributes:
        refactor_ratio_min: Lower bound (inclusive) of additions/deletions for refactor.
        refactor_ratio_max: Upper bound (inclusive) of additions/deletions for refactor.
        feat_growth_factor: A file counts as new functionality when its
            additions exceed this multiple of its deletions.
    """

    refactor_ratio_min: float = 0.8
    refactor_ratio_max: float = 1.2
    feat_growth_factor: float = 2.0


DEFAULT_POLICY = ClassifierPolicy()

DOC_EXTENSIONS = {".md", ".rst", ".txt", ".adoc"}
DOC_DIRS = {"doc", "docs", "documentation"}

TEST_DIRS = {"test", "tests", "__tests__", "spec", "specs"}
TEST_FILE_PATTERN = re.compile(
    r"(^test_|_test\.|\.test\.|\.spec\.|_spec\.|^tests?\.py$|^conftest\.py$)"
)
# FooTest.java, FooTests.cs, FooSpec.scala; matched case-sensitively
CAMEL_TEST_PATTERN = re.compile(r"[a-z0-9](Tests?|Spec)\.")

STYLE_EXTENSIONS = {".css", ".scss", ".sass", ".less", ".styl"}
STYLE_MARKERS = ("style", "theme")

TOOLING_FILE_PATTERN = re.compile(
    r"^(package\.json|tsconfig|webpack|vite|rollup|babel|eslint|\.eslintrc|prettier|\.prettierrc"
    r"|pyproject\.toml|setup\.py|setup\.cfg|requirements.*\.txt|tox\.ini|makefile|dockerfile"
    r"|docker-compose|\.pre-commit-config|\.gitignore|\.editorconfig)"
)

Predicate = Callable[[Sequence[FileChange], ClassifierPolicy], bool]


def _path_parts(path: str) -> tuple[list[str], str]:
    """Split a lower-cased path into directory names and basename."""
    pure = PurePosixPath(path.lower())
    return list(pure.parts[:-1]), pure.name


def is_doc_path(path: str) -> bool:
    """Check if a path is documentation-like."""
    dirs, name = _path_parts(path)
    if name.startswith("readme"):
        return True
    # requirements.txt and friends are tooling, not prose
    if TOOLING_FILE_PATTERN.match(name):
        return False
    if PurePosixPath(name).suffix in DOC_EXTENSIONS:
        return True
    return any(d in DOC_DIRS for d in dirs)


def is_test_path(path: str) -> bool:
    """Check if a path follows test or spec naming."""
    dirs, name = _path_parts(path)
    if any(d in TEST_DIRS for d in dirs):
        return True
    if CAMEL_TEST_PATTERN.search(PurePosixPath(path).name):
        return True
    return bool(TEST_FILE_PATTERN.search(name))


def is_style_path(path: str) -> bool:
    """Check if a path is a stylesheet or theme file."""
    lowered = path.lower()
    if PurePosixPath(lowered).suffix in STYLE_EXTENSIONS:
        return True
    return any(marker in lowered for marker in STYLE_MARKERS)


def is_tooling_config_path(path: str) -> bool:
    """Check if a path is build or tooling configuration."""
    _, name = _path_parts(path)
    if TOOLING_FILE_PATTERN.match(name):
        return True
    return "config" in path.lower()


def is_documentation_only(files: Sequence[FileChange], policy: ClassifierPolicy) -> bool:
    return bool(files) and all(is_doc_path(f.path) for f in files)


def touches_tests(files: Sequence[FileChange], policy: ClassifierPolicy) -> bool:
    return any(is_test_path(f.path) for f in files)


def touches_styles(files: Sequence[FileChange], policy: ClassifierPolicy) -> bool:
    return any(is_style_path(f.path) for f in files)


def touches_tooling_config(files: Sequence[FileChange], policy: ClassifierPolicy) -> bool:
    return any(is_tooling_config_path(f.path) for f in files)


def adds_functionality(files: Sequence[FileChange], policy: ClassifierPolicy) -> bool:
    return any(
        f.kind == ChangeKind.ADDED or f.additions > f.deletions * policy.feat_growth_factor
        for f in files
    )


def is_balanced_rewrite(files: Sequence[FileChange], policy: ClassifierPolicy) -> bool:
    if not files:
        return False
    total_additions = sum(f.additions for f in files)
    total_deletions = sum(f.deletions for f in files)
    ratio = total_additions / (total_deletions or 1)
    return policy.refactor_ratio_min <= ratio <= policy.refactor_ratio_max


def removes_existing_code(files: Sequence[FileChange], policy: ClassifierPolicy) -> bool:
    return any(f.kind == ChangeKind.MODIFIED and f.deletions > 0 for f in files)


# Evaluated in order; first match wins
RULES: list[tuple[CommitType, Predicate]] = [
    (CommitType.DOCS, is_documentation_only),
    (CommitType.TEST, touches_tests),
    (CommitType.STYLE, touches_styles),
    (CommitType.CHORE, touches_tooling_config),
    (CommitType.FEAT, adds_functionality),
    (CommitType.REFACTOR, is_balanced_rewrite),
    (CommitType.FIX, removes_existing_code),
]

DEFAULT_COMMIT_TYPE = CommitType.FEAT


def classify(
    files: Sequence[FileChange],
    policy: ClassifierPolicy = DEFAULT_POLICY,
) -> CommitType:
    """Infer the commit type for a set of staged files.

    Args:
        files: The staged files.
        policy: Thresholds for the ratio-based rules.

    Returns:
        The commit type of the first matching rule, or feat.
    """
    for commit_type, predicate in RULES:
        if predicate(files, policy):
            return commit_type
    return DEFAULT_COMMIT_TYPE
