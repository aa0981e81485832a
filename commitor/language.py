"""Commit message language detection.

Scores text sources (the project readme and recent commit messages) for
lexical signals of a target language against another language and resolves
the preferred language when the evidence is strong enough.

Each source is scored as 2 points per target-language character plus 1 point
per whole-word marker hit. Scores from all sources are summed. The result is
undecided when the total is below ``min_score``, when the scores tie, or when
the normalized difference |a - b| / (a + b) is below ``min_confidence``.
"""

import logging
import re
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Optional, Sequence

from commitor.git.exceptions import GitError
from commitor.git.repository import Repository

logger = logging.getLogger(__name__)

CHARACTER_WEIGHT = 2
WORD_WEIGHT = 1

README_CANDIDATES = ("README.md", "README", "readme.md", "README.rst", "README.txt")

SOURCE_README = "readme"
SOURCE_COMMITS = "commits"


@dataclass(frozen=True)
class LanguageProfile:
    """Lexical markers for one language."""

    code: str
    name: str
    characters: tuple[str, ...] = ()
    words: tuple[str, ...] = ()


TURKISH = LanguageProfile(
    code="tr",
    name="Turkish",
    characters=("ç", "ğ", "ı", "ö", "ş", "ü", "Ç", "Ğ", "İ", "Ö", "Ş", "Ü"),
    words=("ve", "bir", "olarak", "ile", "için", "değil", "güncelle", "ekle", "kaldır"),
)

ENGLISH = LanguageProfile(
    code="en",
    name="English",
    words=("the", "and", "for", "with", "update", "add", "remove", "fix", "refactor"),
)


@dataclass(frozen=True)
class LanguageThresholds:
    """Minimum evidence required to decide on a language."""

    min_score: int = 5
    min_confidence: float = 0.2


DEFAULT_THRESHOLDS = LanguageThresholds()


@dataclass(frozen=True)
class LanguageScore:
    """Scores for the target and the other language."""

    target: int = 0
    other: int = 0

    @property
    def total(self) -> int:
        return self.target + self.other

    def __add__(self, other: "LanguageScore") -> "LanguageScore":
        return LanguageScore(self.target + other.target, self.other + other.other)


@dataclass(frozen=True)
class SourceDetail:
    """Detection outcome for a single source."""

    source: str
    language: Optional[str]
    confidence: float
    score: LanguageScore


@dataclass(frozen=True)
class LanguageDetection:
    """Combined detection outcome.

    Attributes:
        language: The resolved language code, or None when undecided.
        confidence: Normalized score difference in [0, 1].
        details: Per-source outcomes.
    """

    language: Optional[str]
    confidence: float
    details: list[SourceDetail] = field(default_factory=list)


@lru_cache(maxsize=None)
def _word_pattern(word: str) -> re.Pattern:
    return re.compile(rf"\b{re.escape(word)}\b")


def count_word(text: str, word: str) -> int:
    """Count whole-word occurrences of word in text."""
    return len(_word_pattern(word).findall(text))


def _profile_score(text: str, lowered: str, profile: LanguageProfile) -> int:
    score = sum(text.count(char) * CHARACTER_WEIGHT for char in profile.characters)
    score += sum(count_word(lowered, word) * WORD_WEIGHT for word in profile.words)
    return score


def score_text(
    text: str,
    target: LanguageProfile = TURKISH,
    other: LanguageProfile = ENGLISH,
) -> LanguageScore:
    """Score a text for the target language against the other language.

    Characters are matched on the original text; words are matched on the
    lower-cased text.

    Args:
        text: The text to score.
        target: The language being detected.
        other: The language it is compared against.

    Returns:
        The two scores.
    """
    if not text:
        return LanguageScore()
    lowered = text.lower()
    return LanguageScore(
        target=_profile_score(text, lowered, target),
        other=_profile_score(text, lowered, other),
    )


def calculate_confidence(
    score: LanguageScore,
    thresholds: LanguageThresholds = DEFAULT_THRESHOLDS,
) -> float:
    """Normalized difference between the two scores.

    Returns 0 when the total is below the absolute threshold, so a tiny
    sample never reports high confidence.
    """
    total = score.total
    if total == 0 or total < thresholds.min_score:
        return 0.0
    return abs(score.target - score.other) / total


def resolve_language(
    score: LanguageScore,
    thresholds: LanguageThresholds = DEFAULT_THRESHOLDS,
    target: LanguageProfile = TURKISH,
    other: LanguageProfile = ENGLISH,
) -> Optional[str]:
    """Pick a language code from a score, or None when undecided."""
    total = score.total
    if total < thresholds.min_score:
        return None
    diff = abs(score.target - score.other)
    if diff == 0:
        return None
    if diff / total < thresholds.min_confidence:
        return None
    return target.code if score.target > score.other else other.code


def detect_language(
    sources: Iterable[tuple[str, str]],
    thresholds: LanguageThresholds = DEFAULT_THRESHOLDS,
    target: LanguageProfile = TURKISH,
    other: LanguageProfile = ENGLISH,
) -> LanguageDetection:
    """Detect the language from named text sources.

    Args:
        sources: (source name, text) pairs.
        thresholds: Minimum evidence required to decide.
        target: The language being detected.
        other: The language it is compared against.

    Returns:
        The combined detection with per-source details.
    """
    details = []
    total = LanguageScore()
    for name, text in sources:
        score = score_text(text, target, other)
        total = total + score
        details.append(
            SourceDetail(
                source=name,
                language=resolve_language(score, thresholds, target, other),
                confidence=calculate_confidence(score, thresholds),
                score=score,
            )
        )

    language = resolve_language(total, thresholds, target, other)
    confidence = calculate_confidence(total, thresholds)
    logger.debug(
        "Language scores %s=%d %s=%d -> %s (%.2f)",
        target.code, total.target, other.code, total.other, language, confidence,
    )
    return LanguageDetection(language=language, confidence=confidence, details=details)


def read_readme(directory: Path, candidates: Sequence[str] = README_CANDIDATES) -> str:
    """Read the first readme-like file found in directory.

    Returns:
        The file content, or "" if none exists or it cannot be read.
    """
    for name in candidates:
        path = directory / name
        if not path.is_file():
            continue
        try:
            return path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.debug("Could not read %s: %s", path, e)
            return ""
    return ""


class LanguageDetector:
    """Gathers readme and commit history text and detects their language."""

    def __init__(
        self,
        repository: Repository,
        readme_dir: Optional[Path] = None,
        thresholds: LanguageThresholds = DEFAULT_THRESHOLDS,
        commit_window: int = 25,
    ):
        """Initialize the detector.

        Args:
            repository: Repository used for the recent commit log.
            readme_dir: Directory holding the readme. Defaults to the repo root.
            thresholds: Minimum evidence required to decide.
            commit_window: Number of recent commit messages to score.
        """
        self.repository = repository
        self.readme_dir = readme_dir
        self.thresholds = thresholds
        self.commit_window = commit_window

    def _readme_text(self) -> str:
        directory = self.readme_dir
        if directory is None:
            try:
                directory = self.repository.repo_root()
            except GitError:
                return ""
        return read_readme(directory)

    def _commit_text(self) -> str:
        try:
            return "\n".join(self.repository.recent_log(self.commit_window))
        except GitError as e:
            logger.debug("Could not read commit log: %s", e)
            return ""

    def detect(self) -> LanguageDetection:
        """Detect the language from the readme and recent commits."""
        return detect_language(
            [(SOURCE_README, self._readme_text()), (SOURCE_COMMITS, self._commit_text())],
            self.thresholds,
        )
