"""
Commit Identity Classifier
──────────────────────────
Labels a commit AI or Human. Rules, first match wins:

  1. marker  : a standalone ``AI: true`` line in the commit message
  2. identity: an AI/bot pattern matches author or committer name/email
  3. default : Human

The pattern set is built once (defaults + optional extension file, one regex
per line) and handed to the classifier as an immutable ``ClassifierConfig``.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Tuple, Union

from attribution_cli.models import AI, HUMAN, CommitInfo
from attribution_cli.ui import warn

DEFAULT_AI_PATTERNS = (
    r"codex",
    r"copilot",
    r"chatgpt",
    r"openai",
    r"\[bot\]",
)

_AI_MARKER = re.compile(r"^[ \t]*AI[ \t]*:[ \t]*true[ \t\r]*$", re.IGNORECASE | re.MULTILINE)


@dataclass(frozen=True)
class ClassifierConfig:
    patterns: Tuple["re.Pattern[str]", ...]

    @classmethod
    def from_sources(cls, extra_lines: Iterable[str] = ()) -> "ClassifierConfig":
        compiled = [re.compile(p, re.IGNORECASE) for p in DEFAULT_AI_PATTERNS]
        for line in extra_lines:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            try:
                compiled.append(re.compile(line, re.IGNORECASE))
            except re.error as e:
                warn(f"skipping invalid AI author pattern {line!r}: {e}")
        return cls(patterns=tuple(compiled))


def load_classifier_config(patterns_file: Optional[Union[str, Path]] = None) -> ClassifierConfig:
    """Default patterns plus the extension file, when it exists."""
    if patterns_file is None:
        return ClassifierConfig.from_sources()
    path = Path(patterns_file)
    if not path.is_file():
        return ClassifierConfig.from_sources()
    try:
        raw_lines = path.read_bytes().splitlines()
    except OSError as e:
        warn(f"cannot read AI author patterns from {path}: {e}")
        return ClassifierConfig.from_sources()

    lines = []
    for number, raw in enumerate(raw_lines, start=1):
        try:
            lines.append(raw.decode("utf-8-sig"))
        except UnicodeDecodeError:
            warn(f"skipping undecodable line {number} in {path}")
    return ClassifierConfig.from_sources(lines)


def has_ai_marker(message: str) -> bool:
    return bool(message) and _AI_MARKER.search(message) is not None


def matches_ai_identity(commit: CommitInfo, config: ClassifierConfig) -> bool:
    return any(
        pattern.search(value)
        for pattern in config.patterns
        for value in commit.identities
        if value
    )


def classify_commit(commit: CommitInfo, config: ClassifierConfig) -> str:
    if has_ai_marker(commit.message):
        return AI
    if matches_ai_identity(commit, config):
        return AI
    return HUMAN
