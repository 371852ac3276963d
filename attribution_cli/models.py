from dataclasses import dataclass, field
from typing import Optional, Tuple

AI = "AI"
HUMAN = "Human"


@dataclass(frozen=True)
class CommitInfo:
    sha: str
    author_name: str
    author_email: str
    committer_name: str
    committer_email: str
    message: str

    @property
    def author_display(self) -> str:
        return f"{self.author_name} <{self.author_email}>"

    @property
    def identities(self) -> Tuple[str, str, str, str]:
        return (self.author_name, self.author_email, self.committer_name, self.committer_email)


@dataclass(frozen=True)
class CommitDetail:
    """One row of the per-commit table."""

    sha: str
    author: str
    volume: int
    label: str

    @property
    def short_sha(self) -> str:
        return self.sha[:7]

    @property
    def is_ai(self) -> bool:
        return self.label == AI


@dataclass(frozen=True)
class AttributionTotals:
    ai_volume: int = 0
    human_volume: int = 0

    @property
    def total_volume(self) -> int:
        return self.ai_volume + self.human_volume

    @property
    def computed_percent(self) -> int:
        total = self.total_volume
        if total == 0:
            return 0
        # half-up rounding on integers, 12.5 -> 13
        return (200 * self.ai_volume + total) // (2 * total)


@dataclass(frozen=True)
class Report:
    base_sha: str
    head_sha: str
    totals: AttributionTotals
    declared_percent: Optional[int]
    details: Tuple[CommitDetail, ...] = field(default_factory=tuple)
    volume_mode: str = "changed"

    @property
    def computed_percent(self) -> int:
        return self.totals.computed_percent

    @property
    def final_percent(self) -> int:
        if self.declared_percent is None:
            return self.computed_percent
        return max(self.computed_percent, self.declared_percent)
