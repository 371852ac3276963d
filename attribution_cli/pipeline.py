from typing import List, Optional, Sequence, Tuple

from attribution_cli.detectors.identity import ClassifierConfig, classify_commit
from attribution_cli.detectors.scoring import AttributionAggregator
from attribution_cli.detectors.volume import CHANGED, parse_numstat
from attribution_cli.models import CommitDetail, Report


def resolve_range(history, base_ref: str, head_ref: str) -> Tuple[str, str, List[str]]:
    """Full base/head hashes and the commits in base..head (newest first)."""
    history.ensure_full_history()
    history.ensure_available(base_ref)
    base_sha = history.resolve(base_ref)
    head_sha = history.resolve(head_ref)
    return base_sha, head_sha, history.list_range(base_sha, head_sha)


def collect_details(history, commits: Sequence[str], classifier: ClassifierConfig,
                    volume_mode: str = CHANGED) -> Tuple[CommitDetail, ...]:
    details = []
    for sha in commits:
        info = history.commit_info(sha)
        volume = parse_numstat(history.numstat(sha), volume_mode)
        details.append(CommitDetail(
            sha=info.sha,
            author=info.author_display,
            volume=volume,
            label=classify_commit(info, classifier),
        ))
    return tuple(details)


def build_report(base_sha: str, head_sha: str, details: Sequence[CommitDetail],
                 declared_percent: Optional[int], volume_mode: str = CHANGED) -> Report:
    totals = AttributionAggregator().compute((d.label, d.volume) for d in details)
    return Report(
        base_sha=base_sha,
        head_sha=head_sha,
        totals=totals,
        declared_percent=declared_percent,
        details=tuple(details),
        volume_mode=volume_mode,
    )
