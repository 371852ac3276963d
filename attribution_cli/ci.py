import json
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from attribution_cli.errors import CIEnvironmentError

MD_VAR = "ATTRIBUTION_MD"
SUMMARY_VAR = "ATTRIBUTION_SUMMARY"


@dataclass(frozen=True)
class PullRequestEvent:
    number: Optional[int]
    body: str
    base_sha: Optional[str]
    head_sha: Optional[str]


def _object(pr: dict, key: str) -> dict:
    value = pr.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise CIEnvironmentError(f"pull_request.{key} must be an object.")
    return value


def _pr_number(value) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise CIEnvironmentError(f"pull_request.number must be an integer, got {value!r}.") from e


def read_event(event_path: Optional[str]) -> PullRequestEvent:
    if not event_path or not Path(event_path).is_file():
        raise CIEnvironmentError("GITHUB_EVENT_PATH is missing; run on pull_request.")
    try:
        event = json.loads(Path(event_path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise CIEnvironmentError(f"Cannot read event payload {event_path}: {e}") from e

    pr = event.get("pull_request") if isinstance(event, dict) else None
    if not isinstance(pr, dict):
        raise CIEnvironmentError("Expected pull_request payload.")

    base = _object(pr, "base")
    head = _object(pr, "head")
    body = pr.get("body") or ""
    if not isinstance(body, str):
        raise CIEnvironmentError("pull_request.body must be a string.")
    return PullRequestEvent(
        number=_pr_number(pr.get("number")),
        body=body,
        base_sha=base.get("sha") or None,
        head_sha=head.get("sha") or None,
    )


def base_reference(event: PullRequestEvent, base_ref: Optional[str]) -> str:
    if event.base_sha:
        return event.base_sha
    if base_ref:
        return f"origin/{base_ref}"
    return "HEAD~1"


def head_reference(event: PullRequestEvent) -> str:
    return event.head_sha or "HEAD"


def require_env_file(env_file: Optional[str]) -> Path:
    if not env_file:
        raise CIEnvironmentError("GITHUB_ENV missing.")
    return Path(env_file)


def _delimiter(value: str) -> str:
    while True:
        delimiter = f"ghadelimiter_{uuid.uuid4().hex}"
        if delimiter not in value:
            return delimiter


def format_env_entries(markdown: str, summary: str) -> str:
    """Multiline value as a heredoc block, summary as a plain NAME=value line."""
    if "\n" in summary or "\r" in summary:
        raise ValueError("The summary must be a single line")
    delimiter = _delimiter(markdown)
    return (
        f"{MD_VAR}<<{delimiter}\n{markdown}\n{delimiter}\n"
        f"{SUMMARY_VAR}={summary}\n"
    )


def export_to_env(env_file: Path, markdown: str, summary: str):
    entries = format_env_entries(markdown, summary)
    try:
        if env_file.is_file() and env_file.stat().st_size > 0:
            with open(env_file, "rb") as f:
                f.seek(-1, 2)
                if f.read(1) != b"\n":
                    entries = "\n" + entries
        with open(env_file, "a", encoding="utf-8") as f:
            f.write(entries)
    except OSError as e:
        raise CIEnvironmentError(f"Cannot write to GITHUB_ENV file {env_file}: {e}") from e
