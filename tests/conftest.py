"""Shared fixtures: an in-memory history provider standing in for GitHistory."""

import pytest

from attribution_cli.errors import RevisionError
from attribution_cli.models import CommitInfo

BASE_SHA = "b" * 40
HEAD_SHA = "f" * 40


def make_commit(sha, author="Jane Doe", email="jane@example.com", message="Update code",
                committer=None, committer_email=None):
    return CommitInfo(
        sha=sha,
        author_name=author,
        author_email=email,
        committer_name=committer if committer is not None else author,
        committer_email=committer_email if committer_email is not None else email,
        message=message,
    )


def numstat(*rows):
    """numstat text from (added, deleted, path) rows; use '-' for binary files."""
    return "\n".join(f"{a}\t{d}\t{p}" for a, d, p in rows)


class FakeHistory:
    def __init__(self, commits=(), base=BASE_SHA, head=HEAD_SHA, fail_range=False, unknown=(),
                 shallow=False):
        # commits: sequence of (CommitInfo, numstat text), newest first
        self.commits = list(commits)
        self.base = base
        self.head = head
        self.fail_range = fail_range
        self.unknown = set(unknown)
        self.shallow = shallow
        self.ensured = []

    def ensure_full_history(self):
        if self.shallow:
            raise RevisionError("Repository is a shallow clone")

    def ensure_available(self, ref):
        self.ensured.append(ref)

    def resolve(self, ref):
        if ref in self.unknown:
            raise RevisionError(f"Cannot resolve revision '{ref}'.")
        if ref in ("HEAD", self.head):
            return self.head
        return self.base

    def list_range(self, base, head):
        if self.fail_range:
            raise RevisionError("Failed to list PR commits")
        return [info.sha for info, _ in self.commits]

    def commit_info(self, sha):
        for info, _ in self.commits:
            if info.sha == sha:
                return info
        raise RevisionError(f"Cannot read commit {sha}")

    def numstat(self, sha):
        for info, stat in self.commits:
            if info.sha == sha:
                return stat
        raise RevisionError(f"Cannot read diff statistics for {sha}")


@pytest.fixture
def scenario_history():
    """10 Human + 5 AI (bot identity) + 5 AI (marker) lines."""
    return FakeHistory([
        (make_commit("3" * 40, message="Polish\n\nAI: true"), numstat((3, 2, "app.py"))),
        (make_commit("2" * 40, author="Copilot", email="copilot@users.noreply.github.com"),
         numstat((5, 0, "gen.py"))),
        (make_commit("1" * 40), numstat((8, 2, "main.py"))),
    ])
