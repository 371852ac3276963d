import git
from typing import List

from attribution_cli.errors import RevisionError
from attribution_cli.models import CommitInfo
from attribution_cli.ui import warn


def get_repo(path: str = "."):
    try:
        return git.Repo(path, search_parent_directories=True)
    except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError):
        return None


class GitHistory:
    """Read-only view of the local clone used by the attribution pipeline."""

    def __init__(self, repo: git.Repo, remote: str = "origin"):
        self.repo = repo
        self.remote = remote

    @classmethod
    def open(cls, path: str = ".") -> "GitHistory":
        repo = get_repo(path)
        if repo is None:
            raise RevisionError(f"'{path}' is not a valid Git repository.")
        return cls(repo)

    @property
    def working_dir(self) -> str:
        return self.repo.working_tree_dir or self.repo.git_dir

    def has_commit(self, ref: str) -> bool:
        try:
            self.repo.git.cat_file("-e", f"{ref}^{{commit}}")
            return True
        except git.exc.GitCommandError:
            return False

    def is_shallow(self) -> bool:
        return self.repo.git.rev_parse("--is-shallow-repository").strip() == "true"

    def ensure_full_history(self):
        """Unshallow the clone; a range walk stops silently at the shallow boundary."""
        if not self.is_shallow():
            return
        try:
            self.repo.git.fetch("--unshallow", "--no-tags", self.remote)
        except git.exc.GitCommandError as e:
            warn(f"could not unshallow from {self.remote}: {e.stderr.strip() if e.stderr else e}")
        if self.is_shallow():
            raise RevisionError(
                "Repository is a shallow clone and the missing history could not be fetched; "
                "check out with fetch-depth: 0."
            )

    def ensure_available(self, ref: str):
        """Fetch ``ref`` from the remote when it is not in the local object store."""
        if self.has_commit(ref):
            return
        target = ref
        prefix = f"{self.remote}/"
        if target.startswith(prefix):
            target = target[len(prefix):]
        try:
            self.repo.git.fetch("--no-tags", self.remote, target)
        except git.exc.GitCommandError as e:
            warn(f"could not fetch {ref} from {self.remote}: {e.stderr.strip() if e.stderr else e}")

    def resolve(self, ref: str) -> str:
        try:
            return self.repo.git.rev_parse("--verify", f"{ref}^{{commit}}").strip()
        except git.exc.GitCommandError as e:
            raise RevisionError(f"Cannot resolve revision '{ref}'.") from e

    def list_range(self, base: str, head: str) -> List[str]:
        try:
            out = self.repo.git.rev_list(f"{base}..{head}")
        except git.exc.GitCommandError as e:
            # shallow clones at the boundary commit end up here
            raise RevisionError(f"Failed to list PR commits {base[:7]}..{head[:7]}: {e}") from e
        return [line.strip() for line in out.splitlines() if line.strip()]

    def commit_info(self, sha: str) -> CommitInfo:
        try:
            commit = self.repo.commit(sha)
        except (ValueError, git.exc.BadName, git.exc.GitCommandError) as e:
            raise RevisionError(f"Cannot read commit {sha}: {e}") from e
        message = commit.message
        if isinstance(message, bytes):
            message = message.decode("utf-8", errors="replace")
        return CommitInfo(
            sha=commit.hexsha,
            author_name=commit.author.name or "",
            author_email=commit.author.email or "",
            committer_name=commit.committer.name or "",
            committer_email=commit.committer.email or "",
            message=message,
        )

    def numstat(self, sha: str) -> str:
        try:
            return self.repo.git.show("--numstat", "--format=", sha)
        except git.exc.GitCommandError as e:
            raise RevisionError(f"Cannot read diff statistics for {sha}: {e}") from e
