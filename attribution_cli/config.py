import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional, Tuple

from attribution_cli.detectors.volume import CHANGED, VOLUME_MODES
from attribution_cli.errors import CIEnvironmentError

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_PATTERNS_FILE = ".github/ai-authors.txt"
DEFAULT_API_TIMEOUT = 10.0


@dataclass(frozen=True)
class Settings:
    """Run configuration read from the CI environment (and a local .env, if any)."""

    event_path: Optional[str] = None
    env_file: Optional[str] = None
    repository: str = ""
    token: Optional[str] = None
    api_url: str = DEFAULT_API_URL
    base_ref: Optional[str] = None
    patterns_file: str = DEFAULT_PATTERNS_FILE
    volume_mode: str = CHANGED
    api_timeout: float = DEFAULT_API_TIMEOUT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        raw_timeout = env.get("ATTRIBUTION_API_TIMEOUT") or str(DEFAULT_API_TIMEOUT)
        try:
            timeout = float(raw_timeout)
        except ValueError as e:
            raise CIEnvironmentError(f"ATTRIBUTION_API_TIMEOUT must be a number, got {raw_timeout!r}.") from e
        settings = cls(
            event_path=env.get("GITHUB_EVENT_PATH") or None,
            env_file=env.get("GITHUB_ENV") or None,
            repository=env.get("GITHUB_REPOSITORY", ""),
            token=env.get("GITHUB_TOKEN") or None,
            api_url=(env.get("GITHUB_API_URL") or DEFAULT_API_URL).rstrip("/"),
            base_ref=env.get("GITHUB_BASE_REF") or None,
            patterns_file=env.get("ATTRIBUTION_PATTERNS_FILE") or DEFAULT_PATTERNS_FILE,
            volume_mode=(env.get("ATTRIBUTION_VOLUME_MODE") or CHANGED).lower(),
            api_timeout=timeout,
        )
        settings.validate()
        return settings

    def override(self, **changes) -> "Settings":
        """Copy with CLI overrides applied; ``None`` values keep the current setting."""
        settings = replace(self, **{k: v for k, v in changes.items() if v is not None})
        settings.validate()
        return settings

    def validate(self):
        if self.volume_mode not in VOLUME_MODES:
            raise CIEnvironmentError(
                f"Unknown volume mode {self.volume_mode!r}; expected one of {', '.join(VOLUME_MODES)}."
            )
        if self.api_timeout <= 0:
            raise CIEnvironmentError("The API timeout must be positive.")

    @property
    def repo_coordinates(self) -> Optional[Tuple[str, str]]:
        owner, _, name = self.repository.partition("/")
        if not owner or not name:
            return None
        return owner, name
