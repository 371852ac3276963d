"""
Declared AI Percent
───────────────────
The PR author states how much of the change was AI-assisted with a line such as::

    **Declared-AI-Percent**: 40

The label tolerates bold/italic/code markup (with the colon inside or outside
it), any dash glyph, underscores or spaces between the words, and an optional
trailing ``%``. An ``Estimated % ... 40`` field is accepted as a fallback.

Lookup order: payload body -> one API refetch of the body -> give up. Only
``validate_declared`` decides whether the run may continue.
"""

import re
from typing import Callable, Iterable, Optional

import requests

from attribution_cli.errors import DeclarationError
from attribution_cli.ui import info, warn

_SEP = r"[\s\-_\u2010-\u2015\u2212]*"
_MARKUP = r"(?:\*\*|__|\*|_|`)?"

_DECLARED = re.compile(
    _MARKUP + r"\s*Declared" + _SEP + r"AI" + _SEP + r"Percent(?:age)?\s*" + _MARKUP
    + r"\s*:\s*" + _MARKUP + r"\s*(\d+)(?!\d)\s*%?",
    re.IGNORECASE,
)
_ESTIMATED = re.compile(r"Estimated\s*%[^0-9]*(\d+)", re.IGNORECASE)

EXPECTED_FORMAT = "**Declared-AI-Percent**: 60"

Step = Callable[[], Optional[int]]


def parse_declared(body: Optional[str]) -> Optional[int]:
    """Declared percentage from free text, or None when no field is present."""
    if not body:
        return None
    m = _DECLARED.search(body) or _ESTIMATED.search(body)
    if not m:
        return None
    return int(m.group(1))


def fetch_pr_body(api_url: str, owner: str, repo: str, number: int, token: str,
                  timeout: float = 10.0) -> Optional[str]:
    """Current PR body from the REST API. Failures are warnings and return None."""
    url = f"{api_url.rstrip('/')}/repos/{owner}/{repo}/pulls/{number}"
    headers = {
        "Authorization": f"Bearer {token}",
        "Accept": "application/vnd.github+json",
    }
    try:
        r = requests.get(url, headers=headers, timeout=timeout)
        r.raise_for_status()
        payload = r.json()
    except requests.Timeout:
        warn(f"refetch PR body timed out after {timeout:g}s")
        return None
    except (requests.RequestException, ValueError) as e:
        warn(f"refetch PR body failed: {e}")
        return None
    if not isinstance(payload, dict):
        warn("refetch PR body failed: unexpected response shape")
        return None
    return (payload.get("body") or "").strip()


def first_found(steps: Iterable[Step]) -> Optional[int]:
    """Run fallible lookups in order; the first non-None result wins."""
    for step in steps:
        value = step()
        if value is not None:
            return value
    return None


def declaration_steps(body: Optional[str], settings, pr_number: Optional[int]) -> list:
    steps = [lambda: parse_declared((body or "").strip())]
    coords = settings.repo_coordinates
    if settings.token and coords and pr_number is not None:
        owner, repo = coords

        def refetch() -> Optional[int]:
            info(f"Declared AI% not found in event payload; refetching PR #{pr_number} body")
            fresh = fetch_pr_body(settings.api_url, owner, repo, pr_number,
                                  settings.token, timeout=settings.api_timeout)
            return parse_declared(fresh)

        steps.append(refetch)
    return steps


def validate_declared(value: Optional[int]) -> int:
    if value is None or not 0 <= value <= 100:
        raise DeclarationError(
            "Declared AI% is missing or invalid. Provide a single integer 0..100 in the PR body, e.g.:\n"
            + EXPECTED_FORMAT
        )
    return value


def resolve_declared(body: Optional[str], settings, pr_number: Optional[int]) -> int:
    return validate_declared(first_found(declaration_steps(body, settings, pr_number)))
