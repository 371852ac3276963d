"""
Change Volume Extractor
───────────────────────
Turns ``git show --numstat`` output into a single line count.

  changed: added + deleted (canonical)
  added:   added lines only (legacy, deprecated)

Binary files report ``-`` instead of counts and contribute zero.
"""

import re

CHANGED = "changed"
ADDED = "added"
VOLUME_MODES = (CHANGED, ADDED)

_NUMSTAT_LINE = re.compile(r"^(\d+|-)\s+(\d+|-)\s+")


def _count(field: str) -> int:
    return 0 if field == "-" else int(field)


def parse_numstat(output: str, mode: str = CHANGED) -> int:
    if mode not in VOLUME_MODES:
        raise ValueError(f"Unknown volume mode {mode!r}; expected one of {', '.join(VOLUME_MODES)}")
    if not output:
        return 0

    volume = 0
    for line in output.splitlines():
        m = _NUMSTAT_LINE.match(line)
        if not m:
            continue
        volume += _count(m.group(1))
        if mode == CHANGED:
            volume += _count(m.group(2))
    return volume
