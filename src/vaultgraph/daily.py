"""Daily notes: one note per calendar day under a dedicated folder.

A missing daily note is synthesized from a small skeleton::

    ---
    created: '2024-01-15T00:00:00+00:00'
    tags:
    - daily-note
    ---
    # 2024-01-15

    ## Tasks

    - [ ]

    ## Notes
"""

from __future__ import annotations

import re
from datetime import date, datetime, time, timezone
from typing import Any

from vaultgraph.errors import InvalidInputError

DAILY_NOTE_TAG = "daily-note"

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_day(text: str | None) -> date:
    """Parse a ``YYYY-MM-DD`` string; ``None`` means today."""
    if text is None:
        return date.today()
    if not _DATE_RE.match(text):
        raise InvalidInputError("Invalid date format. Expected YYYY-MM-DD", field="date", value=text)
    try:
        return date.fromisoformat(text)
    except ValueError as exc:
        raise InvalidInputError(f"Invalid date: {text}", field="date", value=text) from exc


def daily_note_path(day: date, folder: str = "Daily Notes") -> str:
    return f"{folder}/{day.isoformat()}.md"


def daily_note_template(day: date) -> tuple[str, dict[str, Any]]:
    """Return ``(body, frontmatter)`` for a fresh daily note."""
    stamp = day.isoformat()
    body = f"# {stamp}\n\n## Tasks\n\n- [ ] \n\n## Notes\n\n"
    frontmatter: dict[str, Any] = {
        "created": datetime.combine(day, time(), tzinfo=timezone.utc).isoformat(),
        "tags": [DAILY_NOTE_TAG],
    }
    return body, frontmatter
