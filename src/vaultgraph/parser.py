"""WikiLink, markdown-link, tag, heading, block-anchor and YAML-frontmatter parser.

Each extractor is an independent single pass over the body text; none of
them raise on malformed input.
"""

from __future__ import annotations

import os
import re
from datetime import datetime, timezone
from pathlib import Path, PurePosixPath
from typing import Any

import yaml

from vaultgraph.note import FrontmatterValue, Heading, Note, ParsedLink

# YAML front-matter block, only at the very start of the file
_FRONTMATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(?:---|(.*?)\r?\n---)[ \t]*(?:\r?\n|\Z)", re.DOTALL
)
# !?[[target#heading^block|display]]
_WIKILINK_RE = re.compile(
    r"!?\[\[([^\]|#^]+)(?:#([^\]|^]+))?(?:\^([^\]|]+))?(?:\|([^\]]+))?\]\]"
)
# !?[display](target)
_MDLINK_RE = re.compile(r"!?\[([^\]]*)\]\(([^)]+)\)")
# Inline #tags (not inside code-spans, URLs or [[Note#Heading]] fragments)
_TAG_RE = re.compile(r"(?<![`\w/#])#([A-Za-z0-9_/-]+)")
_HEADING_RE = re.compile(r"^(#{1,6})\s+(.+?)(?:\s+\^[A-Za-z0-9-]+)?\s*$")
_BLOCK_RE = re.compile(r"\^([A-Za-z0-9-]+)\s*$")

_EXTERNAL_PREFIXES = ("http://", "https://")


# ---------------------------------------------------------------------------
# Frontmatter
# ---------------------------------------------------------------------------


def parse_frontmatter(content: str) -> tuple[dict[str, FrontmatterValue], str]:
    """Split YAML front-matter from body text.

    Returns ``(metadata_dict, body)``; ``metadata_dict`` is empty when there
    is no front-matter block or when the block is not a valid YAML mapping.
    """
    match = _FRONTMATTER_RE.match(content)
    if not match:
        return {}, content
    try:
        meta: Any = yaml.safe_load(match.group(1) or "") or {}
    except yaml.YAMLError:
        meta = {}
    if not isinstance(meta, dict):
        meta = {}
    return {str(k): v for k, v in meta.items()}, content[match.end() :]


def unparsed_frontmatter(content: str) -> str | None:
    """Return the raw ``---`` block when it is present but not a YAML mapping.

    The returned text includes both fences and always ends with a newline.
    Empty blocks and valid mappings give ``None``.
    """
    match = _FRONTMATTER_RE.match(content)
    if not match or not (match.group(1) or "").strip():
        return None
    try:
        meta = yaml.safe_load(match.group(1))
    except yaml.YAMLError:
        meta = None
    if isinstance(meta, dict):
        return None
    block = match.group(0)
    return block if block.endswith("\n") else f"{block}\n"


def dump_frontmatter(frontmatter: dict[str, FrontmatterValue] | None, body: str) -> str:
    """Render *frontmatter* as a ``---`` block in front of *body*.

    An empty or missing mapping leaves *body* untouched.
    """
    if not frontmatter:
        return body
    block = yaml.safe_dump(
        frontmatter, sort_keys=False, allow_unicode=True, default_flow_style=False
    )
    return f"---\n{block}---\n{body}"


# ---------------------------------------------------------------------------
# Tags
# ---------------------------------------------------------------------------


def _frontmatter_list(value: Any) -> list[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [t.strip() for t in value.split(",") if t.strip()]
    if isinstance(value, (list, tuple, set)):
        return [str(t).strip() for t in value if t is not None and str(t).strip()]
    return [str(value)]


def parse_tags(text: str, frontmatter_tags: Any = None) -> list[str]:
    """Return frontmatter tags followed by inline ``#tag`` values (de-duped, ordered)."""
    seen: set[str] = set()
    result: list[str] = []
    for tag in _frontmatter_list(frontmatter_tags):
        tag = tag[1:] if tag.startswith("#") else tag
        if tag and tag not in seen:
            seen.add(tag)
            result.append(tag)
    for m in _TAG_RE.finditer(text):
        tag = m.group(1)
        if tag not in seen:
            seen.add(tag)
            result.append(tag)
    return result


# ---------------------------------------------------------------------------
# Links
# ---------------------------------------------------------------------------


def parse_links(text: str) -> list[ParsedLink]:
    """Return every intra-vault link in *text*.

    Wiki links come first, then markdown links; external ``http(s)`` targets
    are dropped.
    """
    links: list[ParsedLink] = []

    for m in _WIKILINK_RE.finditer(text):
        links.append(
            ParsedLink(
                raw=m.group(0),
                target=m.group(1).strip(),
                heading=m.group(2),
                block_ref=m.group(3),
                display_text=m.group(4),
                is_embed=m.group(0).startswith("!"),
            )
        )

    for m in _MDLINK_RE.finditer(text):
        target = m.group(2).strip()
        if target.startswith(_EXTERNAL_PREFIXES):
            continue
        links.append(
            ParsedLink(
                raw=m.group(0),
                target=target,
                display_text=m.group(1),
                is_embed=m.group(0).startswith("!"),
            )
        )

    return links


# ---------------------------------------------------------------------------
# Headings and block anchors
# ---------------------------------------------------------------------------


def parse_headings(text: str) -> list[Heading]:
    headings: list[Heading] = []
    for line_no, line in enumerate(text.split("\n"), start=1):
        m = _HEADING_RE.match(line)
        if m:
            headings.append(Heading(text=m.group(2).strip(), level=len(m.group(1)), line=line_no))
    return headings


def parse_blocks(text: str) -> dict[str, int]:
    """Map each ``^block-id`` anchor to its 1-based line; later duplicates win."""
    blocks: dict[str, int] = {}
    for line_no, line in enumerate(text.split("\n"), start=1):
        m = _BLOCK_RE.search(line)
        if m:
            blocks[m.group(1)] = line_no
    return blocks


# ---------------------------------------------------------------------------
# Notes
# ---------------------------------------------------------------------------


def build_note(
    content: str,
    rel_path: str,
    created: datetime,
    modified: datetime,
) -> Note:
    """Parse raw file *content* into a :class:`Note` stored at *rel_path*."""
    frontmatter, body = parse_frontmatter(content)
    return Note(
        path=rel_path,
        name=PurePosixPath(rel_path).stem,
        content=body,
        created=created,
        modified=modified,
        frontmatter=frontmatter,
        tags=parse_tags(body, frontmatter.get("tags")),
        links=[link.target for link in parse_links(body)],
        headings=parse_headings(body),
        blocks=parse_blocks(body),
    )


def _timestamps(stat: os.stat_result) -> tuple[datetime, datetime]:
    birth = getattr(stat, "st_birthtime", None) or stat.st_ctime
    return (
        datetime.fromtimestamp(birth, tz=timezone.utc),
        datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
    )


def parse_note(path: Path, vault_dir: Path) -> Note:
    """Read a markdown file and return a fully-populated :class:`Note`.

    I/O and decoding errors propagate; callers decide whether to skip.
    """
    content = path.read_text(encoding="utf-8")
    created, modified = _timestamps(path.stat())
    rel_path = path.relative_to(vault_dir).as_posix()
    return build_note(content, rel_path, created, modified)
