"""
Parse blog posts: YAML front matter plus a Markdown body.

A post starts with a front-matter block delimited by `---` lines, in the
format static-site generators such as Jekyll expect:

    ---
    title: Visualizing missing data
    author: Jane Doe
    date: 2023-02-14
    categories: [data-science]
    tags: pandas missingno
    ---

Everything after the closing delimiter is the body.
"""

from __future__ import annotations

import datetime as dt
import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from dsblog.config import POSTS_DIR
from dsblog.exceptions import FrontMatterError

log = logging.getLogger(__name__)

_OPEN = "---"
_CLOSE = ("---", "...")
_FILENAME_DATE = re.compile(r"^(\d{4}-\d{2}-\d{2})-(.+)$")
# Jekyll's documented `date` format, with and without seconds
_DATE_FORMATS = ("%Y-%m-%d %H:%M:%S %z", "%Y-%m-%d %H:%M %z")


@dataclass
class Post:
    """A single blog post."""

    title: str
    date: dt.date
    author: Optional[str] = None
    categories: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    body: str = ""
    path: Optional[Path] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def slug(self) -> str:
        if self.path is not None:
            stem = Path(self.path).stem
            m = _FILENAME_DATE.match(stem)
            return m.group(2) if m else stem
        return slugify(self.title)


def slugify(text: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower())
    return slug.strip("-")


def split_front_matter(text: str, path=None) -> Tuple[Dict[str, Any], str]:
    """
    Split a post into its front-matter mapping and its body.

    Text that does not start with a `---` line has no front matter and is
    returned whole as the body.
    """
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].strip() != _OPEN:
        return {}, text

    for i, line in enumerate(lines[1:], start=1):
        if line.strip() in _CLOSE:
            raw = "".join(lines[1:i])
            body = "".join(lines[i + 1:])
            break
    else:
        raise FrontMatterError("front matter block is never closed", path=path)

    try:
        meta = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise FrontMatterError(f"invalid YAML in front matter: {e}", path=path) from e

    if meta is None:
        meta = {}
    if not isinstance(meta, dict):
        raise FrontMatterError(
            f"front matter must be a mapping, got {type(meta).__name__}", path=path
        )
    return meta, body


def _as_list(value) -> List[str]:
    # Jekyll accepts a space-separated string as well as a YAML list
    if value is None:
        return []
    if isinstance(value, str):
        return value.split()
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    return [str(value)]


def _parse_date(value, path=None) -> dt.date:
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return dt.datetime.fromisoformat(text).date()
        except ValueError:
            pass
        for fmt in _DATE_FORMATS:
            try:
                return dt.datetime.strptime(text, fmt).date()
            except ValueError:
                continue
        raise FrontMatterError(f"invalid date {value!r}", path=path)
    raise FrontMatterError(f"invalid date {value!r}", path=path)


def parse_post(text: str, path=None) -> Post:
    """
    Parse the full text of a post.

    Parameters
    ----------
    text : str
        Post source: front matter followed by Markdown.
    path : str or Path, optional
        Source file, used for the slug, for the date fallback and in error
        messages.

    Returns
    -------
    Post

    Raises
    ------
    FrontMatterError
        If the title is missing or no date can be determined.
    """
    meta, body = split_front_matter(text, path=path)
    meta = dict(meta)

    title = meta.pop("title", None)
    if not title:
        raise FrontMatterError("missing required key 'title'", path=path)

    raw_date = meta.pop("date", None)
    if raw_date is not None:
        date = _parse_date(raw_date, path=path)
    else:
        m = _FILENAME_DATE.match(Path(path).stem) if path is not None else None
        if not m:
            raise FrontMatterError("missing 'date' and no date in file name", path=path)
        date = _parse_date(m.group(1), path=path)

    categories = _as_list(meta.pop("categories", None)) + _as_list(meta.pop("category", None))
    tags = _as_list(meta.pop("tags", None)) + _as_list(meta.pop("tag", None))

    return Post(
        title=str(title),
        date=date,
        author=meta.pop("author", None),
        categories=categories,
        tags=tags,
        body=body,
        path=Path(path) if path is not None else None,
        extra=meta,
    )


def load_post(path) -> Post:
    with open(path, "r", encoding="utf-8") as fh:
        return parse_post(fh.read(), path=path)


def load_posts(directory=POSTS_DIR) -> List[Post]:
    """
    Load every `*.md` post in a directory, newest first.
    """
    paths = sorted(Path(directory).glob("*.md"))
    posts = [load_post(p) for p in paths]
    log.info("Loaded %d posts from %s", len(posts), os.fspath(directory))
    return sorted(posts, key=lambda p: (-p.date.toordinal(), p.title))
