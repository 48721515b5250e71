"""
Code-fence extraction and post indexing.
"""

from __future__ import annotations

import re
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

import pandas as pd

from dsblog.posts.front_matter import Post

_FENCE = re.compile(r"^[ ]{0,3}(?P<fence>`{3,}|~{3,})[ \t]*(?P<info>[^\n]*)$")

INDEX_COLUMNS = ["date", "title", "slug", "author", "categories", "tags", "n_code_blocks"]


@dataclass
class CodeBlock:
    language: str
    source: str
    line: int


def extract_code_blocks(body: str, language: Optional[str] = None) -> List[CodeBlock]:
    """
    Return the fenced code blocks of a Markdown body.

    A block closes on a fence of the same character that is at least as long
    as the opening one. An unclosed block runs to the end of the text.
    `language` keeps only blocks whose info string starts with it.
    """
    blocks = []
    lines = body.splitlines()
    i = 0
    while i < len(lines):
        m = _FENCE.match(lines[i])
        if not m or (m.group("fence")[0] == "`" and "`" in m.group("info")):
            i += 1
            continue
        fence = m.group("fence")
        info = m.group("info").strip()
        lang = info.split()[0].lower() if info else ""
        start = i
        content = []
        i += 1
        while i < len(lines):
            close = _FENCE.match(lines[i])
            if (
                close
                and not close.group("info").strip()
                and close.group("fence")[0] == fence[0]
                and len(close.group("fence")) >= len(fence)
            ):
                break
            content.append(lines[i])
            i += 1
        i += 1
        if language is None or lang == language.lower():
            source = "\n".join(content) + ("\n" if content else "")
            blocks.append(CodeBlock(language=lang, source=source, line=start + 1))
    return blocks


def build_index(posts: Iterable[Post]) -> pd.DataFrame:
    """Tabulate posts, newest first."""
    rows = [
        {
            "date": p.date,
            "title": p.title,
            "slug": p.slug,
            "author": p.author,
            "categories": list(p.categories),
            "tags": list(p.tags),
            "n_code_blocks": len(extract_code_blocks(p.body)),
        }
        for p in posts
    ]
    df = pd.DataFrame(rows, columns=INDEX_COLUMNS)
    if df.empty:
        return df
    return df.sort_values(["date", "title"], ascending=[False, True]).reset_index(drop=True)


def posts_by_tag(posts: Iterable[Post]) -> Dict[str, List[Post]]:
    groups = defaultdict(list)
    for p in posts:
        for tag in dict.fromkeys(p.tags):
            groups[tag].append(p)
    return {tag: groups[tag] for tag in sorted(groups)}
