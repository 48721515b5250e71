"""
Posts package: parse the Markdown posts and their code fences.
"""

from dsblog.posts.front_matter import Post, load_post, load_posts, parse_post, split_front_matter
from dsblog.posts.index import CodeBlock, build_index, extract_code_blocks, posts_by_tag

__all__ = [
    "CodeBlock",
    "Post",
    "build_index",
    "extract_code_blocks",
    "load_post",
    "load_posts",
    "parse_post",
    "posts_by_tag",
    "split_front_matter",
]
