"""
Aggregates over collections of blog posts.

Pure functions: they read the posts they are given and never modify them.
A post can be a mapping (``{"likes": 5}``) or any object with a ``likes``
attribute, such as a Blog row or a BlogResponse.
"""
from collections.abc import Mapping
from typing import Any, Iterable


def _likes(post: Any) -> int:
    if isinstance(post, Mapping):
        return post["likes"]
    return post.likes


def constant_probe(posts: Iterable[Any]) -> int:
    """Always 1, whatever the posts."""
    return 1


def total_likes(posts: Iterable[Any]) -> int:
    """Sum of likes across all posts; 0 for an empty collection."""
    return sum(_likes(post) for post in posts)
