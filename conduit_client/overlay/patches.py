"""Overlay patches and their fold functions.

A patch is a local, unpersisted change produced by a successful mutation.
Each carries the identity (slug or username) of the entity it targets;
the overlay discards patches whose key is not its focus key.

Fold functions are pure: (snapshot, patch) -> new snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Tuple, Union

from conduit_client.protocols import Article, Comment, Profile


@dataclass(frozen=True)
class FavoriteToggled:
    key: str
    favorited: bool


@dataclass(frozen=True)
class FollowToggled:
    key: str
    following: bool


@dataclass(frozen=True)
class CommentAdded:
    key: str
    comment: Comment


@dataclass(frozen=True)
class CommentRemoved:
    key: str
    comment_id: str


OverlayPatch = Union[FavoriteToggled, FollowToggled, CommentAdded, CommentRemoved]

CommentList = Tuple[Comment, ...]


def fold_article(article: Article, patch: OverlayPatch) -> Article:
    """Apply a favorite or author-follow patch to an article.

    The favorites counter moves by exactly one and is never clamped.
    """
    if isinstance(patch, FavoriteToggled):
        delta = 1 if patch.favorited else -1
        return replace(
            article,
            favorited=patch.favorited,
            favorites_count=article.favorites_count + delta,
        )
    if isinstance(patch, FollowToggled):
        return replace(article, author=replace(article.author, following=patch.following))
    raise TypeError(f"Cannot fold {type(patch).__name__} onto an article")


def fold_profile(profile: Profile, patch: OverlayPatch) -> Profile:
    if isinstance(patch, FollowToggled):
        return replace(profile, following=patch.following)
    raise TypeError(f"Cannot fold {type(patch).__name__} onto a profile")


def fold_comments(comments: CommentList, patch: OverlayPatch) -> CommentList:
    """New comments go first; removal drops every comment with the id."""
    if isinstance(patch, CommentAdded):
        return (patch.comment,) + tuple(comments)
    if isinstance(patch, CommentRemoved):
        return tuple(c for c in comments if c.id != patch.comment_id)
    raise TypeError(f"Cannot fold {type(patch).__name__} onto a comment list")


__all__ = [
    "FavoriteToggled",
    "FollowToggled",
    "CommentAdded",
    "CommentRemoved",
    "OverlayPatch",
    "CommentList",
    "fold_article",
    "fold_profile",
    "fold_comments",
]
