"""Optimistic overlays: remote snapshots merged with local patches."""

from conduit_client.overlay.patches import (
    CommentAdded,
    CommentList,
    CommentRemoved,
    FavoriteToggled,
    FollowToggled,
    OverlayPatch,
    fold_article,
    fold_comments,
    fold_profile,
)
from conduit_client.overlay.store import Overlay, OverlayHost, OverlayState, PatchTarget

__all__ = [
    "CommentAdded",
    "CommentList",
    "CommentRemoved",
    "FavoriteToggled",
    "FollowToggled",
    "OverlayPatch",
    "fold_article",
    "fold_comments",
    "fold_profile",
    "Overlay",
    "OverlayHost",
    "OverlayState",
    "PatchTarget",
]
