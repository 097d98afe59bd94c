"""
Client-side moderation state controller.

Wraps a remote moderation API behind an async controller that keeps the review
queue, appeals, filter rules and statistics in memory, refreshes them after
every successful mutation, and projects them onto narrow UI-facing views.
"""

from .services.controller import ModerationController
from .views import ModerationViews

__all__ = ["ModerationController", "ModerationViews"]
