"""Expose API endpoint routers."""

from branchhub.api.endpoints import branch_sync, branches, feedback, feedback_links

__all__ = ["branch_sync", "branches", "feedback", "feedback_links"]
