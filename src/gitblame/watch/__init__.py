"""File watching for blame cache invalidation."""

from ._watcher import InvalidateCallback, format_change, watch_repository

__all__ = ["InvalidateCallback", "format_change", "watch_repository"]
