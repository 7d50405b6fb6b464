"""Console-facing adapters."""

from __future__ import annotations

from .rich_notice import RichNoticeAdapter, SilentNoticeAdapter

__all__ = ["RichNoticeAdapter", "SilentNoticeAdapter"]
