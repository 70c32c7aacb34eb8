"""Reports module for rendering comparison results."""

from .summaries import ReportGenerator, render_tokens

__all__ = [
    "ReportGenerator",
    "render_tokens",
]
