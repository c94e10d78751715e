"""Text reports for maintenance runs, score distributions and previews."""

from .renderer import ReportRenderer, ReportRenderingError

__all__ = ["ReportRenderer", "ReportRenderingError"]
