"""Plain-text reports rendered with Jinja2.

Templates live in the ``jobdesc.reporting/templates`` package directory and
are rendered with StrictUndefined so a missing variable fails loudly
instead of producing a silently incomplete report.
"""

import logging
from typing import Dict, Iterable, Optional

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError

from jobdesc.domain.models import DescriptionMetadata
from jobdesc.errors import JobDescError
from jobdesc.pipeline.models import SCORE_BUCKETS, MaintenanceRunResult, score_distribution
from jobdesc.scoring import ScoreBreakdown
from jobdesc.utils.timestamps import format_timestamp

logger = logging.getLogger(__name__)

BAR_WIDTH = 40


class ReportRenderingError(JobDescError):
    """Raised when a report template cannot be rendered."""

    pass


class ReportRenderer:
    """Renders run reports, score distributions and previews as text."""

    def __init__(
        self,
        template_dir: str = "templates",
        run_template: str = "run_report.txt.j2",
        distribution_template: str = "score_distribution.txt.j2",
        preview_template: str = "preview.txt.j2",
    ):
        self.run_template_name = run_template
        self.distribution_template_name = distribution_template
        self.preview_template_name = preview_template

        self.env = Environment(
            loader=PackageLoader("jobdesc.reporting", template_dir),
            autoescape=False,
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def render_run(self, result: MaintenanceRunResult, show_excerpts: bool = True) -> str:
        """Render the per-document lines and summary of a maintenance run."""
        return self._render(
            self.run_template_name,
            {
                "operation": result.operation,
                "result": result,
                "started_at": format_timestamp(result.run_started_at),
                "show_excerpts": show_excerpts,
            },
        )

    def render_distribution(
        self, distribution: Dict[str, int], threshold: Optional[int] = None
    ) -> str:
        """Render a bucketed score histogram.

        Args:
            distribution: Count per bucket name (see ``SCORE_BUCKETS``)
            threshold: Humanization threshold to show in the header
        """
        total = sum(distribution.values())
        widest = max(distribution.values(), default=0)
        rows = []
        for name, _, _ in SCORE_BUCKETS:
            count = distribution.get(name, 0)
            width = round(count * BAR_WIDTH / widest) if widest else 0
            rows.append({"bucket": name, "count": count, "bar": "#" * width})
        return self._render(
            self.distribution_template_name,
            {"rows": rows, "total": total, "threshold": threshold},
        )

    def render_scores(self, scores: Iterable[int], threshold: Optional[int] = None) -> str:
        return self.render_distribution(score_distribution(scores), threshold)

    def render_preview(
        self,
        formatted: str,
        metadata: DescriptionMetadata,
        breakdown: ScoreBreakdown,
        changed: bool,
        sections: Optional[Dict[str, str]] = None,
    ) -> str:
        """Render formatted markdown followed by its metadata and AI score."""
        return self._render(
            self.preview_template_name,
            {
                "formatted": formatted,
                "metadata": metadata,
                "ai_score": breakdown.total,
                "hits": breakdown.hits,
                "changed": changed,
                "sections": list(sections or {}),
            },
        )

    def _render(self, template_name: str, context: Dict) -> str:
        try:
            return self.env.get_template(template_name).render(context)
        except TemplateError as e:
            error_msg = f"Report rendering failed ({template_name}): {e}"
            logger.error(error_msg, exc_info=True)
            raise ReportRenderingError(error_msg) from e
