"""Unit tests for text report rendering.

Tests the ReportRenderer for:
- Run reports (per-document lines, excerpts, summary, skipped and cancelled runs)
- Score distribution histograms
- Formatting previews
- Template errors surfacing as ReportRenderingError
"""

from datetime import datetime, timedelta, timezone

import pytest

from jobdesc.formatting import sanitize_and_format
from jobdesc.pipeline import DocumentOutcome, DocumentReport, MaintenanceRunResult
from jobdesc.reporting import ReportRenderer, ReportRenderingError
from jobdesc.scoring import explain
from jobdesc.utils.excerpts import ChangeExcerpt

STARTED = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def make_result(reports, operation="format", **kwargs):
    return MaintenanceRunResult(
        operation=operation,
        run_id="abc123",
        run_started_at=STARTED,
        run_finished_at=STARTED + timedelta(seconds=1.5),
        reports=reports,
        **kwargs,
    )


@pytest.fixture
def renderer():
    return ReportRenderer()


class TestRunReport:
    """Test maintenance run reports."""

    def test_format_run(self, renderer):
        result = make_result(
            [
                DocumentReport(
                    "job-html",
                    DocumentOutcome.FORMATTED,
                    length_before=120,
                    length_after=80,
                    excerpt=ChangeExcerpt(before="<p>Hello</p>", after="Hello"),
                    persisted=True,
                ),
                DocumentReport("job-clean", DocumentOutcome.UNCHANGED, length_before=50, length_after=50),
                DocumentReport("job-bad", DocumentOutcome.ERROR, error="Description contains NUL bytes"),
            ]
        )

        output = renderer.render_run(result)

        assert output.startswith("FORMAT run abc123")
        assert "Started 2026-03-01T12:00:00Z, took 1.50s" in output
        assert "job-html  120 -> 80 chars  formatted" in output
        assert "before: <p>Hello</p>" in output
        assert "after:  Hello" in output
        assert "job-clean  50 -> 50 chars  unchanged" in output
        assert "(Description contains NUL bytes)" in output
        assert "Summary: updated=1 failed=1 skipped=1" in output
        assert "Threshold" not in output

    def test_excerpts_can_be_hidden(self, renderer):
        result = make_result(
            [
                DocumentReport(
                    "job-html",
                    DocumentOutcome.FORMATTED,
                    excerpt=ChangeExcerpt(before="<p>Hello</p>", after="Hello"),
                )
            ]
        )

        assert "before:" not in renderer.render_run(result, show_excerpts=False)

    def test_humanize_run_shows_scores(self, renderer):
        result = make_result(
            [
                DocumentReport(
                    "job-ai",
                    DocumentOutcome.HUMANIZED,
                    length_before=200,
                    length_after=180,
                    score_before=37,
                    score_after=5,
                ),
                DocumentReport(
                    "job-clean", DocumentOutcome.UNCHANGED, score_before=0, score_after=0
                ),
            ],
            operation="humanize",
            threshold=30,
        )

        output = renderer.render_run(result)

        assert output.startswith("HUMANIZE run abc123")
        assert "Threshold: 30" in output
        assert "job-ai  200 -> 180 chars  score 37 -> 5  formatted+humanized" in output
        assert "job-clean  0 -> 0 chars  score 0  unchanged" in output

    def test_dry_run_is_labelled(self, renderer):
        output = renderer.render_run(make_result([], dry_run=True))

        assert "(dry run, nothing saved)" in output
        assert "No documents to process." in output

    def test_skipped_run(self, renderer):
        output = renderer.render_run(make_result([], run_skipped=True))

        assert "another maintenance run was still in progress" in output
        assert "Summary" not in output

    def test_cancelled_run(self, renderer):
        result = make_result(
            [DocumentReport("job-1", DocumentOutcome.FORMATTED)], cancelled=True, not_started=4
        )

        assert "Cancelled: 4 document(s) were not started." in renderer.render_run(result)


class TestScoreDistribution:
    """Test score histograms."""

    def test_render_distribution(self, renderer):
        output = renderer.render_distribution(
            {"0-29": 1, "30-50": 2, "51-70": 0, "71-100": 0}, threshold=30
        )
        lines = output.splitlines()

        assert lines[0] == "Score distribution (3 documents, threshold 30)"
        assert lines[1].split()[:2] == ["0-29", "1"]
        assert lines[1].endswith("#" * 20)
        assert lines[2].endswith("#" * 40)
        assert lines[3].split() == ["51-70", "0"]
        assert len(lines) == 5

    def test_render_scores(self, renderer):
        output = renderer.render_scores([5])

        assert output.splitlines()[0] == "Score distribution (1 document)"

    def test_empty_distribution(self, renderer):
        output = renderer.render_scores([])

        assert "(0 documents)" in output
        assert "#" not in output


class TestPreview:
    """Test formatting previews."""

    def test_preview(self, renderer):
        result = sanitize_and_format("Requirements:\n- Rust\n- Docker\nWe leverage Kubernetes.")
        output = renderer.render_preview(
            result.formatted_text,
            result.metadata,
            explain(result.formatted_text),
            result.changed,
            result.sections,
        )

        assert output.startswith("## Requirements\n\n- Rust\n- Docker")
        assert "Sections: requirements" in output
        assert "Structured sections: yes" in output
        assert "Tech stack: Rust, Docker, Kubernetes" in output
        assert "AI score: 8 (leverage +8)" in output
        assert "Changed by formatting: yes" in output

    def test_preview_without_hits(self, renderer):
        result = sanitize_and_format("A short paragraph.")
        output = renderer.render_preview(
            result.formatted_text, result.metadata, explain(result.formatted_text), result.changed
        )

        assert "AI score: 0\n" in output
        assert "Tech stack: none" in output
        assert "Sections: none" in output
        assert "Changed by formatting: no" in output


class TestRenderingErrors:
    """Test template failures."""

    def test_missing_template(self):
        renderer = ReportRenderer(run_template="missing.txt.j2")

        with pytest.raises(ReportRenderingError, match="missing.txt.j2"):
            renderer.render_run(make_result([]))
