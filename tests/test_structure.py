"""Tests for section detection, header matching, salary and tech-stack extraction."""

import pytest

from jobdesc.domain.models import SectionRole
from jobdesc.formatting.sanitizer import sanitize
from jobdesc.formatting.structure import (
    contains_salary,
    detect,
    extract_tech_stack,
    find_salary_figures,
    match_header,
)


class TestMatchHeader:
    """Test header recognition against the synonym table."""

    @pytest.mark.parametrize(
        "line,role,heading",
        [
            ("Requirements:", SectionRole.REQUIREMENTS, "Requirements"),
            ("**Qualifications:**", SectionRole.REQUIREMENTS, "Requirements"),
            ("### What You'll Do", SectionRole.RESPONSIBILITIES, "Responsibilities"),
            ("About the Role", SectionRole.ABOUT_ROLE, "About the Role"),
            ("About Us", SectionRole.ABOUT_COMPANY, "About the Company"),
            ("Compensation & Benefits", SectionRole.COMPENSATION, "Compensation"),
            ("Benefits & Perks", SectionRole.BENEFITS, "Benefits"),
            ("Nice to have:", SectionRole.NICE_TO_HAVE, "Nice to Have"),
            ("- Requirements:", SectionRole.REQUIREMENTS, "Requirements"),
        ],
    )
    def test_known_headers(self, line, role, heading):
        synonym = match_header(line)
        assert synonym is not None
        assert synonym.role == role
        assert synonym.heading == heading

    @pytest.mark.parametrize(
        "line",
        [
            "",
            "- Requirements",
            "We are looking for someone with experience in distributed systems.",
            "Requirements " + "x" * 60,
            "Requirements for this role include Rust",
        ],
    )
    def test_non_headers(self, line):
        assert match_header(line) is None

    def test_max_length_is_configurable(self):
        assert match_header("Requirements:", max_length=5) is None


class TestDetect:
    """Test splitting sanitized text into sections."""

    def test_bulleted_requirements_section(self):
        """Header followed by bullets forms one requirements section."""
        text = "Requirements:\n- 5 years of Rust\n- Experience with Tokio\n- Strong communication skills"
        sections = detect(text)

        assert len(sections) == 1
        section = sections[0]
        assert section.role == SectionRole.REQUIREMENTS
        assert section.heading == "Requirements"
        assert section.header == "Requirements:"
        assert [line.text for line in section.bullet_lines] == [
            "5 years of Rust",
            "Experience with Tokio",
            "Strong communication skills",
        ]

    def test_salary_line_becomes_compensation_section(self):
        text = "We pay well.\n$80,000 - $120,000/yr\nJoin us."
        sections = detect(text)

        assert [s.role for s in sections] == [
            SectionRole.BODY,
            SectionRole.COMPENSATION,
            SectionRole.BODY,
        ]
        compensation = sections[1]
        assert compensation.is_implicit
        assert compensation.heading == "Compensation"
        assert compensation.body_lines[0].text == "$80,000 - $120,000/yr"

    def test_salary_inside_titled_section_is_not_split(self):
        text = "Benefits:\nHealth insurance\nSalary $100k per year"
        sections = detect(text)
        assert len(sections) == 1
        assert sections[0].role == SectionRole.BENEFITS

    def test_untitled_text_is_body(self):
        sections = detect("Just a paragraph about the job.")
        assert len(sections) == 1
        assert sections[0].role == SectionRole.BODY
        assert sections[0].heading is None

    def test_empty_input(self):
        assert detect("") == []

    @pytest.mark.parametrize(
        "raw",
        [
            "Requirements:\n- 5 years of Rust\n- Tokio",
            "Intro line.\n\nAbout the Role\nBuild things.\n\n$90k - $110k\n\nBenefits:\n- Remote\n",
            "<h2>About Us</h2><p>Small team.</p><h3>Responsibilities:</h3><ul><li>Ship</li></ul>",
            "No structure at all, just a single sentence.",
            "\n\nLeading blank lines\n\n\n",
        ],
    )
    def test_sections_cover_input_exactly(self, raw):
        """Joining section spans gives back the sanitized input."""
        sanitized = sanitize(raw)
        sections = detect(sanitized)
        assert "".join(section.raw for section in sections) == sanitized


class TestSalary:
    """Test salary figure detection."""

    @pytest.mark.parametrize(
        "line",
        [
            "$80,000 - $120,000/yr",
            "The salary range is $80,000 - $120,000/yr plus equity.",
            "USD 90,000",
            "€50k to €70k per year",
            "120k USD annually",
        ],
    )
    def test_salary_detected(self, line):
        assert contains_salary(line)

    @pytest.mark.parametrize("line", ["100 engineers", "Founded in 2015", "Version 2.0"])
    def test_plain_numbers_are_not_salary(self, line):
        assert not contains_salary(line)

    def test_find_salary_figures(self):
        assert find_salary_figures("between €50k and €70k") == ["€50k", "€70k"]
        assert find_salary_figures("") == []


class TestTechStack:
    """Test technology name extraction."""

    def test_canonical_names_in_first_seen_order(self):
        text = "We use Golang, Postgres and K8s on AWS."
        assert extract_tech_stack(text) == ["Go", "PostgreSQL", "Kubernetes", "AWS"]

    def test_common_words_are_case_sensitive(self):
        assert extract_tech_stack("We react quickly and go to market.") == []
        assert extract_tech_stack("Swift delivery matters") == ["Swift"]
        assert extract_tech_stack("swift delivery matters") == []

    def test_case_insensitive_names(self):
        assert extract_tech_stack("rust and PYTHON") == ["Rust", "Python"]

    def test_duplicates_removed(self):
        assert extract_tech_stack("Python, python and Python 3") == ["Python"]

    def test_names_inside_other_words_ignored(self):
        assert extract_tech_stack("PostgreSQL only") == ["PostgreSQL"]

    def test_empty(self):
        assert extract_tech_stack("") == []
