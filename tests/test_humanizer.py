"""Tests for the rule-based humanizer."""

import logging
import re

import pytest

from jobdesc.humanizer import DEFAULT_RULES, RewriteRule, humanize, rewrite
from jobdesc.humanizer.rules import PARALLELISM, PHRASE
from jobdesc.scoring import ai_score, score
from jobdesc.scoring import signals

BUZZWORD_TEXT = (
    "You will leverage modern tooling to utilize shared data. "
    "The team is passionate about clean code and loves to delve into hard problems. "
    "Engineers here leverage automation every day."
)

CLEAN_TEXT = (
    "Our team builds payment software for small shops in Lisbon. "
    "You would join four engineers and work on the billing service, mostly in Python. "
    "We ship twice a week and review each other's code."
)

FLAGGED_WORDS = re.compile(r"\b(?:leverage|utilize|passionate|delve)\b", re.IGNORECASE)
TEMPLATE_GROUP = re.compile(r"\\g<\w+>")


def _candidates(rule: RewriteRule):
    for candidate in rule.replacements:
        yield TEMPLATE_GROUP.sub("", candidate).strip()
    for candidates in rule.by_form.values():
        yield from candidates


class TestHumanize:
    """Test rewriting of buzzword-heavy text."""

    def test_flagged_vocabulary_removed(self):
        result = humanize(BUZZWORD_TEXT)

        assert FLAGGED_WORDS.search(result) is None
        assert ai_score(result) < ai_score(BUZZWORD_TEXT)

    def test_deterministic(self):
        assert humanize(BUZZWORD_TEXT) == humanize(BUZZWORD_TEXT)

    def test_no_match_returns_same_object(self):
        assert humanize(CLEAN_TEXT) is CLEAN_TEXT

    def test_empty_input(self):
        assert humanize("") == ""

    def test_second_pass_changes_nothing(self):
        once = humanize(BUZZWORD_TEXT)
        twice = humanize(once)

        assert twice == once
        assert score(twice) == score(once)

    @pytest.mark.parametrize(
        "text",
        [
            "Our team offers not just leveraging data, but building tools for 3 teams.",
            "You will own not only innovative products, but also the roadmap for 3 teams.",
            "This is not merely a seamless rollout, but a rewrite.",
        ],
    )
    def test_parallelism_around_rewritten_words_settles_in_one_pass(self, text):
        once = humanize(text)
        twice = humanize(once)

        assert " but" not in once
        assert twice == once
        assert score(once) == 0

    def test_inflected_verb(self):
        result = humanize("The team leveraged Rust for the parser.")
        assert result in (
            "The team used Rust for the parser.",
            "The team drew on Rust for the parser.",
            "The team built on Rust for the parser.",
        )

    def test_capitalization_preserved(self):
        result = humanize("Utilizing shared data is common here.")
        assert result == "Using shared data is common here."

    def test_wordy_phrase(self):
        assert humanize("We test in order to ship safely.") == "We test to ship safely."

    def test_contraction_only_mid_sentence(self):
        assert humanize("Tomorrow we are shipping it.") == "Tomorrow we're shipping it."
        assert humanize("We are hiring.") == "We are hiring."

    def test_sentence_opening_deletion_recapitalizes(self):
        result = humanize("It is important to note that the role is remote.")
        assert result == "The role is remote."

    def test_trailing_deletion_tidies_punctuation(self):
        assert humanize("The role is remote, needless to say.") == "The role is remote."

    def test_negative_parallelism(self):
        assert humanize("This is not just a job, but a calling.") == "This is a job and a calling."

    def test_filler_phrase(self):
        result = humanize("You should hit the ground running.")
        assert result == "You should get up to speed quickly."


class TestRewriteEngine:
    """Test the rule engine with small custom rule tables."""

    def test_inserted_text_is_not_rewritten_again(self):
        rules = [
            RewriteRule("test.foo", PHRASE, re.compile(r"\bfoo\b"), replacements=("bar baz",)),
            RewriteRule("test.baz", PHRASE, re.compile(r"\bbaz\b"), replacements=("qux",)),
        ]
        assert humanize("foo and baz", rules) == "bar baz and qux"

    def test_carried_group_may_contain_inserted_text(self):
        rules = [
            RewriteRule("test.foo", PHRASE, re.compile(r"\bfoo\b"), replacements=("bar",)),
            RewriteRule(
                "test.wrap",
                PARALLELISM,
                re.compile(r"\bnot just (?P<first>\w+ \w+), but"),
                replacements=(r"\g<first> and",),
            ),
            RewriteRule("test.bar", PHRASE, re.compile(r"\bbar\b"), replacements=("baz",)),
        ]

        # "bar" moves with the carried clause and stays protected
        assert humanize("not just foo things, but more", rules) == "bar things and more"

    def test_match_overlapping_inserted_text_outside_group_is_skipped(self):
        rules = [
            RewriteRule("test.just", PHRASE, re.compile(r"\bjust\b"), replacements=("only",)),
            RewriteRule(
                "test.wrap",
                PARALLELISM,
                re.compile(r"\bnot only (?P<first>\w+), but"),
                replacements=(r"\g<first> and",),
            ),
        ]

        assert humanize("not just this, but that", rules) == "not only this, but that"

    def test_failing_rule_is_skipped_and_logged(self, caplog):
        rules = [
            RewriteRule("test.broken", PHRASE, re.compile(r"\bfoo\b")),
            RewriteRule("test.bar", PHRASE, re.compile(r"\bbar\b"), replacements=("baz",)),
        ]
        with caplog.at_level(logging.WARNING, logger="jobdesc.humanizer.engine"):
            result = rewrite("foo bar", rules)

        assert result.text == "foo baz"
        assert result.failed == ["test.broken"]
        assert result.applied == [("test.bar", 1)]
        assert any("test.broken" in record.getMessage() for record in caplog.records)

    def test_rewrite_that_raises_score_is_discarded(self):
        rules = [RewriteRule("test.worse", PHRASE, re.compile(r"\bplain\b"), replacements=("leverage",))]
        text = "We like plain tools."

        result = rewrite(text, rules)
        assert result.text is text
        assert not result.changed

    def test_rewrite_reports_applied_rules(self):
        result = rewrite("We leverage Rust in order to ship.")
        rule_ids = [rule_id for rule_id, _ in result.applied]

        assert "phrase.in-order-to" in rule_ids
        assert "vocabulary.leverage" in rule_ids
        assert result.replacement_count == 2


class TestRuleTable:
    """Test properties of the default rule table."""

    def test_rule_ids_unique(self):
        rule_ids = [rule.rule_id for rule in DEFAULT_RULES]
        assert len(rule_ids) == len(set(rule_ids))

    def test_parallelism_rules_run_last(self):
        families = [rule.family for rule in DEFAULT_RULES]
        first_parallelism = families.index(PARALLELISM)
        assert all(family == PARALLELISM for family in families[first_parallelism:])

    @pytest.mark.parametrize("signal", signals.BUZZWORDS, ids=lambda s: s.name)
    def test_every_buzzword_has_a_rule(self, signal):
        assert any(rule.pattern.search(signal.name) for rule in DEFAULT_RULES)

    @pytest.mark.parametrize("rule", DEFAULT_RULES, ids=lambda r: r.rule_id)
    def test_replacements_do_not_trip_signals_or_rules(self, rule):
        for candidate in _candidates(rule):
            if not candidate:
                continue
            assert not any(s.pattern.search(candidate) for s in signals.LEXICAL_SIGNALS), candidate
            assert not any(r.pattern.search(candidate) for r in DEFAULT_RULES), candidate
