"""Deterministic rule-based rewriting of AI-sounding job description prose."""

from .engine import RewriteResult, apply_rule, humanize, rewrite
from .rules import DEFAULT_RULES, RewriteRule

__all__ = ["humanize", "rewrite", "apply_rule", "RewriteResult", "RewriteRule", "DEFAULT_RULES"]
