"""Pydantic models for API request/response validation"""

from bnfparse.web.api.models.grammar import (
    Failure, Grammar, LiteralTerm, ParseErrorResponse, Rule, RuleRefTerm,
)

__all__ = [
    "Grammar", "Rule", "LiteralTerm", "RuleRefTerm",
    "Failure", "ParseErrorResponse",
]
