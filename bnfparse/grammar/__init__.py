"""
bnfparse Grammar Parsing

Turns BNF grammar text into structured, immutable values.

Features:
- Combinator-based parser with furthest-failure error reporting
- Immutable grammar model (Literal / RuleRef terms, rules, documents)
- Structured ParseFailure with line, column and expectations
- Canonical re-emission of parsed grammars
"""

from .model import (
    GrammarDocument,
    Literal,
    ParseFailure,
    RuleDefinition,
    RuleRef,
)
from .grammar_parser import GrammarSyntaxError, parse_grammar, parse_grammar_or_raise
from .formatter import format_grammar, format_rule, format_term

__all__ = [
    'GrammarDocument', 'Literal', 'ParseFailure', 'RuleDefinition', 'RuleRef',
    'GrammarSyntaxError', 'parse_grammar', 'parse_grammar_or_raise',
    'format_grammar', 'format_rule', 'format_term',
]
