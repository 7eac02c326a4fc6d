"""
Grammar Parser

Parses BNF grammar text into a GrammarDocument.

Supported syntax:
- Rules: <rule> ::= <production> | <alternative>
- Rule names: an ASCII letter followed by letters, digits or dashes
- Terminal strings: "literal" or 'literal' (no escapes; the other quote
  character may appear inside)
- One rule per line; blank lines may follow the last rule

Example grammar:
    <expr> ::= <term> | <term> "+" <expr>
    <term> ::= <digit> | "(" <expr> ")"
    <digit> ::= "0" | "1" | "2"

Each layer below is a Parser built from the ones above it, so any of them
can be run on its own with run_parser().
"""

import logging
import string as _string
from typing import Union

from .combinators import (
    Parser,
    char,
    eof,
    many,
    many1,
    optional,
    run_parser,
    satisfy,
    sep_by1,
    sequence,
    string,
)
from .model import GrammarDocument, Literal, ParseFailure, RuleDefinition, RuleRef


logger = logging.getLogger("bnfparse.grammar.parser")

HORIZONTAL_SPACE = " \t"
LINE_TERMINATORS = "\r\n"
NAME_CHARS = frozenset(_string.ascii_letters + _string.digits + "-")


# Lexical primitives

hspace = satisfy(lambda c: c in HORIZONTAL_SPACE, "space")
spaces = many(hspace).hidden()
newline = satisfy(lambda c: c in LINE_TERMINATORS, "line break")
whitespace = satisfy(lambda c: c in HORIZONTAL_SPACE or c in LINE_TERMINATORS, "whitespace")

line_end = (many1(spaces >> newline) << many(whitespace)).label("line break")

name_char = satisfy(lambda c: c in NAME_CHARS, "name character")
letter = satisfy(lambda c: c in _string.ascii_letters, "letter")

# Bodies of "..." and '...' literals respectively
literal_char1 = satisfy(lambda c: c != '"', "any character except '\"'")
literal_char2 = satisfy(lambda c: c != "'", "any character except \"'\"")


# Literals and names

def _quoted(quote: str, body_char: Parser) -> Parser:
    return (char(quote) >> many(body_char) << char(quote)).map("".join)


literal = (_quoted('"', literal_char1) | _quoted("'", literal_char2)).map(Literal).label("literal")

rule_name = sequence(letter, many(name_char)).map(
    lambda values: values[0] + "".join(values[1])
).label("rule name")


# Terms, sequences, alternations

rule_ref = (char("<") >> rule_name << char(">")).map(RuleRef).label("rule reference")

term = literal | rule_ref

term_list = many1(spaces >> term).map(tuple)

expression = sep_by1(term_list, spaces >> char("|") << spaces).map(tuple)


# Rules and documents

_rule_head = spaces >> char("<") >> rule_name << char(">") << spaces << string("::=") << spaces

# a rule without its line terminator, as used between rules of a document
_rule_body = sequence(_rule_head, expression << spaces).map(
    lambda values: RuleDefinition(values[0], values[1])
)

rule = _rule_body << optional(line_end)

syntax = (
    sep_by1(_rule_body, line_end) << many(whitespace) << eof
).map(lambda rules: GrammarDocument(tuple(rules)))


class GrammarSyntaxError(Exception):
    """Grammar text could not be parsed."""

    def __init__(self, failure: ParseFailure):
        self.failure = failure
        super().__init__(failure.message)


def parse_grammar(grammar_text: str) -> Union[GrammarDocument, ParseFailure]:
    """
    Parse grammar text into a GrammarDocument.

    Args:
        grammar_text: The whole grammar, one rule per line

    Returns:
        The parsed GrammarDocument, or a ParseFailure describing the
        furthest position reached and what was expected there

    Example:
        >>> doc = parse_grammar("<a> ::= 'b'\\n<c> ::= <a> | 'd'")
        >>> doc.rule_names()
        ['a', 'c']
    """
    result = run_parser(syntax, grammar_text)

    if isinstance(result, ParseFailure):
        logger.debug(f"Grammar rejected: {result.message}")
    else:
        logger.debug(f"Parsed grammar with {len(result)} rules")
    return result


def parse_grammar_or_raise(grammar_text: str) -> GrammarDocument:
    """Like parse_grammar(), but raises GrammarSyntaxError on failure."""
    result = parse_grammar(grammar_text)
    if isinstance(result, ParseFailure):
        raise GrammarSyntaxError(result)
    return result
