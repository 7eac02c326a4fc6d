"""
Grammar Formatter

Writes a GrammarDocument back out as grammar text that parse_grammar()
reads back to an equal document.
"""

from typing import List

from .model import GrammarDocument, Literal, RuleDefinition, RuleRef, Sequence, Term


def format_term(term: Term) -> str:
    """
    Render one term.

    Literals use double quotes unless the text contains one, in which case
    single quotes are used. Text containing both cannot be written.
    """
    if isinstance(term, RuleRef):
        return f"<{term.name}>"
    if isinstance(term, Literal):
        if '"' not in term.text:
            return f'"{term.text}"'
        if "'" not in term.text:
            return f"'{term.text}'"
        raise ValueError(f"Literal contains both quote characters: {term.text!r}")
    raise TypeError(f"Not a grammar term: {term!r}")


def format_sequence(seq: Sequence) -> str:
    return " ".join(format_term(term) for term in seq)


def format_rule(rule: RuleDefinition) -> str:
    alternatives = " | ".join(format_sequence(seq) for seq in rule.body)
    return f"<{rule.name}> ::= {alternatives}"


def format_grammar(document: GrammarDocument) -> str:
    """Render a document, one rule per line, with a trailing newline."""
    lines: List[str] = [format_rule(rule) for rule in document]
    return "\n".join(lines) + "\n"
