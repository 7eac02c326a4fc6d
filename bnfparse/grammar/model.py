"""
Grammar Model

Immutable values produced by the grammar parser.
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union


_NAME_RE = re.compile(r"[A-Za-z][A-Za-z0-9-]*")


def _check_name(name: str, what: str) -> None:
    if not _NAME_RE.fullmatch(name):
        raise ValueError(f"Invalid {what} name: {name!r}")


@dataclass(frozen=True)
class Literal:
    """A fixed string to match verbatim."""
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "literal", "text": self.text}


@dataclass(frozen=True)
class RuleRef:
    """A reference to another rule by name."""
    name: str

    def __post_init__(self):
        _check_name(self.name, "rule reference")

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "rule_ref", "name": self.name}


# A term is exactly one of the two variants above
Term = Union[Literal, RuleRef]
Sequence = Tuple[Term, ...]
Alternation = Tuple[Sequence, ...]


def term_from_dict(data: Dict[str, Any]) -> Term:
    kind = data.get("type")
    if kind == "literal":
        return Literal(data["text"])
    if kind == "rule_ref":
        return RuleRef(data["name"])
    raise ValueError(f"Unknown term type: {kind!r}")


@dataclass(frozen=True)
class RuleDefinition:
    """A named rule: `<name> ::= body`."""
    name: str
    body: Alternation

    def __post_init__(self):
        _check_name(self.name, "rule")
        if not self.body or not all(self.body):
            raise ValueError(f"Rule <{self.name}> needs at least one non-empty alternative")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "alternatives": [[term.to_dict() for term in seq] for seq in self.body],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RuleDefinition":
        body = tuple(
            tuple(term_from_dict(term) for term in seq)
            for seq in data["alternatives"]
        )
        return cls(data["name"], body)


@dataclass(frozen=True)
class GrammarDocument:
    """
    A complete parsed grammar.

    Rules keep their source order. Duplicate names are allowed and kept;
    nothing here checks that referenced rules exist.
    """
    rules: Tuple[RuleDefinition, ...]

    def __post_init__(self):
        if not self.rules:
            raise ValueError("A grammar document needs at least one rule")

    def __iter__(self) -> Iterator[RuleDefinition]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def rule_names(self) -> List[str]:
        return [rule.name for rule in self.rules]

    def get_rule(self, name: str) -> Optional[RuleDefinition]:
        """First definition of `name`, or None."""
        for rule in self.rules:
            if rule.name == name:
                return rule
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {"rules": [rule.to_dict() for rule in self.rules]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GrammarDocument":
        return cls(tuple(RuleDefinition.from_dict(rule) for rule in data["rules"]))


@dataclass(frozen=True)
class ParseFailure:
    """
    Where and why parsing stopped.

    Attributes:
        offset: 0-based character offset of the failure
        line: 1-based line number
        column: 1-based column number
        expected: sorted descriptions of what could have appeared at offset
        found: the character at offset, or None at end of input
    """
    offset: int
    line: int
    column: int
    expected: Tuple[str, ...]
    found: Optional[str] = None

    @property
    def message(self) -> str:
        found = "end of input" if self.found is None else repr(self.found)
        text = f"line {self.line}, column {self.column}: unexpected {found}"
        if self.expected:
            text += f"; expected {_join_alternatives(self.expected)}"
        return text

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        return {
            "offset": self.offset,
            "line": self.line,
            "column": self.column,
            "expected": list(self.expected),
            "found": self.found,
            "message": self.message,
        }


def _join_alternatives(items: Tuple[str, ...]) -> str:
    if len(items) == 1:
        return items[0]
    return ", ".join(items[:-1]) + " or " + items[-1]
