"""
Parser Combinators

Small backtracking combinator toolkit the grammar parser is built from.

A Parser wraps a function taking (state, offset) and returning
(value, new_offset), or raising ParseError at the offset where it gave up.
Every run gets its own ParseState, which remembers the furthest failure that
a repetition or option swallowed so the final report can point at the
deepest position reached.
"""

from typing import Any, Callable, FrozenSet, Iterable, Optional, Tuple, Union

from .model import ParseFailure


ParseFn = Callable[["ParseState", int], Tuple[Any, int]]


class ParseError(Exception):
    """Raised by a parser that cannot match at `offset`."""

    def __init__(self, offset: int, expected: Iterable[str]):
        self.offset = offset
        self.expected: FrozenSet[str] = frozenset(expected)
        super().__init__(f"offset {offset}: expected {', '.join(sorted(self.expected))}")

    def merge(self, other: "ParseError") -> "ParseError":
        """Keep the further of two failures, union their expectations on a tie."""
        if other.offset > self.offset:
            return other
        if other.offset < self.offset:
            return self
        return ParseError(self.offset, self.expected | other.expected)


class ParseState:
    """Input text plus the furthest swallowed failure of one run."""

    def __init__(self, text: str):
        self.text = text
        self.hint: Optional[ParseError] = None

    def note(self, error: ParseError) -> None:
        self.hint = error if self.hint is None else self.hint.merge(error)

    def failure(self, error: ParseError) -> ParseFailure:
        """Build the reportable failure for `error` and any hint at or past it."""
        if self.hint is not None:
            error = error.merge(self.hint)
        offset = error.offset
        # \r\n, \r and \n each end a line
        before = self.text[:offset]
        line = before.count("\n") + before.count("\r") - before.count("\r\n") + 1
        column = offset - (max(before.rfind("\n"), before.rfind("\r")) + 1) + 1
        found = self.text[offset] if offset < len(self.text) else None
        return ParseFailure(
            offset=offset,
            line=line,
            column=column,
            expected=tuple(sorted(error.expected)),
            found=found,
        )


class Parser:
    """A composable parsing function."""

    def __init__(self, fn: ParseFn, name: Optional[str] = None):
        self.fn = fn
        self.name = name or getattr(fn, "__name__", "parser")

    def __call__(self, state: ParseState, offset: int) -> Tuple[Any, int]:
        return self.fn(state, offset)

    def __repr__(self) -> str:
        return f"<Parser {self.name}>"

    def __or__(self, other: "Parser") -> "Parser":
        return alternative(self, other)

    def __rshift__(self, other: "Parser") -> "Parser":
        """Run both, keep the right value."""
        return sequence(self, other).map(lambda values: values[1])

    def __lshift__(self, other: "Parser") -> "Parser":
        """Run both, keep the left value."""
        return sequence(self, other).map(lambda values: values[0])

    def map(self, fn: Callable[[Any], Any]) -> "Parser":
        def run(state, offset):
            value, offset = self(state, offset)
            return fn(value), offset
        return Parser(run, self.name)

    def label(self, description: str) -> "Parser":
        """Report `description` instead of the inner expectations when nothing was consumed."""
        def run(state, offset):
            saved = state.hint
            try:
                return self(state, offset)
            except ParseError as e:
                if e.offset == offset:
                    # inner hints at this offset are covered by the label
                    if state.hint is not None and state.hint.offset <= offset:
                        state.hint = saved
                    raise ParseError(offset, [description]) from None
                raise
        return Parser(run, description)

    def hidden(self) -> "Parser":
        """Drop the hints recorded while this parser succeeds, so it never shows up as an expectation."""
        def run(state, offset):
            saved = state.hint
            result = self(state, offset)
            state.hint = saved
            return result
        return Parser(run, self.name)


def satisfy(predicate: Callable[[str], bool], description: str) -> Parser:
    """Match one character accepted by `predicate`."""
    def run(state, offset):
        if offset < len(state.text) and predicate(state.text[offset]):
            return state.text[offset], offset + 1
        raise ParseError(offset, [description])
    return Parser(run, description)


def char(c: str) -> Parser:
    return satisfy(lambda x: x == c, repr(c))


def string(s: str) -> Parser:
    """Match `s` exactly, failing at the start offset otherwise."""
    def run(state, offset):
        if state.text.startswith(s, offset):
            return s, offset + len(s)
        raise ParseError(offset, [repr(s)])
    return Parser(run, repr(s))


def _eof(state, offset):
    if offset == len(state.text):
        return None, offset
    raise ParseError(offset, ["end of input"])


eof = Parser(_eof, "end of input")


def sequence(*parsers: Parser) -> Parser:
    """Run parsers one after another, collecting their values in a list."""
    def run(state, offset):
        values = []
        for parser in parsers:
            value, offset = parser(state, offset)
            values.append(value)
        return values, offset
    return Parser(run, " ".join(p.name for p in parsers))


def alternative(*parsers: Parser) -> Parser:
    """
    Try parsers in order from the same offset; the first success wins.

    When all of them fail, the furthest failure is raised, with the
    expectations of failures at that same offset merged in.
    """
    def run(state, offset):
        error = None
        for parser in parsers:
            try:
                return parser(state, offset)
            except ParseError as e:
                error = e if error is None else error.merge(e)
        raise error

    return Parser(run, " | ".join(p.name for p in parsers))


def many(parser: Parser) -> Parser:
    """Zero or more repetitions. Stops on failure or when no input was consumed."""
    def run(state, offset):
        values = []
        while True:
            try:
                value, next_offset = parser(state, offset)
            except ParseError as e:
                state.note(e)
                return values, offset
            if next_offset == offset:
                return values, offset
            values.append(value)
            offset = next_offset
    return Parser(run, f"{parser.name}*")


def many1(parser: Parser) -> Parser:
    """One or more repetitions."""
    rest = many(parser)

    def run(state, offset):
        first, offset = parser(state, offset)
        values, offset = rest(state, offset)
        return [first] + values, offset
    return Parser(run, f"{parser.name}+")


def optional(parser: Parser, default: Any = None) -> Parser:
    def run(state, offset):
        try:
            return parser(state, offset)
        except ParseError as e:
            state.note(e)
            return default, offset
    return Parser(run, f"{parser.name}?")


def sep_by1(parser: Parser, separator: Parser) -> Parser:
    """One or more `parser` separated by `separator`, separator values dropped."""
    return sequence(parser, many(separator >> parser)).map(
        lambda values: [values[0]] + values[1]
    )


def run_parser(parser: Parser, text: str) -> Union[Any, ParseFailure]:
    """
    Run `parser` from the start of `text`.

    Returns the parsed value, or a ParseFailure. Input left over after a
    successful match is not an error here; add `eof` to the parser for that.
    """
    state = ParseState(text)
    try:
        value, _ = parser(state, 0)
    except ParseError as e:
        return state.failure(e)
    return value
