"""Grammar models"""

from typing import List, Optional, Union
from pydantic import BaseModel, Field


class LiteralTerm(BaseModel):
    """A literal string term."""
    type: str = Field("literal", description="Always 'literal'")
    text: str = Field(..., description="Text matched verbatim")


class RuleRefTerm(BaseModel):
    """A reference to another rule."""
    type: str = Field("rule_ref", description="Always 'rule_ref'")
    name: str = Field(..., description="Name of the referenced rule")


class Rule(BaseModel):
    """Model for one rule definition."""
    name: str
    alternatives: List[List[Union[LiteralTerm, RuleRefTerm]]] = Field(
        ..., description="Ordered alternatives, each an ordered list of terms"
    )


class Grammar(BaseModel):
    """Model for a successfully parsed grammar."""
    rules: List[Rule]


class Failure(BaseModel):
    """Model for the position and expectations of a parse failure."""
    offset: int
    line: int
    column: int
    expected: List[str]
    found: Optional[str] = None
    message: str


class ParseErrorResponse(BaseModel):
    """Model for a rejected grammar."""
    error: str = Field(..., description="Human-readable failure message")
    failure: Failure
