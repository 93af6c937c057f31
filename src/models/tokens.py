"""
Token classes, pattern rules and highlight spans

The closed vocabulary the pattern table, tokenizer, themes and renderers
share. Every colour lookup goes through TokenClass, so a theme that forgets
a class is caught when the theme is built, not when a span is painted.
"""

from enum import Enum
from dataclasses import dataclass


class TokenClass(Enum):
    """
    Semantic category of a matched span

    Values are the names used in theme.yaml files.
    """
    KEYWORD = "keyword"
    STRING = "string"
    NUMBER = "number"
    COMMENT = "comment"
    ATTRIBUTE = "attribute"
    VARIABLE = "variable"
    DEFINITION = "def"
    PROPERTY = "property"
    META = "meta"
    TAG = "tag"
    ATOM = "atom"
    BUILTIN = "builtin"
    TYPE = "type"


@dataclass(frozen=True)
class PatternRule:
    """
    One entry of a language's pattern table

    Attributes:
        pattern: Regular expression (Python `re` dialect). Compiled with
                 re.MULTILINE so ^ and $ anchor at line boundaries.
        token: Token class painted over every match

    Example:
        PatternRule(r"//.*", TokenClass.COMMENT)
    """
    pattern: str
    token: TokenClass


@dataclass(frozen=True)
class HighlightSpan:
    """
    A matched range in the coordinate space of one text snapshot

    Attributes:
        start: Offset of the first character (inclusive)
        end: Offset one past the last character (exclusive)
        token: Token class of the rule that produced the match
    """
    start: int
    end: int
    token: TokenClass

    @property
    def length(self) -> int:
        return self.end - self.start

    def text_get(self, text: str) -> str:
        """Return the slice of `text` this span covers"""
        return text[self.start:self.end]


class ColorScheme(Enum):
    """Appearance a theme is resolved for"""
    LIGHT = "light"
    DARK = "dark"
