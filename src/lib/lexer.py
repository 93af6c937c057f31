"""
Pygments lexer driven by the neonlight pattern table

Lets the same rules that colour the editor feed any Pygments formatter
(terminal, HTML, ...). The lexer tokenizes with Tokenizer, flattens the
overlapping spans with the editor's last-rule-wins order, and yields one
Pygments token per run.

Token class mapping:
- keyword   → Keyword
- string    → String
- number    → Number
- comment   → Comment
- attribute → Name.Attribute
- variable  → Name.Variable
- def       → Name.Function
- property  → Name.Property
- meta      → Comment.Preproc
- tag       → Name.Tag
- atom      → Name.Constant
- builtin   → Name.Builtin
- type      → Keyword.Type
"""

from typing import Any, Dict, Iterator, Optional, Tuple

from pygments.lexer import Lexer
from pygments.token import (
    _TokenType,
    Text,
    Name,
    String,
    Keyword,
    Comment,
    Number,
)

from ..models.language import Language, language_resolve
from ..models.tokens import TokenClass
from .patterns import rules_get
from .tokenizer import Tokenizer, spans_segment


PYGMENTS_TOKENS: Dict[TokenClass, _TokenType] = {
    TokenClass.KEYWORD: Keyword,
    TokenClass.STRING: String,
    TokenClass.NUMBER: Number,
    TokenClass.COMMENT: Comment,
    TokenClass.ATTRIBUTE: Name.Attribute,
    TokenClass.VARIABLE: Name.Variable,
    TokenClass.DEFINITION: Name.Function,
    TokenClass.PROPERTY: Name.Property,
    TokenClass.META: Comment.Preproc,
    TokenClass.TAG: Name.Tag,
    TokenClass.ATOM: Name.Constant,
    TokenClass.BUILTIN: Name.Builtin,
    TokenClass.TYPE: Keyword.Type,
}


class NeonLexer(Lexer):
    """
    Lexer for any language in the neonlight pattern table

    Example:
        >>> from pygments import highlight
        >>> from pygments.formatters import HtmlFormatter
        >>> highlight("let x = 1", NeonLexer(language="swift"), HtmlFormatter())

    Options:
        language: Language or identifier (default: plaintext, no colouring)
        tokenizer: Tokenizer instance to use
    """

    name = 'Neonlight'
    aliases = ['neonlight']
    filenames: list[str] = []

    def __init__(self, **options: Any) -> None:
        options.setdefault('stripnl', False)
        options.setdefault('ensurenl', False)
        self.language: Optional[Language] = language_resolve(options.pop('language', None))
        self.tokenizer: Tokenizer = options.pop('tokenizer', None) or Tokenizer()
        super().__init__(**options)

    def get_tokens_unprocessed(self, text: str) -> Iterator[Tuple[int, _TokenType, str]]:
        spans = self.tokenizer.spans_compute(text, rules_get(self.language))
        for start, end, token in spans_segment(len(text), spans):
            ttype = PYGMENTS_TOKENS[token] if token is not None else Text
            yield start, ttype, text[start:end]


def get_lexer(language: Optional[str] = None) -> NeonLexer:
    """
    Get a NeonLexer instance for a language

    Returns:
        NeonLexer instance ready for use with Pygments
    """
    return NeonLexer(language=language)
